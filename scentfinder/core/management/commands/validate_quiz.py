from django.core.management.base import BaseCommand, CommandError
from core.services import db
from core.quiz import QuizFlow, QuizError, SingleChoiceAnswer, compute_path


class Command(BaseCommand):
    help = 'Loads the live quiz from Firestore, validates it and prints every branch'

    def handle(self, *args, **options):
        try:
            flow = QuizFlow(db.get_questions(), db.get_scents(), zodiac_mappings=db.get_zodiac_mappings())
        except QuizError as e:
            raise CommandError(f'Quiz configuration is invalid: {e}')

        self.stdout.write(f'{len(flow.questions)} questions, {len(flow.catalog)} scents')

        if flow.root is None:
            path = compute_path(flow.questions, {})
            self.stdout.write(self.style.WARNING('No root question: running in flat mode'))
            self.stdout.write(f'  path: {" -> ".join(q["id"] for q in path.questions)} (total {path.total})')
            return

        self.stdout.write(f'Root question: {flow.root["id"]}')
        for option in flow.root['options']:
            answers = {flow.root['id']: SingleChoiceAnswer(option['id'], option['scent_weights'])}
            path = compute_path(flow.questions, answers)
            ids = ' -> '.join(q['id'] for q in path.questions)
            line = f'  {option["id"]}: {ids} (total {path.total})'
            if len(path.questions) == 1:
                self.stdout.write(self.style.WARNING(line + ' [no follow-up questions]'))
            else:
                self.stdout.write(line)

        self.stdout.write(self.style.SUCCESS('Quiz is valid'))
