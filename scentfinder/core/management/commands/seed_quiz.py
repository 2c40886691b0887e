from django.core.management.base import BaseCommand
from core.services import db
from core.quiz import validate_questions, QuizError
from core.quiz_data import DEFAULT_SCENTS, DEFAULT_QUESTIONS, DEFAULT_ZODIAC_MAPPINGS


class Command(BaseCommand):
    help = 'Seeds the scent catalog, quiz questions and zodiac mappings to Firestore'

    def handle(self, *args, **options):
        # Refuse to write a question set that would not load
        try:
            validate_questions(DEFAULT_QUESTIONS)
        except QuizError as e:
            self.stdout.write(self.style.ERROR(f'Default questions are invalid: {e}'))
            return

        self.stdout.write('Seeding Scents...')
        for position, scent in enumerate(DEFAULT_SCENTS):
            try:
                data = {**scent, 'display_order': position}
                db.create_document('scents', data, doc_id=scent['id'])
                self.stdout.write(self.style.SUCCESS(f'Successfully seeded scent: {scent["name"]}'))
            except Exception as e:
                self.stdout.write(self.style.ERROR(f'Error seeding scent {scent["name"]}: {e}'))

        self.stdout.write('Seeding Quiz Questions...')
        for q in DEFAULT_QUESTIONS:
            try:
                db.create_document('questions', q, doc_id=q['id'])
                self.stdout.write(self.style.SUCCESS(f'Successfully seeded question: {q["id"]}'))
            except Exception as e:
                self.stdout.write(self.style.ERROR(f'Error seeding question {q["id"]}: {e}'))

        self.stdout.write('Seeding Zodiac Mappings...')
        scent_ids = {s['id'] for s in DEFAULT_SCENTS}
        for sign, pairings in DEFAULT_ZODIAC_MAPPINGS.items():
            for scent_id, description in pairings.items():
                if scent_id not in scent_ids:
                    self.stdout.write(self.style.WARNING(f'Skipping {sign}: unknown scent {scent_id}'))
                    continue
                try:
                    doc_id = f"{sign.lower()}_{scent_id}"
                    db.create_document('zodiac_mappings', {
                        'zodiac_sign': sign,
                        'scent_id': scent_id,
                        'description': description,
                    }, doc_id=doc_id)
                    self.stdout.write(self.style.SUCCESS(f'Successfully seeded mapping: {sign} -> {scent_id}'))
                except Exception as e:
                    self.stdout.write(self.style.ERROR(f'Error seeding mapping {sign} -> {scent_id}: {e}'))

        self.stdout.write(self.style.SUCCESS('Seeding complete!'))
