class QuestionMixin:
    def get_questions(self):
        """
        All quiz questions, raw, sorted by their 'order' field.
        Coercion and graph validation happen in core.quiz.
        """
        questions = self.get_collection('questions')
        return sorted(questions, key=lambda q: q.get('order', 0))
