from firebase_admin import firestore


class UserMixin:
    def create_quiz_user(self, name, email, subscribe_to_newsletter=False):
        """
        Store the identity info a visitor gives before starting the quiz.
        Returns the new user document ID.
        """
        user_data = {
            'name': name.strip(),
            'email': email.strip().lower(),
            'subscribe_to_newsletter': bool(subscribe_to_newsletter),
            'created_at': firestore.SERVER_TIMESTAMP,
        }
        return self.create_document('users', user_data)

    def get_user_profile(self, uid):
        return self.get_document('users', uid)
