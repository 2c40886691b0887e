import logging

from firebase_admin import firestore
from google.cloud.firestore import FieldFilter

logger = logging.getLogger(__name__)


class QuizResultMixin:
    def save_quiz_result(self, payload):
        """
        Store a completed quiz.
        payload: {user_id, winning_product_id, zodiac_sign, answers, scores}
        Returns the result document ID.
        """
        result_data = {
            'user_id': payload['user_id'],
            'winning_product_id': payload['winning_product_id'],
            'zodiac_sign': payload.get('zodiac_sign'),
            'answers': payload.get('answers', {}),
            'scores': payload.get('scores', {}),
            'created_at': firestore.SERVER_TIMESTAMP,
        }

        _, doc_ref = self.db.collection('quiz_results').add(result_data)
        logger.info("Saved quiz result %s for user %s", doc_ref.id, payload['user_id'])

        # Keep the latest match on the user profile
        if payload.get('user_id'):
            self.db.collection('users').document(str(payload['user_id'])).set({
                'latest_scent_id': payload['winning_product_id'],
                'latest_zodiac_sign': payload.get('zodiac_sign'),
                'quiz_completed_at': firestore.SERVER_TIMESTAMP,
            }, merge=True)

        return doc_ref.id

    def get_quiz_results_for_user(self, user_id, limit=20):
        """
        Most recent results first.
        """
        query = self.db.collection('quiz_results').where(
            filter=FieldFilter('user_id', '==', str(user_id))
        ).order_by('created_at', direction=firestore.Query.DESCENDING).limit(limit)

        return [{**doc.to_dict(), 'id': doc.id} for doc in query.stream()]
