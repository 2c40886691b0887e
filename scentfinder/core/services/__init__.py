from .base import BaseFirestoreService
from .users import UserMixin
from .questions import QuestionMixin
from .scents import ScentMixin
from .results import QuizResultMixin
from .notifications import NotificationMixin

class FirestoreService(
    UserMixin,
    QuestionMixin,
    ScentMixin,
    QuizResultMixin,
    NotificationMixin,
    BaseFirestoreService
):
    """
    Main service class combining all mixins.
    """
    pass

# Create singleton instance
db = FirestoreService()
