import logging
from functools import wraps

from django.conf import settings
from django.http import JsonResponse

from core.quiz import QuizError, QuizFlow, QuizSession, InvalidQuizConfiguration
from core.services import db

logger = logging.getLogger(__name__)


def load_quiz_flow():
    """Build the quiz from the live question set and catalog."""
    return QuizFlow(
        db.get_questions(),
        db.get_scents(),
        zodiac_mappings=db.get_zodiac_mappings(),
        similar_limit=settings.QUIZ_SIMILAR_PRODUCTS,
    )


def load_session(request):
    data = request.session.get(settings.QUIZ_SESSION_KEY)
    if not data:
        return None
    return QuizSession.from_dict(data)


def save_session(request, session):
    request.session[settings.QUIZ_SESSION_KEY] = session.to_dict()


def clear_session(request):
    request.session.pop(settings.QUIZ_SESSION_KEY, None)


def error_response(message, status=400, code=None):
    data = {'success': False, 'error': message}
    if code:
        data['code'] = code
    return JsonResponse(data, status=status)


def quiz_view(require_session=True):
    """
    Decorator for quiz endpoints.

    Loads the quiz (a broken configuration is a 500, logged at error level)
    and the visitor's session, then calls view(request, flow, session, ...).
    QuizError raised by the view becomes a 400; the session is only written
    back by the view itself, so a failed transition leaves it unchanged.

    Usage:
        @quiz_view()
        def my_view(request, flow, session):
            ...
    """
    def decorator(view_func):
        @wraps(view_func)
        def _wrapped_view(request, *args, **kwargs):
            try:
                flow = load_quiz_flow()
            except InvalidQuizConfiguration as e:
                logger.error("Quiz configuration is invalid: %s", e)
                return error_response(str(e), status=500, code='InvalidQuizConfiguration')
            except Exception:
                logger.exception("Failed to load quiz definition")
                return error_response('Failed to load quiz', status=500)

            session = load_session(request)
            if require_session and session is None:
                return error_response('No quiz in progress', code='NoSession')
            if session is not None and not session.completed:
                flow.resolve_answers(session)

            try:
                return view_func(request, flow, session, *args, **kwargs)
            except QuizError as e:
                return error_response(str(e), code=type(e).__name__)
        return _wrapped_view
    return decorator
