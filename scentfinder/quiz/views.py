import json
import logging

from django.conf import settings
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST, require_GET

from core.quiz import in_background
from core.quiz.questions import public_question
from core.services import db
from .decorators import quiz_view, save_session, clear_session, load_session, error_response

logger = logging.getLogger(__name__)


def _payload(request):
    """JSON body if there is one, form data otherwise."""
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except json.JSONDecodeError:
            return {}
        return data if isinstance(data, dict) else {}
    data = request.POST.dict()
    # Repeated field: a multi-choice selection
    if 'option_ids' in request.POST:
        data['option_ids'] = request.POST.getlist('option_ids')
    return data


def _state(flow, session):
    index = min(max(session.current_question_index, 1), session.total_question_count)
    question = flow.current_question(session)
    answer = session.answers.get(question['id'])
    return {
        'success': True,
        'state': flow.state(session).value,
        'current_question_index': index,
        'total_question_count': session.total_question_count,
        'question': public_question(question),
        'answer': answer.to_dict() if answer else None,
        'answered': flow.is_current_answered(session),
        'zodiac_sign': session.zodiac_sign.to_dict() if session.zodiac_sign else None,
        'completed': session.completed,
    }


@require_GET
@quiz_view(require_session=False)
def questions(request, flow, session):
    """All playable questions of the live quiz, without scent weights."""
    return JsonResponse({
        'success': True,
        'questions': [public_question(q) for q in flow.questions],
    })


@csrf_exempt
@require_POST
@quiz_view(require_session=False)
def start(request, flow, session):
    """Create the visitor's user record and a fresh quiz session."""
    data = _payload(request)
    name = (data.get('name') or '').strip()
    email = (data.get('email') or '').strip()
    if not name or not email:
        return error_response('Name and email are required')

    subscribe = data.get('subscribe_to_newsletter') in (True, 'true', 'on', '1', 1)
    try:
        user_id = db.create_quiz_user(name, email, subscribe)
    except Exception:
        logger.exception("Failed to create quiz user")
        return error_response('Failed to create user', status=500)

    session = flow.start({'id': user_id, 'name': name, 'email': email})
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@require_GET
@quiz_view()
def state(request, flow, session):
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
@quiz_view()
def answer(request, flow, session):
    """
    Answer the current question.
    Body: {"selection": "<option id>"} or {"selection": ["<id>", ...]} for
    multi-choice; "option_id", "option_ids" and "scale_value" are accepted too.
    """
    data = _payload(request)
    selection = None
    for key in ('selection', 'option_ids', 'option_id', 'scale_value'):
        if data.get(key) is not None:
            selection = data[key]
            break
    if selection is None:
        return error_response('No selection given')

    flow.answer(session, selection)
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
@quiz_view()
def toggle(request, flow, session):
    """Select or deselect one option of the current multi-choice question."""
    option_id = _payload(request).get('option_id')
    if option_id is None:
        return error_response('No option given')

    flow.toggle(session, option_id)
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
@quiz_view()
def zodiac(request, flow, session):
    data = _payload(request)
    flow.answer_zodiac(session, data.get('month'), data.get('day'))
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
@quiz_view()
def next_question(request, flow, session):
    flow.advance(session)
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
@quiz_view()
def previous_question(request, flow, session):
    flow.retreat(session)
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
@quiz_view()
def submit(request, flow, session):
    """Score the quiz, store the result in the session and hand it to Firestore."""
    submitter = db.save_quiz_result
    if settings.QUIZ_SUBMIT_IN_BACKGROUND:
        submitter = in_background(submitter)

    flow.submit(session, submitter=submitter)
    save_session(request, session)
    return JsonResponse({'success': True, 'result': session.result})


@require_GET
def result(request):
    session = load_session(request)
    if session is None or not session.completed:
        return error_response('No completed quiz', status=404)
    return JsonResponse({'success': True, 'result': session.result})


@csrf_exempt
@require_POST
@quiz_view()
def retake(request, flow, session):
    session = flow.retake(session)
    save_session(request, session)
    return JsonResponse(_state(flow, session))


@csrf_exempt
@require_POST
def reset(request):
    clear_session(request)
    return JsonResponse({'success': True})


@csrf_exempt
@require_POST
def email_results(request):
    """Email the finished result to the visitor (or to an address they give)."""
    session = load_session(request)
    if session is None or not session.completed:
        return error_response('No completed quiz', status=404)

    data = _payload(request)
    user = session.user or {}
    email = (data.get('email') or user.get('email') or '').strip()
    if not email:
        return error_response('Email is required')

    quiz_result = session.result
    mail_id = db.send_results_email(
        email,
        user.get('name'),
        quiz_result['product'],
        zodiac_sign=quiz_result.get('zodiac_sign'),
        zodiac_description=quiz_result.get('zodiac_description'),
    )
    if not mail_id:
        return error_response('Failed to send email', status=500)
    return JsonResponse({'success': True, 'mail_id': mail_id})


@require_GET
def user_results(request, user_id):
    try:
        if db.get_user_profile(user_id) is None:
            return error_response('Unknown user', status=404)
        results = db.get_quiz_results_for_user(user_id)
    except Exception:
        logger.exception("Failed to fetch quiz results for user %s", user_id)
        return error_response('Failed to fetch quiz results', status=500)
    for item in results:
        created_at = item.get('created_at')
        if hasattr(created_at, 'isoformat'):
            item['created_at'] = created_at.isoformat()
    return JsonResponse({'success': True, 'results': results})
