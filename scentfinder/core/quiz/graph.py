"""
Question graph walker.

A quiz is either branching (exactly one root question; the root's answer
selects which follow-up questions are shown) or flat (no root; every
question is shown in `order`). Either way the path is closed by the
synthetic zodiac step, so `total` is always len(path) + 1.

Only one level of branching is resolved: children of the root. Questions
hanging off a child are never reached.
"""
import logging
from collections import namedtuple

from .answers import coerce_answer
from .errors import InvalidQuizConfiguration, NoReachableQuestion
from .questions import MULTI_CHOICE, ZODIAC_INPUT, coerce_question, find_option

logger = logging.getLogger(__name__)

ZODIAC_STEP_ID = 'zodiac'
DEFAULT_ZODIAC_PROMPT = 'When were you born?'

QuestionPath = namedtuple('QuestionPath', ['questions', 'total'])


def _by_order(questions):
    # sorted() is stable, questions sharing an order keep their source order
    return sorted(questions, key=lambda q: q['order'])


def find_root(questions):
    for question in questions:
        if question['is_root']:
            return question
    return None


def validate_questions(raw_questions):
    """
    Coerce and check a question set at quiz-load time.

    A broken graph must fail here, loudly, rather than produce an empty path
    and a quiz with nothing to show. Returns the canonical question list.
    """
    questions = [coerce_question(raw) for raw in (raw_questions or [])]
    if not questions:
        raise InvalidQuizConfiguration('The quiz has no questions')

    by_id = {}
    for question in questions:
        if question['id'] in by_id:
            raise InvalidQuizConfiguration(f"Duplicate question id '{question['id']}'")
        by_id[question['id']] = question

        if question['type'] != ZODIAC_INPUT and not question['options']:
            raise InvalidQuizConfiguration(f"Question '{question['id']}' has no options")
        option_ids = [o['id'] for o in question['options']]
        if len(option_ids) != len(set(option_ids)):
            raise InvalidQuizConfiguration(f"Question '{question['id']}' has duplicate option ids")

    roots = [q for q in questions if q['is_root']]
    if len(roots) > 1:
        raise InvalidQuizConfiguration(
            'More than one root question: ' + ', '.join(q['id'] for q in roots)
        )
    if not roots:
        # Flat mode ignores parent links entirely
        return questions

    root = roots[0]
    if root['type'] in (MULTI_CHOICE, ZODIAC_INPUT):
        raise InvalidQuizConfiguration(
            f"Root question '{root['id']}' must be single-choice or scale, not {root['type']}"
        )

    for question in questions:
        parent_id = question['parent_id']
        if question is root or parent_id is None:
            continue
        parent = by_id.get(parent_id)
        if parent is None:
            raise InvalidQuizConfiguration(
                f"Question '{question['id']}' references missing parent '{parent_id}'"
            )
        if question['parent_option_id'] is None or find_option(parent, question['parent_option_id']) is None:
            raise InvalidQuizConfiguration(
                f"Question '{question['id']}' references missing option "
                f"'{question['parent_option_id']}' of question '{parent_id}'"
            )
        if parent is not root:
            logger.warning(
                "Question '%s' branches from non-root question '%s' and will never be shown",
                question['id'], parent_id,
            )

    orphans = [q['id'] for q in questions if q is not root and q['parent_id'] is None and q['type'] != ZODIAC_INPUT]
    if orphans:
        logger.warning("Questions without a parent are unreachable in a branching quiz: %s", ', '.join(orphans))

    return questions


def compute_path(questions, answers):
    """
    Ordered list of questions to present given the current answers.

    Branching: [root] until the root is answered, then [root] followed by
    every question whose (parent_id, parent_option_id) matches the root's
    selected option, sorted by order.
    Flat: every question, sorted by order.
    """
    playable = [q for q in questions if q['type'] != ZODIAC_INPUT]
    root = find_root(playable)

    if root is None:
        path = _by_order(playable)
        return QuestionPath(path, len(path) + 1)

    path = [root]
    root_answer = coerce_answer((answers or {}).get(root['id']))
    selected = root_answer.selected_option_id if root_answer is not None else None
    if selected is not None:
        children = [
            q for q in playable
            if q['parent_id'] == root['id'] and q['parent_option_id'] == selected
        ]
        path.extend(_by_order(children))

    return QuestionPath(path, len(path) + 1)


def zodiac_step(questions=None):
    """The synthetic closing step, reusing the prompt of a stored zodiac question if any."""
    prompt = DEFAULT_ZODIAC_PROMPT
    for question in questions or []:
        if question['type'] == ZODIAC_INPUT and question.get('text'):
            prompt = question['text']
            break
    return {'id': ZODIAC_STEP_ID, 'type': ZODIAC_INPUT, 'text': prompt, 'options': []}


def question_at(path, index, questions=None):
    """
    Question shown at 1-based position `index`: a path entry, or the zodiac
    step right after the last one. Anything else raises NoReachableQuestion.
    """
    if 1 <= index <= len(path.questions):
        return path.questions[index - 1]
    if index == len(path.questions) + 1:
        return zodiac_step(questions)
    raise NoReachableQuestion(index, path.total)
