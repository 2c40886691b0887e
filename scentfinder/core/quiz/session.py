"""
Quiz session state machine.

A QuizSession is plain data owned by the caller (the Django session, in
practice). QuizFlow holds the read-only quiz definition and implements the
transitions; every transition takes the session, mutates it, and returns it.

    AWAITING_ROOT -> (ANSWERING_BRANCH)* -> AWAITING_ZODIAC -> COMPLETE

Positions are 1-based. total == len(path) + 1; the last position is the
zodiac step.
"""
import enum
import logging
from dataclasses import dataclass, field

from .answers import coerce_answers
from .errors import IllegalTransition, InvalidQuizConfiguration, QuizError
from .graph import compute_path, find_root, question_at, validate_questions, ZODIAC_STEP_ID
from .normalizer import normalize, toggle_option
from .questions import ZODIAC_INPUT
from .results import build_result, hand_off
from .scoring import aggregate, resolve_product
from .zodiac import get_sign, resolve_zodiac_sign, validate_birth_date

logger = logging.getLogger(__name__)


class QuizState(enum.Enum):
    AWAITING_ROOT = 'awaiting_root'
    ANSWERING_BRANCH = 'answering_branch'
    AWAITING_ZODIAC = 'awaiting_zodiac'
    COMPLETE = 'complete'


@dataclass
class QuizSession:
    user: dict = None
    current_question_index: int = 1
    answers: dict = field(default_factory=dict)
    zodiac_sign: object = None
    birth_date: tuple = None
    question_path: list = field(default_factory=list)
    total_question_count: int = 1
    completed: bool = False
    result: dict = None

    @property
    def user_id(self):
        return (self.user or {}).get('id')

    def to_dict(self):
        """Plain JSON-serializable state for the session store."""
        return {
            'user': self.user,
            'current_question_index': self.current_question_index,
            'answers': {qid: answer.to_dict() for qid, answer in self.answers.items()},
            'zodiac_sign': self.zodiac_sign.name if self.zodiac_sign else None,
            'birth_date': list(self.birth_date) if self.birth_date else None,
            'question_path': list(self.question_path),
            'total_question_count': self.total_question_count,
            'completed': self.completed,
            'result': self.result,
        }

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        birth_date = data.get('birth_date')
        return cls(
            user=data.get('user'),
            current_question_index=int(data.get('current_question_index') or 1),
            answers=coerce_answers(data.get('answers')),
            zodiac_sign=get_sign(data.get('zodiac_sign')) if data.get('zodiac_sign') else None,
            birth_date=tuple(birth_date) if birth_date else None,
            question_path=list(data.get('question_path') or []),
            total_question_count=int(data.get('total_question_count') or 1),
            completed=bool(data.get('completed')),
            result=data.get('result'),
        )


class QuizFlow:
    """
    Transitions over a QuizSession for one loaded quiz.

    `questions` and `catalog` come from the question source and the product
    catalog; both are validated here so a broken quiz fails at load time.
    """

    def __init__(self, questions, catalog, zodiac_mappings=None, similar_limit=3):
        self.questions = validate_questions(questions)
        if not catalog:
            raise InvalidQuizConfiguration('The product catalog is empty')
        self.catalog = list(catalog)
        self.zodiac_mappings = zodiac_mappings or {}
        self.similar_limit = similar_limit
        self.root = find_root([q for q in self.questions if q['type'] != ZODIAC_INPUT])
        self._by_id = {q['id']: q for q in self.questions}

    # --- path ---

    def path(self, session):
        return compute_path(self.questions, session.answers)

    def _refresh_path(self, session):
        path = self.path(session)
        session.question_path = [q['id'] for q in path.questions]
        session.total_question_count = path.total
        return path

    def current_question(self, session):
        """Question dict at the session's position, or the synthetic zodiac step."""
        path = self.path(session)
        index = min(max(session.current_question_index, 1), path.total)
        return question_at(path, index, self.questions)

    def state(self, session):
        if session.completed:
            return QuizState.COMPLETE
        path = self.path(session)
        index = min(max(session.current_question_index, 1), path.total)
        if index > len(path.questions):
            return QuizState.AWAITING_ZODIAC
        if self.root is not None and index == 1:
            return QuizState.AWAITING_ROOT
        return QuizState.ANSWERING_BRANCH

    def is_current_answered(self, session):
        question = self.current_question(session)
        if question['id'] == ZODIAC_STEP_ID:
            return session.zodiac_sign is not None
        answer = session.answers.get(question['id'])
        return answer is not None and answer.is_answered

    # --- lifecycle ---

    def start(self, user):
        """New session for a user who just submitted their identity info."""
        session = QuizSession(user=user)
        self._refresh_path(session)
        return session

    def retake(self, session):
        """Back to the first question with no answers; the user is kept."""
        return self.start(session.user)

    def _require_open(self, session):
        if session.completed:
            raise IllegalTransition('The quiz is already complete')

    def _clamp(self, session):
        session.current_question_index = min(max(session.current_question_index, 1), session.total_question_count)

    # --- answering ---

    def _record(self, session, question, answer):
        previous = session.answers.get(question['id'])
        session.answers[question['id']] = answer

        if self.root is not None and question['id'] == self.root['id']:
            old_option = previous.selected_option_id if previous is not None else None
            if old_option != answer.selected_option_id:
                logger.debug(
                    "Root answer changed from %s to %s, recomputing path",
                    old_option, answer.selected_option_id,
                )

        path = self._refresh_path(session)
        reachable = {q['id'] for q in path.questions}
        stale = [qid for qid in session.answers if qid not in reachable]
        for qid in stale:
            del session.answers[qid]
        if stale:
            logger.debug("Discarded answers no longer on the path: %s", ', '.join(stale))
        return session

    def resolve_answers(self, session):
        """
        Fill in weights for stored answers that only name their option(s).
        Weights come from the current question definitions; an answer whose
        option no longer exists is logged and left as it is.
        """
        for qid, answer in list(session.answers.items()):
            if answer.scent_weights:
                continue
            question = self._by_id.get(qid)
            selection = getattr(answer, 'option_ids', None) or answer.selected_option_id
            if question is None or not selection:
                continue
            try:
                session.answers[qid] = normalize(question, selection)
            except QuizError as e:
                logger.warning("Could not resolve stored answer for question %s: %s", qid, e)
        return session

    def _current_choice_question(self, session):
        self._require_open(session)
        question = self.current_question(session)
        if question['id'] == ZODIAC_STEP_ID:
            raise IllegalTransition('The current step is the zodiac step')
        return question

    def answer(self, session, raw_selection):
        """Record an answer for the current question. UnknownOption leaves the session untouched."""
        question = self._current_choice_question(session)
        answer = normalize(question, raw_selection)
        return self._record(session, question, answer)

    def toggle(self, session, option_id):
        """Flip one option of the current multi-choice question."""
        question = self._current_choice_question(session)
        answer = toggle_option(question, session.answers.get(question['id']), option_id)
        return self._record(session, question, answer)

    def answer_zodiac(self, session, month, day):
        self._require_open(session)
        question = self.current_question(session)
        if question['id'] != ZODIAC_STEP_ID:
            raise IllegalTransition('The zodiac step has not been reached')
        month, day = validate_birth_date(month, day)
        session.zodiac_sign = resolve_zodiac_sign(month, day)
        session.birth_date = (month, day)
        return session

    # --- navigation ---

    def advance(self, session):
        self._require_open(session)
        self._refresh_path(session)
        self._clamp(session)
        if not self.is_current_answered(session):
            raise IllegalTransition('Answer the current question before moving on')
        session.current_question_index = min(session.current_question_index + 1, session.total_question_count)
        return session

    def retreat(self, session):
        self._require_open(session)
        self._refresh_path(session)
        self._clamp(session)
        session.current_question_index = max(session.current_question_index - 1, 1)
        return session

    # --- completion ---

    def submit(self, session, submitter=None):
        """
        Score the session and mark it complete.

        Only legal on the zodiac step once a sign has been recorded. The
        result is handed to `submitter` without waiting on it; a failing
        submitter is logged and does not undo completion.
        """
        self._require_open(session)
        self._refresh_path(session)
        self._clamp(session)
        if session.current_question_index != session.total_question_count:
            raise IllegalTransition('The quiz can only be submitted from the last step')
        if session.zodiac_sign is None:
            raise IllegalTransition('Enter a birth date before submitting')

        self.resolve_answers(session)
        scores = aggregate(session.answers)
        product = resolve_product(scores, self.catalog)
        result = build_result(
            session,
            product,
            scores,
            catalog=self.catalog,
            zodiac_mappings=self.zodiac_mappings,
            similar_limit=self.similar_limit,
        )

        session.completed = True
        session.result = result

        if submitter is not None:
            hand_off(submitter, result)
        return session
