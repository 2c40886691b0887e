from .errors import (
    QuizError,
    InvalidQuizConfiguration,
    UnknownOption,
    NoReachableQuestion,
    AggregationEmpty,
    InvalidDate,
    IllegalTransition,
)
from .answers import (
    SingleChoiceAnswer,
    MultiChoiceAnswer,
    ScaleAnswer,
    LegacyAnswer,
    coerce_answer,
    coerce_answers,
)
from .normalizer import normalize, toggle_option
from .scoring import aggregate, select_winner, resolve_product
from .graph import compute_path, question_at, validate_questions, zodiac_step, ZODIAC_STEP_ID
from .zodiac import ZodiacSign, resolve_zodiac_sign, validate_birth_date
from .session import QuizSession, QuizFlow, QuizState
from .results import in_background
