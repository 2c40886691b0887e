"""
Answer values.

Inside the engine an answer is one of the tagged variants below. Stored
answers, however, exist in every shape the quiz has ever written:

    "Atlantis:2"                                  bare "<product>:<points>" string
    ["Atlantis:2", "Royal"]                       array of bare strings
    {"Atlantis": 2, "optionId": "a"}              literal product/points pairs
    {"optionId": "a", "scentMappings": {...}}     option id plus resolved weights
    {"optionId": "a"}                             option id only; weights come from
                                                  the question (QuizFlow.resolve_answers)
    {"type": "single_choice", "option_id": ...}   what to_dict() writes today

coerce_answer() is the only place that looks at those shapes.
"""
import logging
import math
from dataclasses import dataclass, field

from .questions import SINGLE_CHOICE, MULTI_CHOICE, SCALE

logger = logging.getLogger(__name__)

LEGACY = 'legacy'

WEIGHT_KEYS = ('scent_weights', 'scentWeights', 'scentMappings', 'scent_mappings')
OPTION_ID_KEYS = ('option_id', 'optionId')
OPTION_IDS_KEYS = ('option_ids', 'optionIds')
SCALE_VALUE_KEYS = ('scale_value', 'scaleValue')

# Keys that never count as literal product/points pairs
RESERVED_KEYS = set(OPTION_ID_KEYS + OPTION_IDS_KEYS)


def parse_number(value):
    """Return value as an int or float, or None when it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def merge_weights(weight_maps):
    """Sum several product->weight maps into a new one, first-seen key order."""
    combined = {}
    for weights in weight_maps:
        for product, weight in weights.items():
            combined[product] = combined.get(product, 0) + weight
    return combined


def _clean_weights(raw):
    weights = {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring malformed scent weights: %r", raw)
        return weights
    for product, weight in raw.items():
        number = parse_number(weight)
        if number is None:
            logger.warning("Ignoring non-numeric weight %r for product %r", weight, product)
            continue
        weights[str(product)] = number
    return weights


@dataclass(frozen=True)
class SingleChoiceAnswer:
    option_id: str
    scent_weights: dict = field(default_factory=dict)

    type = SINGLE_CHOICE

    @property
    def selected_option_id(self):
        return self.option_id

    @property
    def is_answered(self):
        return True

    def to_dict(self):
        return {
            'type': self.type,
            'option_id': self.option_id,
            'scent_weights': dict(self.scent_weights),
        }


@dataclass(frozen=True)
class MultiChoiceAnswer:
    option_ids: tuple = ()
    scent_weights: dict = field(default_factory=dict)

    type = MULTI_CHOICE

    @property
    def selected_option_id(self):
        # Multi-choice answers never select a branch
        return None

    @property
    def is_answered(self):
        return bool(self.option_ids)

    def to_dict(self):
        return {
            'type': self.type,
            'option_ids': list(self.option_ids),
            'scent_weights': dict(self.scent_weights),
        }


@dataclass(frozen=True)
class ScaleAnswer:
    option_id: str
    scale_value: object = None
    scent_weights: dict = field(default_factory=dict)

    type = SCALE

    @property
    def selected_option_id(self):
        return self.option_id

    @property
    def is_answered(self):
        return True

    def to_dict(self):
        return {
            'type': self.type,
            'option_id': self.option_id,
            'scale_value': self.scale_value,
            'scent_weights': dict(self.scent_weights),
        }


@dataclass(frozen=True)
class LegacyAnswer:
    """Weights recovered from an old answer encoding; never produced by the normalizer."""
    scent_weights: dict = field(default_factory=dict)
    option_id: str = None

    type = LEGACY

    @property
    def selected_option_id(self):
        return self.option_id

    @property
    def is_answered(self):
        return True

    def to_dict(self):
        data = {'type': self.type, 'scent_weights': dict(self.scent_weights)}
        if self.option_id is not None:
            data['option_id'] = self.option_id
        return data


ANSWER_TYPES = (SingleChoiceAnswer, MultiChoiceAnswer, ScaleAnswer, LegacyAnswer)


def parse_legacy_selection(selection):
    """
    Parse a bare "<product>:<points>" string. Points default to 1 when they are
    missing or cannot be parsed.
    """
    product, _, points = str(selection).partition(':')
    number = parse_number(points)
    return product, (1 if number is None else number)


def _first(data, keys):
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _coerce_mapping(value):
    tag = value.get('type')
    option_id = _first(value, OPTION_ID_KEYS)
    option_ids = _first(value, OPTION_IDS_KEYS)
    raw_weights = _first(value, WEIGHT_KEYS)
    literal_keys = [k for k in value if k not in RESERVED_KEYS and k not in SCALE_VALUE_KEYS]

    if raw_weights is None and tag is None and literal_keys:
        # Oldest shape: every other key is a literal product/points pair
        weights = {}
        for key, points in value.items():
            if key not in literal_keys:
                continue
            number = parse_number(points)
            if number is None:
                logger.warning("Ignoring non-numeric points %r for product %r", points, key)
                continue
            weights[str(key)] = weights.get(str(key), 0) + number
        return LegacyAnswer(weights, str(option_id) if option_id is not None else None)

    weights = _clean_weights(raw_weights or {})

    if tag == MULTI_CHOICE or (tag is None and option_ids is not None):
        return MultiChoiceAnswer(tuple(str(o) for o in (option_ids or [])), weights)
    if option_id is not None and (tag == SCALE or (tag is None and _first(value, SCALE_VALUE_KEYS) is not None)):
        return ScaleAnswer(str(option_id), _first(value, SCALE_VALUE_KEYS), weights)
    if option_id is not None and tag in (None, SINGLE_CHOICE):
        return SingleChoiceAnswer(str(option_id), weights)
    return LegacyAnswer(weights, str(option_id) if option_id is not None else None)


def coerce_answer(value):
    """
    Read any stored answer shape into one of the tagged variants.
    Returns None for empty values.
    """
    if value is None:
        return None
    if isinstance(value, ANSWER_TYPES):
        return value
    if isinstance(value, str):
        product, points = parse_legacy_selection(value)
        return LegacyAnswer({product: points})
    if isinstance(value, (list, tuple)):
        weights = {}
        for selection in value:
            product, points = parse_legacy_selection(selection)
            weights[product] = weights.get(product, 0) + points
        return LegacyAnswer(weights)
    if isinstance(value, dict):
        return _coerce_mapping(value)
    logger.warning("Ignoring answer of unsupported shape: %r", value)
    return None


def coerce_answers(raw_answers):
    """Coerce a whole answers map, keyed by question id as string."""
    answers = {}
    for question_id, value in (raw_answers or {}).items():
        answer = coerce_answer(value)
        if answer is not None:
            answers[str(question_id)] = answer
    return answers
