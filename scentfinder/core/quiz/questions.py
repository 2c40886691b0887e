"""
Question record coercion.

Firestore question documents come in two generations of field names. The
admin screens used to write camelCase fields (isMainQuestion, scentMappings,
scaleMin...) and the current ones write snake_case. Everything past this
module only sees the canonical shape produced by coerce_question().
"""
from .errors import InvalidQuizConfiguration

SINGLE_CHOICE = 'single_choice'
MULTI_CHOICE = 'multi_choice'
SCALE = 'scale'
ZODIAC_INPUT = 'zodiac_input'

QUESTION_TYPES = (SINGLE_CHOICE, MULTI_CHOICE, SCALE, ZODIAC_INPUT)

# Legacy type names still present in stored documents
TYPE_ALIASES = {
    'single-choice': SINGLE_CHOICE,
    'multiple_choice': SINGLE_CHOICE,
    'image_choice': SINGLE_CHOICE,
    'gender_choice': SINGLE_CHOICE,
    'multi-choice': MULTI_CHOICE,
    'checkbox': MULTI_CHOICE,
    'rating': SCALE,
    'rating_scale': SCALE,
    'slider': SCALE,
    'zodiac-input': ZODIAC_INPUT,
    'zodiac': ZODIAC_INPUT,
}


def _first(record, *keys, default=None):
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def _coerce_weights(raw, question_id, option_id):
    if not raw:
        return {}
    if not isinstance(raw, dict):
        raise InvalidQuizConfiguration(
            f"Option '{option_id}' of question '{question_id}' has malformed scent weights"
        )
    weights = {}
    for product, weight in raw.items():
        if isinstance(weight, (int, float)) and not isinstance(weight, bool):
            weights[str(product)] = weight
            continue
        try:
            weights[str(product)] = float(weight)
        except (TypeError, ValueError):
            raise InvalidQuizConfiguration(
                f"Option '{option_id}' of question '{question_id}' has a non-numeric weight for '{product}'"
            )
    return weights


def coerce_option(raw, question_id):
    option_id = _first(raw, 'id', 'value')
    if option_id is None:
        raise InvalidQuizConfiguration(f"Question '{question_id}' has an option without an id")
    option_id = str(option_id)
    option = {
        'id': option_id,
        'text': raw.get('text', ''),
        'scent_weights': _coerce_weights(
            _first(raw, 'scent_weights', 'scentWeights', 'scentMappings', 'scent_mappings'),
            question_id,
            option_id,
        ),
    }
    # Scale options may carry their own numeric value
    if raw.get('value') is not None:
        option['value'] = raw['value']
    for extra in ('description', 'image_url', 'imageUrl'):
        if raw.get(extra):
            option[extra] = raw[extra]
    return option


def coerce_question(raw):
    """
    Map a stored question document (either generation) onto the canonical dict:

        {id, text, type, order, is_root, parent_id, parent_option_id,
         options: [{id, text, scent_weights}], scale_config}
    """
    if raw.get('id') is None:
        raise InvalidQuizConfiguration('Question record without an id')
    question_id = str(raw['id'])

    raw_type = str(raw.get('type', '')).strip().lower()
    question_type = TYPE_ALIASES.get(raw_type, raw_type)
    if question_type not in QUESTION_TYPES:
        raise InvalidQuizConfiguration(
            f"Question '{question_id}' has unsupported type '{raw.get('type')}'"
        )

    parent_id = _first(raw, 'parent_id', 'parentId')
    parent_option_id = _first(raw, 'parent_option_id', 'parentOptionId')

    try:
        order = int(_first(raw, 'order', default=0))
    except (TypeError, ValueError):
        raise InvalidQuizConfiguration(f"Question '{question_id}' has a non-numeric order")

    question = {
        'id': question_id,
        'text': raw.get('text', ''),
        'type': question_type,
        'order': order,
        'is_root': bool(_first(raw, 'is_root', 'isRoot', 'isMainQuestion', 'is_main_question', default=False)),
        'parent_id': str(parent_id) if parent_id is not None else None,
        'parent_option_id': str(parent_option_id) if parent_option_id is not None else None,
        'options': [coerce_option(o, question_id) for o in (raw.get('options') or [])],
        'scale_config': None,
    }

    if question_type == SCALE:
        config = raw.get('scale_config') or {}
        question['scale_config'] = {
            'min': _first(config, 'min', default=raw.get('scaleMin')),
            'max': _first(config, 'max', default=raw.get('scaleMax')),
            'steps': _first(config, 'steps', default=raw.get('scaleSteps')),
        }

    if raw.get('layout'):
        question['layout'] = raw['layout']
    return question


def find_option(question, option_id):
    option_id = str(option_id)
    for option in question['options']:
        if option['id'] == option_id:
            return option
    return None


def public_question(question):
    """Question payload safe to send to the browser (no scent weights)."""
    data = {
        'id': question['id'],
        'text': question['text'],
        'type': question['type'],
        'is_root': question.get('is_root', False),
        'options': [
            {k: v for k, v in option.items() if k != 'scent_weights'}
            for option in question['options']
        ],
    }
    if question.get('scale_config'):
        data['scale_config'] = question['scale_config']
    if question.get('layout'):
        data['layout'] = question['layout']
    return data
