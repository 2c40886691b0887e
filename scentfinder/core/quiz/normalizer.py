"""
Turn a raw selection from the browser into a canonical answer.

The weights attached to an answer are resolved here, at answer time, from the
question's option definitions. The aggregator never has to look questions up.
"""
from .answers import SingleChoiceAnswer, MultiChoiceAnswer, ScaleAnswer, merge_weights, parse_number
from .errors import UnknownOption, IllegalTransition
from .questions import SINGLE_CHOICE, MULTI_CHOICE, SCALE, ZODIAC_INPUT, find_option


def _require_option(question, option_id):
    option = find_option(question, option_id)
    if option is None:
        raise UnknownOption(question['id'], option_id)
    return option


def _as_selection_list(raw_selection):
    if raw_selection is None:
        return []
    if isinstance(raw_selection, (str, int)):
        return [str(raw_selection)]
    # Keep first occurrence order, drop duplicates
    seen = []
    for option_id in raw_selection:
        option_id = str(option_id)
        if option_id not in seen:
            seen.append(option_id)
    return seen


def _scale_option(question, raw_selection):
    """Scale selections arrive either as an option id or as the numeric scale value."""
    option = find_option(question, raw_selection)
    if option is not None:
        return option
    value = parse_number(raw_selection)
    if value is not None:
        for candidate in question['options']:
            if parse_number(candidate.get('value')) == value or parse_number(candidate.get('text')) == value:
                return candidate
    raise UnknownOption(question['id'], raw_selection)


def normalize(question, raw_selection):
    """
    Build the stored answer for `question` from `raw_selection`.

    single choice: an option id; weights are that option's weights verbatim.
    multi choice:  an iterable of option ids; weights are summed over the
                   whole selection every time.
    scale:         an option id or a scale value; the option's weights are
                   used, the numeric value is kept for display only.

    Raises UnknownOption when any id is not one of the question's options.
    Nothing is recorded by this function, so a failure never leaves a
    partial answer behind.
    """
    question_type = question['type']

    if question_type == SINGLE_CHOICE:
        if isinstance(raw_selection, (list, tuple, set)):
            raise UnknownOption(question['id'], raw_selection)
        option = _require_option(question, raw_selection)
        return SingleChoiceAnswer(option['id'], dict(option['scent_weights']))

    if question_type == MULTI_CHOICE:
        selection = _as_selection_list(raw_selection)
        options = [_require_option(question, option_id) for option_id in selection]
        return MultiChoiceAnswer(
            tuple(o['id'] for o in options),
            merge_weights(o['scent_weights'] for o in options),
        )

    if question_type == SCALE:
        option = _scale_option(question, raw_selection)
        scale_value = parse_number(option.get('value'))
        if scale_value is None:
            scale_value = parse_number(raw_selection)
        if scale_value is None:
            scale_value = parse_number(option.get('text'))
        return ScaleAnswer(option['id'], scale_value, dict(option['scent_weights']))

    if question_type == ZODIAC_INPUT:
        raise IllegalTransition('The zodiac step is answered with a birth date, not an option')

    raise IllegalTransition(f"Cannot answer question of type '{question_type}'")


def toggle_option(question, current_answer, option_id):
    """
    Flip one option of a multi-choice question and re-derive the combined
    weights from the resulting selection.
    """
    if question['type'] != MULTI_CHOICE:
        raise IllegalTransition(f"Question '{question['id']}' is not a multi-choice question")
    option = _require_option(question, option_id)

    selected = list(current_answer.option_ids) if isinstance(current_answer, MultiChoiceAnswer) else []
    if option['id'] in selected:
        selected.remove(option['id'])
    else:
        selected.append(option['id'])
    return normalize(question, selected)
