from django.test import SimpleTestCase

from core.quiz import (
    IllegalTransition,
    LegacyAnswer,
    MultiChoiceAnswer,
    ScaleAnswer,
    SingleChoiceAnswer,
    UnknownOption,
    coerce_answer,
    normalize,
    toggle_option,
)
from core.quiz.questions import coerce_question


def make_question(question_type, options, **extra):
    return coerce_question({'id': 7, 'text': 'Q', 'type': question_type, 'order': 1, 'options': options, **extra})


class NormalizeSingleChoiceTest(SimpleTestCase):
    def setUp(self):
        self.question = make_question('single_choice', [
            {'id': 'a', 'text': 'A', 'scent_weights': {'P1': 2, 'P2': 1}},
            {'id': 'b', 'text': 'B', 'scent_weights': {'P3': 4}},
        ])

    def test_weights_are_the_option_weights(self):
        answer = normalize(self.question, 'b')
        self.assertIsInstance(answer, SingleChoiceAnswer)
        self.assertEqual(answer.option_id, 'b')
        self.assertEqual(answer.scent_weights, {'P3': 4})

    def test_unknown_option_raises(self):
        with self.assertRaises(UnknownOption) as ctx:
            normalize(self.question, 'zzz')
        self.assertEqual(ctx.exception.question_id, '7')
        self.assertEqual(ctx.exception.option_id, 'zzz')

    def test_list_selection_is_rejected(self):
        with self.assertRaises(UnknownOption):
            normalize(self.question, ['a'])


class NormalizeMultiChoiceTest(SimpleTestCase):
    def setUp(self):
        self.question = make_question('multi_choice', [
            {'id': 'a', 'text': 'A', 'scent_weights': {'P1': 2, 'P2': 1}},
            {'id': 'b', 'text': 'B', 'scent_weights': {'P1': 3}},
            {'id': 'c', 'text': 'C', 'scent_weights': {'P4': 1}},
        ])

    def test_weights_are_summed_over_selection(self):
        answer = normalize(self.question, ['a', 'b'])
        self.assertIsInstance(answer, MultiChoiceAnswer)
        self.assertEqual(answer.option_ids, ('a', 'b'))
        self.assertEqual(answer.scent_weights, {'P1': 5, 'P2': 1})

    def test_duplicate_ids_count_once(self):
        answer = normalize(self.question, ['c', 'c'])
        self.assertEqual(answer.option_ids, ('c',))
        self.assertEqual(answer.scent_weights, {'P4': 1})

    def test_unknown_option_in_selection_raises(self):
        with self.assertRaises(UnknownOption):
            normalize(self.question, ['a', 'nope'])

    def test_toggle_rederives_from_full_selection(self):
        answer = toggle_option(self.question, None, 'a')
        answer = toggle_option(self.question, answer, 'b')
        answer = toggle_option(self.question, answer, 'a')

        clean = toggle_option(self.question, None, 'b')
        self.assertEqual(answer.option_ids, ('b',))
        self.assertEqual(answer.scent_weights, clean.scent_weights)
        self.assertEqual(answer.scent_weights, {'P1': 3})

    def test_empty_selection_is_not_answered(self):
        answer = toggle_option(self.question, None, 'a')
        answer = toggle_option(self.question, answer, 'a')
        self.assertEqual(answer.scent_weights, {})
        self.assertFalse(answer.is_answered)

    def test_toggle_requires_multi_choice(self):
        single = make_question('single_choice', [{'id': 'a', 'text': 'A'}])
        with self.assertRaises(IllegalTransition):
            toggle_option(single, None, 'a')


class NormalizeScaleTest(SimpleTestCase):
    def setUp(self):
        self.question = make_question('rating_scale', [
            {'id': 's1', 'text': '1', 'value': 1, 'scentMappings': {'P1': 1}},
            {'id': 's2', 'text': '2', 'value': 2, 'scentMappings': {'P2': 2}},
        ], scaleMin='Not at all', scaleMax='Very', scaleSteps=2)

    def test_select_by_option_id(self):
        answer = normalize(self.question, 's2')
        self.assertIsInstance(answer, ScaleAnswer)
        self.assertEqual(answer.scale_value, 2)
        self.assertEqual(answer.scent_weights, {'P2': 2})

    def test_select_by_scale_value(self):
        answer = normalize(self.question, 1)
        self.assertEqual(answer.option_id, 's1')
        self.assertEqual(answer.scale_value, 1)
        self.assertEqual(answer.scent_weights, {'P1': 1})

    def test_legacy_scale_config_is_read(self):
        self.assertEqual(self.question['scale_config'], {'min': 'Not at all', 'max': 'Very', 'steps': 2})

    def test_value_outside_scale_raises(self):
        with self.assertRaises(UnknownOption):
            normalize(self.question, 9)


class NormalizeZodiacTest(SimpleTestCase):
    def test_zodiac_question_cannot_take_an_option(self):
        question = make_question('zodiac', [])
        with self.assertRaises(IllegalTransition):
            normalize(question, 'a')


class CoerceAnswerTest(SimpleTestCase):
    def test_bare_string_with_points(self):
        answer = coerce_answer('Atlantis:3')
        self.assertIsInstance(answer, LegacyAnswer)
        self.assertEqual(answer.scent_weights, {'Atlantis': 3})

    def test_bare_string_points_default_to_one(self):
        self.assertEqual(coerce_answer('Royal').scent_weights, {'Royal': 1})
        self.assertEqual(coerce_answer('Royal:lots').scent_weights, {'Royal': 1})

    def test_array_of_bare_strings(self):
        answer = coerce_answer(['Royal:2', 'Utopia', 'Royal:1'])
        self.assertEqual(answer.scent_weights, {'Royal': 3, 'Utopia': 1})

    def test_option_id_with_scent_mappings(self):
        answer = coerce_answer({'optionId': 'a', 'scentMappings': {'Royal': 2}})
        self.assertEqual(answer, SingleChoiceAnswer('a', {'Royal': 2}))
        self.assertEqual(answer.selected_option_id, 'a')

    def test_option_ids_with_scent_mappings(self):
        answer = coerce_answer({'optionIds': ['a', 'b'], 'scentMappings': {'Royal': 2}})
        self.assertEqual(answer, MultiChoiceAnswer(('a', 'b'), {'Royal': 2}))

    def test_scale_value_with_scent_mappings(self):
        answer = coerce_answer({'optionId': '3', 'scaleValue': 3, 'scentMappings': {'Royal': 1}})
        self.assertEqual(answer, ScaleAnswer('3', 3, {'Royal': 1}))

    def test_literal_pairs_skip_option_keys(self):
        answer = coerce_answer({'Royal': 2, 'Utopia': '1', 'optionId': 'a', 'optionIds': ['a']})
        self.assertIsInstance(answer, LegacyAnswer)
        self.assertEqual(answer.scent_weights, {'Royal': 2, 'Utopia': 1})
        self.assertEqual(answer.option_id, 'a')

    def test_option_id_only_keeps_the_option(self):
        self.assertEqual(coerce_answer({'optionId': 'a'}), SingleChoiceAnswer('a', {}))
        self.assertEqual(coerce_answer({'optionIds': ['a', 'b']}), MultiChoiceAnswer(('a', 'b'), {}))
        self.assertEqual(coerce_answer({'optionId': 's2', 'scaleValue': 2}), ScaleAnswer('s2', 2, {}))

    def test_stored_form_reads_back(self):
        answer = MultiChoiceAnswer(('a', 'c'), {'P1': 2})
        self.assertEqual(coerce_answer(answer.to_dict()), answer)

    def test_empty_values(self):
        self.assertIsNone(coerce_answer(None))
        self.assertIsNone(coerce_answer(42))
