from django.test import SimpleTestCase

from core.quiz import (
    AggregationEmpty,
    InvalidQuizConfiguration,
    MultiChoiceAnswer,
    SingleChoiceAnswer,
    aggregate,
    resolve_product,
    select_winner,
)

CATALOG = [
    {'id': 'P1', 'name': 'Atlantis'},
    {'id': 'P2', 'name': 'Royal'},
    {'id': 'P3', 'name': 'Utopia'},
]


class AggregateTest(SimpleTestCase):
    def test_mixed_answer_shapes(self):
        answers = {
            '1': 'P1:2',
            '2': ['P1:1', 'P2:3'],
            '3': {'optionId': 'x', 'scentMappings': {'P2': 1}},
            '4': {'P3': 4, 'optionId': 'y'},
            '5': SingleChoiceAnswer('z', {'P1': 1}),
        }
        self.assertEqual(aggregate(answers), {'P1': 4, 'P2': 4, 'P3': 4})

    def test_multi_choice_weights_count_once(self):
        answers = {'1': MultiChoiceAnswer(('a', 'b'), {'P1': 5, 'P2': 1})}
        self.assertEqual(aggregate(answers), {'P1': 5, 'P2': 1})

    def test_same_answers_same_scores(self):
        answers = {'1': 'P1:2', '2': {'optionId': 'x', 'scentMappings': {'P2': 1}}}
        self.assertEqual(aggregate(answers), aggregate(answers))

    def test_no_answers(self):
        self.assertEqual(aggregate({}), {})
        self.assertEqual(aggregate(None), {})

    def test_unreadable_answers_are_skipped(self):
        self.assertEqual(aggregate({'1': None, '2': 17, '3': 'P2'}), {'P2': 1})


class SelectWinnerTest(SimpleTestCase):
    def test_highest_score_wins(self):
        self.assertEqual(select_winner({'P1': 1, 'P2': 5, 'P3': 2}), 'P2')

    def test_tie_goes_to_first_key_seen(self):
        self.assertEqual(select_winner({'P3': 4, 'P1': 4}), 'P3')
        self.assertEqual(select_winner(aggregate({'1': 'P2:2', '2': 'P1:2'})), 'P2')

    def test_nothing_above_zero_raises(self):
        for scores in [{}, {'P1': 0}, {'P1': -2, 'P2': 0}]:
            with self.assertRaises(AggregationEmpty):
                select_winner(scores)

    def test_negative_scores_do_not_block_a_positive_one(self):
        self.assertEqual(select_winner({'P1': -3, 'P2': 1}), 'P2')


class ResolveProductTest(SimpleTestCase):
    def test_winner_by_id(self):
        self.assertEqual(resolve_product({'P3': 2}, CATALOG)['name'], 'Utopia')

    def test_winner_by_name(self):
        self.assertEqual(resolve_product({'Royal': 2}, CATALOG)['id'], 'P2')

    def test_empty_scores_fall_back_to_first_product(self):
        with self.assertLogs('core.quiz.scoring', level='WARNING'):
            product = resolve_product({}, CATALOG)
        self.assertEqual(product['id'], 'P1')

    def test_unknown_winner_falls_back_to_first_product(self):
        with self.assertLogs('core.quiz.scoring', level='WARNING') as logs:
            product = resolve_product({'Discontinued': 9}, CATALOG)
        self.assertEqual(product['id'], 'P1')
        self.assertIn('Discontinued', logs.output[0])

    def test_empty_catalog_is_a_configuration_error(self):
        with self.assertRaises(InvalidQuizConfiguration):
            resolve_product({'P1': 1}, [])
