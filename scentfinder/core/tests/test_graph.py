from django.test import SimpleTestCase

from core.quiz import (
    InvalidQuizConfiguration,
    NoReachableQuestion,
    SingleChoiceAnswer,
    ZODIAC_STEP_ID,
    compute_path,
    question_at,
    validate_questions,
)


def question(qid, order=0, options=('a', 'b'), question_type='single_choice', **extra):
    return {
        'id': qid,
        'text': f'Question {qid}',
        'type': question_type,
        'order': order,
        'options': [{'id': o, 'text': o.upper()} for o in options],
        **extra,
    }


def branching_quiz():
    return [
        question('root', order=0, is_root=True),
        question('a2', order=2, parent_id='root', parent_option_id='a'),
        question('a1', order=1, parent_id='root', parent_option_id='a'),
        question('a1-bis', order=1, parent_id='root', parent_option_id='a'),
        question('b1', order=1, parent_id='root', parent_option_id='b'),
    ]


def ids(path):
    return [q['id'] for q in path.questions]


class ComputePathTest(SimpleTestCase):
    def setUp(self):
        self.questions = validate_questions(branching_quiz())

    def test_unanswered_root_shows_only_root(self):
        path = compute_path(self.questions, {})
        self.assertEqual(ids(path), ['root'])
        self.assertEqual(path.total, 2)

    def test_root_answer_selects_children_in_order(self):
        path = compute_path(self.questions, {'root': SingleChoiceAnswer('a')})
        # equal orders keep source order
        self.assertEqual(ids(path), ['root', 'a1', 'a1-bis', 'a2'])
        self.assertEqual(path.total, 5)

    def test_other_branch(self):
        path = compute_path(self.questions, {'root': SingleChoiceAnswer('b')})
        self.assertEqual(ids(path), ['root', 'b1'])
        self.assertEqual(path.total, 3)

    def test_path_is_deterministic(self):
        answers = {'root': SingleChoiceAnswer('a')}
        self.assertEqual(ids(compute_path(self.questions, answers)), ids(compute_path(self.questions, answers)))

    def test_legacy_root_answer_still_branches(self):
        path = compute_path(self.questions, {'root': {'optionId': 'b', 'scentMappings': {}}})
        self.assertEqual(ids(path), ['root', 'b1'])

    def test_branch_without_children(self):
        questions = validate_questions([question('root', is_root=True, options=('a', 'lonely')),
                                        question('c', parent_id='root', parent_option_id='a')])
        path = compute_path(questions, {'root': SingleChoiceAnswer('lonely')})
        self.assertEqual(ids(path), ['root'])
        self.assertEqual(path.total, 2)

    def test_flat_quiz_uses_order(self):
        questions = validate_questions([
            question('x', order=3),
            question('y', order=1),
            question('z', order=2),
            question('zodiac', order=99, options=(), question_type='zodiac_input'),
        ])
        path = compute_path(questions, {})
        self.assertEqual(ids(path), ['y', 'z', 'x'])
        self.assertEqual(path.total, 4)

    def test_legacy_field_names(self):
        questions = validate_questions([
            {'id': 1, 'text': 'Main', 'type': 'multiple_choice', 'order': 1, 'isMainQuestion': True,
             'options': [{'id': 'a', 'text': 'A', 'scentMappings': {'P1': 1}}]},
            {'id': 2, 'text': 'Child', 'type': 'checkbox', 'order': 2, 'parentId': 1, 'parentOptionId': 'a',
             'options': [{'id': 'x', 'text': 'X'}]},
        ])
        path = compute_path(questions, {'1': SingleChoiceAnswer('a')})
        self.assertEqual(ids(path), ['1', '2'])
        self.assertEqual(path.questions[1]['type'], 'multi_choice')


class QuestionAtTest(SimpleTestCase):
    def setUp(self):
        self.questions = validate_questions(branching_quiz())
        self.path = compute_path(self.questions, {'root': SingleChoiceAnswer('b')})

    def test_positions_are_one_based(self):
        self.assertEqual(question_at(self.path, 1)['id'], 'root')
        self.assertEqual(question_at(self.path, 2)['id'], 'b1')

    def test_last_position_is_the_zodiac_step(self):
        step = question_at(self.path, self.path.total)
        self.assertEqual(step['id'], ZODIAC_STEP_ID)
        self.assertEqual(step['type'], 'zodiac_input')

    def test_zodiac_prompt_comes_from_stored_question(self):
        questions = self.questions + validate_questions([
            question('zodiac', options=(), question_type='zodiac', text='Your birthday?'),
        ])
        self.assertEqual(question_at(self.path, 3, questions)['text'], 'Your birthday?')

    def test_out_of_range_raises(self):
        for index in (0, 4, 10):
            with self.assertRaises(NoReachableQuestion):
                question_at(self.path, index)


class ValidateQuestionsTest(SimpleTestCase):
    def assertInvalid(self, questions):
        with self.assertRaises(InvalidQuizConfiguration):
            validate_questions(questions)

    def test_empty_quiz(self):
        self.assertInvalid([])

    def test_duplicate_question_ids(self):
        self.assertInvalid([question('q'), question('q')])

    def test_duplicate_option_ids(self):
        self.assertInvalid([question('q', options=('a', 'a'))])

    def test_question_without_options(self):
        self.assertInvalid([question('q', options=())])

    def test_two_roots(self):
        self.assertInvalid([question('r1', is_root=True), question('r2', is_root=True)])

    def test_multi_choice_root(self):
        self.assertInvalid([question('r', is_root=True, question_type='multi_choice')])

    def test_missing_parent(self):
        self.assertInvalid([question('r', is_root=True), question('c', parent_id='ghost', parent_option_id='a')])

    def test_missing_parent_option(self):
        self.assertInvalid([question('r', is_root=True), question('c', parent_id='r', parent_option_id='zzz')])

    def test_unknown_type(self):
        self.assertInvalid([question('q', question_type='essay')])

    def test_non_numeric_weight(self):
        self.assertInvalid([{'id': 'q', 'type': 'single_choice',
                             'options': [{'id': 'a', 'scent_weights': {'P1': 'lots'}}]}])

    def test_grandchildren_are_warned_about(self):
        questions = branching_quiz() + [question('deep', parent_id='a1', parent_option_id='a')]
        with self.assertLogs('core.quiz.graph', level='WARNING') as logs:
            validate_questions(questions)
        self.assertIn('deep', logs.output[0])

    def test_flat_quiz_ignores_parent_links(self):
        questions = validate_questions([question('x'), question('y', parent_id='ghost', parent_option_id='a')])
        self.assertEqual(ids(compute_path(questions, {})), ['x', 'y'])
