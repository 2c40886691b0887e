import datetime
import json
from unittest.mock import patch

from django.test import Client, TestCase, override_settings
from django.urls import reverse

from core.quiz_data import DEFAULT_QUESTIONS, DEFAULT_SCENTS
from core.services import db


@override_settings(QUIZ_SUBMIT_IN_BACKGROUND=False)
class QuizViewTestCase(TestCase):
    def setUp(self):
        patches = {
            'get_questions': patch.object(db, 'get_questions', return_value=DEFAULT_QUESTIONS),
            'get_scents': patch.object(db, 'get_scents', return_value=DEFAULT_SCENTS),
            'get_zodiac_mappings': patch.object(db, 'get_zodiac_mappings', return_value={}),
            'create_quiz_user': patch.object(db, 'create_quiz_user', return_value='user123'),
            'save_quiz_result': patch.object(db, 'save_quiz_result', return_value='result1'),
        }
        self.mocks = {}
        for name, patcher in patches.items():
            self.mocks[name] = patcher.start()
            self.addCleanup(patcher.stop)

    def post(self, name, data=None):
        return self.client.post(reverse(name), data=json.dumps(data or {}), content_type='application/json')

    def start_quiz(self):
        return self.post('quiz_start', {'name': 'Sam', 'email': 'sam@example.com'})

    def finish_sea_branch(self):
        self.start_quiz()
        self.post('quiz_answer', {'selection': 'sea'})
        self.post('quiz_next')
        self.post('quiz_answer', {'selection': 'surf'})
        self.post('quiz_next')
        self.post('quiz_toggle', {'option_id': 'speaker'})
        self.post('quiz_next')
        self.post('quiz_zodiac', {'month': 3, 'day': 25})
        return self.post('quiz_submit')


class QuestionsViewTest(QuizViewTestCase):
    def test_weights_are_not_exposed(self):
        response = self.client.get(reverse('quiz_questions'))
        self.assertEqual(response.status_code, 200)
        body = response.content.decode()
        self.assertNotIn('scent_weights', body)
        self.assertEqual(len(response.json()['questions']), len(DEFAULT_QUESTIONS))

    def test_broken_quiz_is_a_server_error(self):
        self.mocks['get_questions'].return_value = []
        with self.assertLogs('quiz.decorators', level='ERROR'):
            response = self.client.get(reverse('quiz_questions'))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['code'], 'InvalidQuizConfiguration')

    def test_firestore_failure_is_a_server_error(self):
        self.mocks['get_scents'].side_effect = RuntimeError('unavailable')
        with self.assertLogs('quiz.decorators', level='ERROR'):
            response = self.client.get(reverse('quiz_questions'))
        self.assertEqual(response.status_code, 500)


class StartViewTest(QuizViewTestCase):
    def test_start_creates_user_and_session(self):
        response = self.start_quiz()
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['state'], 'awaiting_root')
        self.assertEqual(data['current_question_index'], 1)
        self.assertEqual(data['total_question_count'], 2)
        self.assertEqual(data['question']['id'], 'q1')
        self.mocks['create_quiz_user'].assert_called_once_with('Sam', 'sam@example.com', False)

    def test_form_post_is_accepted(self):
        response = self.client.post(reverse('quiz_start'), {
            'name': 'Sam', 'email': 'sam@example.com', 'subscribe_to_newsletter': 'on',
        })
        self.assertEqual(response.status_code, 200)
        self.mocks['create_quiz_user'].assert_called_once_with('Sam', 'sam@example.com', True)

    def test_identity_is_required(self):
        response = self.post('quiz_start', {'name': 'Sam'})
        self.assertEqual(response.status_code, 400)
        self.mocks['create_quiz_user'].assert_not_called()

    def test_no_session_yet(self):
        response = self.client.get(reverse('quiz_state'))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'NoSession')

    def test_get_is_not_allowed(self):
        self.assertEqual(self.client.get(reverse('quiz_start')).status_code, 405)


class AnsweringViewTest(QuizViewTestCase):
    def setUp(self):
        super().setUp()
        self.start_quiz()

    def test_root_answer_extends_path(self):
        data = self.post('quiz_answer', {'selection': 'sea'}).json()
        self.assertTrue(data['answered'])
        self.assertEqual(data['total_question_count'], 4)

        data = self.post('quiz_next').json()
        self.assertEqual(data['current_question_index'], 2)
        self.assertEqual(data['question']['id'], 'q2')
        self.assertEqual(data['state'], 'answering_branch')

    def test_unknown_option_keeps_session(self):
        response = self.post('quiz_answer', {'selection': 'moon'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'UnknownOption')

        data = self.client.get(reverse('quiz_state')).json()
        self.assertFalse(data['answered'])
        self.assertIsNone(data['answer'])

    def test_cannot_skip_a_question(self):
        response = self.post('quiz_next')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'IllegalTransition')

    def test_missing_selection(self):
        self.assertEqual(self.post('quiz_answer', {}).status_code, 400)

    def test_multi_choice_toggle(self):
        self.post('quiz_answer', {'selection': 'sea'})
        self.post('quiz_next')
        self.post('quiz_answer', {'selection': 'read'})
        self.post('quiz_next')

        self.post('quiz_toggle', {'option_id': 'novel'})
        data = self.post('quiz_toggle', {'option_id': 'speaker'}).json()
        self.assertEqual(data['answer']['option_ids'], ['novel', 'speaker'])

        data = self.post('quiz_toggle', {'option_id': 'novel'}).json()
        self.assertEqual(data['answer']['option_ids'], ['speaker'])
        self.assertEqual(data['answer']['scent_weights'], {'revolt': 2})

    def test_multi_choice_form_post_keeps_every_option(self):
        self.post('quiz_answer', {'selection': 'sea'})
        self.post('quiz_next')
        self.post('quiz_answer', {'selection': 'read'})
        self.post('quiz_next')

        response = self.client.post(reverse('quiz_answer'), {'option_ids': ['novel', 'speaker']})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['answer']['option_ids'], ['novel', 'speaker'])

    def test_scale_answer_by_value(self):
        self.post('quiz_answer', {'selection': 'city'})
        self.post('quiz_next')
        self.post('quiz_answer', {'selection': 'gala'})
        self.post('quiz_next')
        data = self.post('quiz_answer', {'scale_value': 3}).json()
        self.assertEqual(data['answer']['option_id'], 's3')
        self.assertEqual(data['answer']['scale_value'], 3)

    def test_previous_goes_back(self):
        self.post('quiz_answer', {'selection': 'garden'})
        self.post('quiz_next')
        data = self.post('quiz_previous').json()
        self.assertEqual(data['current_question_index'], 1)
        self.assertEqual(data['answer']['option_id'], 'garden')

    def test_invalid_birth_date(self):
        self.post('quiz_answer', {'selection': 'garden'})
        self.post('quiz_next')
        self.post('quiz_toggle', {'option_id': 'rose'})
        data = self.post('quiz_next').json()
        self.assertEqual(data['state'], 'awaiting_zodiac')
        self.assertEqual(data['question']['id'], 'zodiac')

        response = self.post('quiz_zodiac', {'month': 2, 'day': 30})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'InvalidDate')

        data = self.post('quiz_zodiac', {'month': '2', 'day': '29'}).json()
        self.assertEqual(data['zodiac_sign']['name'], 'Pisces')


class SubmitViewTest(QuizViewTestCase):
    def test_submit_scores_and_stores_result(self):
        response = self.finish_sea_branch()
        self.assertEqual(response.status_code, 200)
        result = response.json()['result']

        # sea + surf + speaker: atlantis 1 + 3, revolt 1 + 2
        self.assertEqual(result['scores'], {'atlantis': 4, 'revolt': 3})
        self.assertEqual(result['winning_product_id'], 'atlantis')
        self.assertEqual(result['zodiac_sign'], 'Aries')
        self.assertEqual(result['similar_products'], [{'id': 'feeling-good', 'name': 'Feeling Good'}])

        self.mocks['save_quiz_result'].assert_called_once()
        payload = self.mocks['save_quiz_result'].call_args[0][0]
        self.assertEqual(payload['user_id'], 'user123')
        self.assertEqual(payload['winning_product_id'], 'atlantis')

        data = self.client.get(reverse('quiz_result')).json()
        self.assertEqual(data['result']['winning_product_id'], 'atlantis')

    def test_failed_save_still_completes(self):
        self.mocks['save_quiz_result'].side_effect = RuntimeError('unavailable')
        with self.assertLogs('core.quiz.results', level='WARNING'):
            response = self.finish_sea_branch()
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(reverse('quiz_result')).status_code, 200)

    def test_submit_before_zodiac(self):
        self.start_quiz()
        response = self.post('quiz_submit')
        self.assertEqual(response.status_code, 400)
        self.mocks['save_quiz_result'].assert_not_called()

    def test_no_result_before_completion(self):
        self.start_quiz()
        self.assertEqual(self.client.get(reverse('quiz_result')).status_code, 404)

    def test_completed_quiz_rejects_answers(self):
        self.finish_sea_branch()
        response = self.post('quiz_previous')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['code'], 'IllegalTransition')


class RetakeResetViewTest(QuizViewTestCase):
    def test_retake_keeps_user(self):
        self.finish_sea_branch()
        data = self.post('quiz_retake').json()
        self.assertEqual(data['current_question_index'], 1)
        self.assertFalse(data['completed'])
        self.assertIsNone(data['answer'])

        self.post('quiz_answer', {'selection': 'garden'})
        self.post('quiz_next')
        self.post('quiz_toggle', {'option_id': 'jasmine'})
        self.post('quiz_next')
        self.post('quiz_zodiac', {'month': 8, 'day': 1})
        result = self.post('quiz_submit').json()['result']
        self.assertEqual(result['user_id'], 'user123')
        self.assertEqual(result['winning_product_id'], 'garden-breeze')
        self.assertEqual(self.mocks['create_quiz_user'].call_count, 1)

    def test_reset_clears_session(self):
        self.start_quiz()
        self.assertEqual(self.post('quiz_reset').status_code, 200)
        self.assertEqual(self.client.get(reverse('quiz_state')).json()['code'], 'NoSession')


class EmailResultsViewTest(QuizViewTestCase):
    def test_email_goes_to_quiz_user(self):
        self.finish_sea_branch()
        with patch.object(db, 'send_results_email', return_value='mail1') as send:
            response = self.post('quiz_email_results')
        self.assertEqual(response.json()['mail_id'], 'mail1')

        args, kwargs = send.call_args
        self.assertEqual(args[0], 'sam@example.com')
        self.assertEqual(args[1], 'Sam')
        self.assertEqual(args[2]['id'], 'atlantis')
        self.assertEqual(kwargs['zodiac_sign'], 'Aries')

    def test_email_override(self):
        self.finish_sea_branch()
        with patch.object(db, 'send_results_email', return_value='mail1') as send:
            self.post('quiz_email_results', {'email': 'friend@example.com'})
        self.assertEqual(send.call_args[0][0], 'friend@example.com')

    def test_failed_email(self):
        self.finish_sea_branch()
        with patch.object(db, 'send_results_email', return_value=None):
            response = self.post('quiz_email_results')
        self.assertEqual(response.status_code, 500)

    def test_needs_completed_quiz(self):
        self.start_quiz()
        with patch.object(db, 'send_results_email') as send:
            response = self.post('quiz_email_results')
        self.assertEqual(response.status_code, 404)
        send.assert_not_called()


class UserResultsViewTest(QuizViewTestCase):
    def test_history_is_serialized(self):
        stored = [{
            'id': 'result1',
            'winning_product_id': 'atlantis',
            'created_at': datetime.datetime(2026, 1, 5, 12, 30, tzinfo=datetime.timezone.utc),
        }]
        with patch.object(db, 'get_user_profile', return_value={'id': 'user123'}), \
                patch.object(db, 'get_quiz_results_for_user', return_value=stored) as fetch:
            response = self.client.get(reverse('quiz_user_results', args=['user123']))
        fetch.assert_called_once_with('user123')
        self.assertEqual(response.json()['results'][0]['created_at'], '2026-01-05T12:30:00+00:00')

    def test_unknown_user(self):
        with patch.object(db, 'get_user_profile', return_value=None), \
                patch.object(db, 'get_quiz_results_for_user') as fetch:
            response = self.client.get(reverse('quiz_user_results', args=['ghost']))
        self.assertEqual(response.status_code, 404)
        fetch.assert_not_called()


class CsrfTokenlessClientTest(QuizViewTestCase):
    def setUp(self):
        super().setUp()
        self.client = Client(enforce_csrf_checks=True)

    def test_quiz_can_be_played_without_a_csrf_token(self):
        response = self.start_quiz()
        self.assertEqual(response.status_code, 200)
        response = self.post('quiz_answer', {'selection': 'sea'})
        self.assertEqual(response.status_code, 200)

        response = self.finish_sea_branch()
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['success'])

    def test_reset_without_a_csrf_token(self):
        self.start_quiz()
        self.assertEqual(self.client.post(reverse('quiz_reset')).status_code, 200)
