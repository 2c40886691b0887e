from io import StringIO
from unittest.mock import MagicMock, patch

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from core.quiz_data import DEFAULT_QUESTIONS, DEFAULT_SCENTS, DEFAULT_ZODIAC_MAPPINGS
from core.services import db


class SeedQuizCommandTest(TestCase):
    def test_seeds_every_collection(self):
        client = MagicMock()
        out = StringIO()

        with patch.object(db, '_db', client):
            call_command('seed_quiz', stdout=out)

        collections = [c[0][0] for c in client.collection.call_args_list]
        self.assertEqual(collections.count('scents'), len(DEFAULT_SCENTS))
        self.assertEqual(collections.count('questions'), len(DEFAULT_QUESTIONS))
        mapping_count = sum(len(pairings) for pairings in DEFAULT_ZODIAC_MAPPINGS.values())
        self.assertEqual(collections.count('zodiac_mappings'), mapping_count)
        self.assertIn('Seeding complete!', out.getvalue())

    def test_scents_keep_catalog_order(self):
        client = MagicMock()
        with patch.object(db, '_db', client):
            call_command('seed_quiz', stdout=StringIO())

        first_write = client.collection.return_value.document.return_value.set.call_args_list[0][0][0]
        self.assertEqual(first_write['id'], DEFAULT_SCENTS[0]['id'])
        self.assertEqual(first_write['display_order'], 0)


class ValidateQuizCommandTest(TestCase):
    def test_prints_every_branch(self):
        out = StringIO()
        with patch.object(db, 'get_questions', return_value=DEFAULT_QUESTIONS), \
                patch.object(db, 'get_scents', return_value=DEFAULT_SCENTS), \
                patch.object(db, 'get_zodiac_mappings', return_value={}):
            call_command('validate_quiz', stdout=out)

        output = out.getvalue()
        self.assertIn('sea: q1 -> q2 -> q3 (total 4)', output)
        self.assertIn('city: q1 -> q4 -> q5 (total 4)', output)
        self.assertIn('garden: q1 -> q6 (total 3)', output)
        self.assertIn('Quiz is valid', output)

    def test_invalid_quiz_raises(self):
        broken = [dict(q) for q in DEFAULT_QUESTIONS]
        broken[1]['parent_option_id'] = 'lake'
        with patch.object(db, 'get_questions', return_value=broken), \
                patch.object(db, 'get_scents', return_value=DEFAULT_SCENTS), \
                patch.object(db, 'get_zodiac_mappings', return_value={}):
            with self.assertRaises(CommandError):
                call_command('validate_quiz', stdout=StringIO())
