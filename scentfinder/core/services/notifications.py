import logging

from django.conf import settings
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)


class NotificationMixin:
    def send_email_notification(self, to, subject, html_content=None, text_content=None):
        """
        Send an email via the Firebase Trigger Email Extension by writing to the 'mail' collection.
        Returns the mail document ID, or None when nothing was queued.
        """
        if not to:
            return None

        email_data = {
            'to': [to] if isinstance(to, str) else list(to),
            'from': settings.QUIZ_MAIL_FROM,
            'message': {
                'subject': subject,
            }
        }

        if html_content:
            email_data['message']['html'] = html_content

        if text_content:
            email_data['message']['text'] = text_content

        try:
            _, doc_ref = self.db.collection('mail').add(email_data)
            return doc_ref.id
        except Exception:
            logger.exception("Error queuing email to Firestore")
            return None

    def send_results_email(self, email, name, scent, zodiac_sign=None, zodiac_description=None):
        """Queue the 'your signature scent' email for a finished quiz."""
        context = {
            'name': name or 'there',
            'scent': scent,
            'zodiac_sign': zodiac_sign,
            'zodiac_description': zodiac_description,
            'shop_url': settings.QUIZ_SHOP_URL,
        }
        html_content = render_to_string('quiz/results_email.html', context)
        text_content = render_to_string('quiz/results_email.txt', context)
        return self.send_email_notification(
            email,
            f"Your Signature Scent: {scent.get('name', '')}",
            html_content=html_content,
            text_content=text_content,
        )
