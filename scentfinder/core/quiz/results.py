"""
Final result record and the hand-off to the submission collaborator.
"""
import logging
import threading

from .zodiac import default_description

logger = logging.getLogger(__name__)


def similar_products(product, catalog, limit=3):
    """Other catalog products in the same category, catalog order."""
    if not limit:
        return []
    category = product.get('category')
    similar = [
        p for p in catalog
        if p.get('id') != product.get('id') and category and p.get('category') == category
    ]
    return similar[:limit]


def zodiac_description(sign_name, product, zodiac_mappings=None):
    """
    Copy pairing a sign with the winning product: a stored mapping for the
    exact (sign, product) pair wins, otherwise the sign's default text.
    """
    mapped = (zodiac_mappings or {}).get(sign_name) or {}
    description = mapped.get(str(product.get('id'))) or mapped.get(product.get('name'))
    return description or default_description(sign_name, product.get('name', ''))


def build_result(session, product, scores, catalog=(), zodiac_mappings=None, similar_limit=3):
    sign = session.zodiac_sign
    return {
        'user_id': session.user_id,
        'winning_product_id': product.get('id'),
        'product': product,
        'zodiac_sign': sign.name if sign else None,
        'zodiac': sign.to_dict() if sign else None,
        'zodiac_description': zodiac_description(sign.name, product, zodiac_mappings) if sign else None,
        'scores': dict(scores),
        'answers': {qid: answer.to_dict() for qid, answer in session.answers.items()},
        'similar_products': [
            {'id': p.get('id'), 'name': p.get('name')}
            for p in similar_products(product, catalog, similar_limit)
        ],
    }


def submission_payload(result):
    """What the submission collaborator stores for a completed quiz."""
    return {
        'user_id': result['user_id'],
        'winning_product_id': result['winning_product_id'],
        'zodiac_sign': result['zodiac_sign'],
        'answers': result['answers'],
        'scores': result['scores'],
    }


def _deliver(submitter, payload):
    try:
        submitter(payload)
    except Exception:
        logger.warning("Quiz result submission failed for user %s", payload.get('user_id'), exc_info=True)


def hand_off(submitter, result):
    """
    Call the submission collaborator with the payload. Failures are logged
    and swallowed: the caller's session is already complete and stays so.
    """
    _deliver(submitter, submission_payload(result))


def in_background(submitter):
    """Wrap a submitter so each call runs on a daemon thread."""
    def _submit(payload):
        t = threading.Thread(target=_deliver, args=(submitter, payload))
        t.daemon = True
        t.start()
    return _submit
