"""
Score aggregation and winner selection.
"""
import logging

from .answers import coerce_answer
from .errors import AggregationEmpty, InvalidQuizConfiguration

logger = logging.getLogger(__name__)


def aggregate(answers):
    """
    Fold every answer into a product -> score map.

    `answers` maps question id to an answer in any stored shape; each value
    goes through coerce_answer() first, so the summing itself only ever sees
    scent weights. Keys keep the order in which they were first seen.
    """
    scores = {}
    for value in (answers or {}).values():
        answer = coerce_answer(value)
        if answer is None:
            continue
        for product, weight in answer.scent_weights.items():
            scores[product] = scores.get(product, 0) + weight
    return scores


def select_winner(scores):
    """
    argmax over `scores` with a strict greater-than scan: on a tie the first
    key seen keeps the lead. Raises AggregationEmpty when no score is above zero.
    """
    best_product = None
    best_score = 0
    for product, score in scores.items():
        if score is not None and score > best_score:
            best_score = score
            best_product = product
    if best_product is None:
        raise AggregationEmpty('No product scored above zero')
    return best_product


def _matches(product, key):
    # Older questions keyed weights by product name instead of id
    return str(product.get('id')) == key or product.get('name') == key


def resolve_product(scores, catalog):
    """
    Pick the winning catalog product for `scores`.

    Falls back to the first product in catalog order when nothing scored, or
    when the winning key names no product in the catalog.
    """
    if not catalog:
        raise InvalidQuizConfiguration('The product catalog is empty')

    try:
        winner = select_winner(scores)
    except AggregationEmpty:
        logger.warning("Empty score table, defaulting to first catalog product '%s'", catalog[0].get('id'))
        return catalog[0]

    for product in catalog:
        if _matches(product, winner):
            return product

    logger.warning("Winning key '%s' is not in the catalog, defaulting to '%s'", winner, catalog[0].get('id'))
    return catalog[0]
