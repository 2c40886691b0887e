import logging

logger = logging.getLogger(__name__)


class ScentMixin:
    def get_scents(self):
        """
        The product catalog in display order.
        Scents without a display_order keep their stored order, after the rest.
        """
        scents = self.get_collection('scents')
        return sorted(scents, key=lambda s: s.get('display_order', len(scents)))

    def get_zodiac_mappings(self):
        """
        Sign -> {scent id: description} for every stored pairing.
        """
        mappings = {}
        for doc in self.get_collection('zodiac_mappings'):
            sign = doc.get('zodiac_sign')
            scent_id = doc.get('scent_id')
            if not sign or scent_id is None:
                logger.warning("Skipping incomplete zodiac mapping %s", doc.get('id'))
                continue
            mappings.setdefault(sign, {})[str(scent_id)] = doc.get('description', '')
        return mappings
