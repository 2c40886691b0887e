import logging

import firebase_admin
from firebase_admin import firestore

logger = logging.getLogger(__name__)


class BaseFirestoreService:
    def __init__(self):
        # The app is initialized in settings.py when credentials are configured
        if not firebase_admin._apps:
            logger.debug("Firebase app not initialized yet; client will be created on first use")
        self._db = None

    @property
    def db(self):
        if self._db is None:
            self._db = firestore.client()
        return self._db

    def get_collection(self, collection_name, limit=None):
        ref = self.db.collection(collection_name)
        if limit:
            ref = ref.limit(limit)
        docs = ref.stream()
        return [{**doc.to_dict(), 'id': doc.id} for doc in docs]

    def get_document(self, collection_name, doc_id):
        doc_ref = self.db.collection(collection_name).document(str(doc_id))
        doc = doc_ref.get()
        if doc.exists:
            return {**doc.to_dict(), 'id': doc.id}
        return None

    def create_document(self, collection_name, data, doc_id=None):
        if doc_id:
            self.db.collection(collection_name).document(str(doc_id)).set(data)
            return str(doc_id)
        else:
            update_time, doc_ref = self.db.collection(collection_name).add(data)
            return doc_ref.id
