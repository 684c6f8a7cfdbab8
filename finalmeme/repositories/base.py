# finalmeme/repositories/base.py
import logging
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import NotFound

from finalmeme.core.errors import HttpError
from finalmeme.utils.pagination import skip_for


def reference_id(value: Any) -> Optional[str]:
    """Id of a relationship field, whether it is still a bare id or already expanded."""
    if isinstance(value, dict):
        return value.get('id')
    return value


class FirestoreRepository:
    """
    CRUD over one Firestore collection.

    Documents are stored with their own id inside (`id` field) so that
    `to_dict()` alone gives the full entity. Subclasses override `_expand`
    to replace stored reference ids with the referenced documents on reads.
    """
    collection_name: str = ''
    filter_field: Optional[str] = None
    order_field: Optional[str] = None
    order_direction = firestore.Query.ASCENDING
    default_limit: Optional[int] = None

    def __init__(self, db=None):
        self.db = db if db is not None else firestore.client()
        self.collection_ref = self.db.collection(self.collection_name)

    @staticmethod
    def _document_data(doc) -> Dict[str, Any]:
        data = doc.to_dict() or {}
        data['id'] = doc.id
        return data

    def _expand(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return data

    def _filtered(self, filter_value: Optional[str] = None):
        if filter_value and self.filter_field:
            return self.collection_ref.where(self.filter_field, '==', filter_value)
        return self.collection_ref

    def query(self, page: Optional[int] = None, limit: Optional[int] = None,
              filter_value: Optional[str] = None) -> List[Dict[str, Any]]:
        query = self._filtered(filter_value)
        if self.order_field:
            query = query.order_by(self.order_field, direction=self.order_direction)
        limit = limit or self.default_limit
        if limit:
            query = query.offset(skip_for(page or 1, limit)).limit(limit)
        return [self._expand(self._document_data(doc)) for doc in query.stream()]

    def query_by_id(self, item_id: str) -> Dict[str, Any]:
        doc = self.collection_ref.document(item_id).get()
        if not doc.exists:
            raise HttpError(404, 'Not found', 'Bad id for the query')
        return self._expand(self._document_data(doc))

    def exists(self, item_id: str) -> bool:
        return self.collection_ref.document(item_id).get().exists

    def search(self, field: str, value: Any) -> List[Dict[str, Any]]:
        docs = self.collection_ref.where(field, '==', value).stream()
        return [self._document_data(doc) for doc in docs]

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        doc_ref = self.collection_ref.document()
        stored = {**data, 'id': doc_ref.id}
        doc_ref.set(stored)
        logging.info(f"Firestore create (Collection: {self.collection_name}, Doc ID: {doc_ref.id})")
        return stored

    def update(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        doc_ref = self.collection_ref.document(item_id)
        try:
            doc_ref.update(data)
        except NotFound:
            raise HttpError(404, 'Not found', 'Bad id for the update')
        return self._document_data(doc_ref.get())

    def delete(self, item_id: str) -> None:
        doc_ref = self.collection_ref.document(item_id)
        if not doc_ref.get().exists:
            raise HttpError(404, 'Not found', 'Bad id for the delete')
        doc_ref.delete()
        logging.info(f"Firestore delete (Collection: {self.collection_name}, Doc ID: {item_id})")

    def count(self, filter_value: Optional[str] = None) -> int:
        count_result = self._filtered(filter_value).count().get()
        return count_result[0][0].value
