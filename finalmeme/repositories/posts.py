# finalmeme/repositories/posts.py
import logging
from typing import Any, Dict, Optional

from firebase_admin import firestore

from finalmeme.core.errors import HttpError
from finalmeme.repositories.base import FirestoreRepository


class PostRepository(FirestoreRepository):
    """
    'posts' collection. `owner` and every comment owner are user ids in
    storage and user documents after a read.

    Writes that also touch the owner's `created_post` list run in a single
    Firestore transaction, so the post and the list never drift apart.
    """
    collection_name = 'posts'
    filter_field = 'flair'
    # Feed order: oldest first, new posts land on the last page.
    order_field = 'created_at'
    default_limit = 3

    def __init__(self, db=None):
        super().__init__(db)
        self.users_ref = self.db.collection('users')

    def _load_user(self, user_id: str, cache: Dict[str, Optional[Dict[str, Any]]]):
        if user_id not in cache:
            doc = self.users_ref.document(user_id).get()
            cache[user_id] = self._document_data(doc) if doc.exists else None
        return cache[user_id]

    def _expand(self, data: Dict[str, Any]) -> Dict[str, Any]:
        users: Dict[str, Optional[Dict[str, Any]]] = {}
        owner = self._load_user(data.get('owner'), users) if data.get('owner') else None
        if owner is not None:
            data['owner'] = owner
        comments = []
        for comment in data.get('comments', []):
            comment_owner = self._load_user(comment.get('owner'), users) if comment.get('owner') else None
            comments.append({**comment, 'owner': comment_owner if comment_owner is not None else comment.get('owner')})
        data['comments'] = comments
        return data

    def update(self, item_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._expand(super().update(item_id, data))

    def create_for_owner(self, data: Dict[str, Any], owner_id: str) -> Dict[str, Any]:
        """Creates the post and appends its id to the owner's `created_post`."""
        post_ref = self.collection_ref.document()
        user_ref = self.users_ref.document(owner_id)
        stored = {**data, 'owner': owner_id, 'id': post_ref.id, 'created_at': firestore.SERVER_TIMESTAMP}

        transaction = self.db.transaction()

        @firestore.transactional
        def _create_in_transaction(transaction):
            if not user_ref.get(transaction=transaction).exists:
                raise HttpError(404, 'Not found', 'Bad id for the query')
            transaction.set(post_ref, stored)
            transaction.update(user_ref, {'created_post': firestore.ArrayUnion([post_ref.id])})

        _create_in_transaction(transaction)
        logging.info(f"Post created (post_id: {post_ref.id}, owner: {owner_id})")
        return stored

    def delete_for_owner(self, post_id: str, owner_id: str) -> None:
        """Deletes the post and removes its id from the owner's `created_post`."""
        post_ref = self.collection_ref.document(post_id)
        user_ref = self.users_ref.document(owner_id)

        transaction = self.db.transaction()

        @firestore.transactional
        def _delete_in_transaction(transaction):
            if not post_ref.get(transaction=transaction).exists:
                raise HttpError(404, 'Not found', 'Bad id for the delete')
            if not user_ref.get(transaction=transaction).exists:
                raise HttpError(404, 'Not found', 'Bad id for the query')
            transaction.delete(post_ref)
            transaction.update(user_ref, {'created_post': firestore.ArrayRemove([post_id])})

        _delete_in_transaction(transaction)
        logging.info(f"Post deleted (post_id: {post_id}, owner: {owner_id})")

    def append_comment(self, post_id: str, comment: Dict[str, Any]) -> Dict[str, Any]:
        """Appends to `comments` inside a transaction; identical comments are kept."""
        post_ref = self.collection_ref.document(post_id)

        transaction = self.db.transaction()

        @firestore.transactional
        def _append_in_transaction(transaction):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise HttpError(404, 'Not found', 'Bad id for the query')
            comments = (snapshot.to_dict() or {}).get('comments', [])
            transaction.update(post_ref, {'comments': comments + [comment]})

        _append_in_transaction(transaction)
        return self.query_by_id(post_id)
