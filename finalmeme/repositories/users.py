# finalmeme/repositories/users.py
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import NotFound

from finalmeme.core.errors import HttpError
from finalmeme.repositories.base import FirestoreRepository


class UserRepository(FirestoreRepository):
    """
    'users' collection. `created_post` and `favorite_post` hold post ids;
    reads replace them with the posts (and each post's owner).
    """
    collection_name = 'users'

    def __init__(self, db=None):
        super().__init__(db)
        self.posts_ref = self.db.collection('posts')

    def _load_posts(self, post_ids: List[str], owners: Dict[str, Optional[Dict[str, Any]]]) -> List[Dict[str, Any]]:
        posts = []
        for post_id in post_ids:
            doc = self.posts_ref.document(post_id).get()
            # Deleted posts can still be listed in someone's favorites; they are dropped here.
            if not doc.exists:
                continue
            post = self._document_data(doc)
            owner_id = post.get('owner')
            if not owner_id:
                posts.append(post)
                continue
            if owner_id not in owners:
                owner_doc = self.collection_ref.document(owner_id).get()
                owners[owner_id] = self._document_data(owner_doc) if owner_doc.exists else None
            if owners[owner_id] is not None:
                post['owner'] = owners[owner_id]
            posts.append(post)
        return posts

    def _expand(self, data: Dict[str, Any]) -> Dict[str, Any]:
        owners: Dict[str, Optional[Dict[str, Any]]] = {}
        data['created_post'] = self._load_posts(data.get('created_post', []), owners)
        data['favorite_post'] = self._load_posts(data.get('favorite_post', []), owners)
        return data

    def _update_favorites(self, user_id: str, change) -> Dict[str, Any]:
        user_ref = self.collection_ref.document(user_id)
        try:
            user_ref.update({'favorite_post': change})
        except NotFound:
            raise HttpError(404, 'Not found', 'Bad id for the update')
        return self._document_data(user_ref.get())

    def add_favorite(self, user_id: str, post_id: str) -> Dict[str, Any]:
        """ArrayUnion only adds the id when it is absent, so repeating it is harmless."""
        return self._update_favorites(user_id, firestore.ArrayUnion([post_id]))

    def remove_favorite(self, user_id: str, post_id: str) -> Dict[str, Any]:
        return self._update_favorites(user_id, firestore.ArrayRemove([post_id]))
