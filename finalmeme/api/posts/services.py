# finalmeme/api/posts/services.py
import logging
from dataclasses import asdict
from typing import Any, Dict, Optional

from finalmeme.core.errors import HttpError
from finalmeme.core.security import AuthClaim
from finalmeme.models.event import EventType
from finalmeme.models.post import Comment, Post
from finalmeme.utils.pagination import page_links


class PostService:
    """
    Post feed, ownership-linked creation and deletion, favorites and comments.

    The caller's identity is passed in explicitly as an `AuthClaim`; every
    mutation that needs one fails with 498 when it is missing. Events are
    published only after the writes they announce have succeeded.
    """

    def __init__(self, post_repository, user_repository, publisher, page_size: int = 3):
        self.post_repository = post_repository
        self.user_repository = user_repository
        self.publisher = publisher
        self.page_size = page_size

    @staticmethod
    def _require_claim(claim: Optional[AuthClaim]) -> AuthClaim:
        if claim is None:
            raise HttpError(498, 'Token not found', 'Token payload is missing')
        return claim

    def get_all(self, page: int, flair: Optional[str], base_url: str) -> Dict[str, Any]:
        """One feed page plus absolute links to its neighbours."""
        items = self.post_repository.query(page, self.page_size, flair)
        count = self.post_repository.count(flair)
        previous, next_url = page_links(base_url, page, count, self.page_size, flair)
        return {"items": items, "count": count, "previous": previous, "next": next_url}

    def create(self, claim: Optional[AuthClaim], data: Dict[str, Any]) -> Dict[str, Any]:
        claim = self._require_claim(claim)
        post = Post(
            description=data['description'],
            image=data['image'],
            flair=data['flair'],
            owner=claim.id
        )
        new_post = self.post_repository.create_for_owner(asdict(post), claim.id)
        self.publisher.emit(EventType.POST_CREATED)
        return new_post

    def delete(self, claim: Optional[AuthClaim], post_id: str) -> None:
        claim = self._require_claim(claim)
        self.post_repository.delete_for_owner(post_id, claim.id)
        self.publisher.emit(EventType.POST_DELETED)

    def add_favorite(self, claim: Optional[AuthClaim], post_id: str) -> Dict[str, Any]:
        claim = self._require_claim(claim)
        # 404 for an unknown post before touching the user.
        self.post_repository.query_by_id(post_id)
        return self.user_repository.add_favorite(claim.id, post_id)

    def remove_favorite(self, claim: Optional[AuthClaim], post_id: str) -> Dict[str, Any]:
        claim = self._require_claim(claim)
        return self.user_repository.remove_favorite(claim.id, post_id)

    def add_comment(self, claim: Optional[AuthClaim], post_id: str, text: str) -> Dict[str, Any]:
        claim = self._require_claim(claim)
        if not self.user_repository.exists(claim.id):
            raise HttpError(404, 'Not found', 'Bad id for the query')
        comment = Comment(comment=text, owner=claim.id)
        updated_post = self.post_repository.append_comment(post_id, asdict(comment))
        self.publisher.emit(EventType.UPDATE_POST)
        return updated_post

    def patch(self, post_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        if not data:
            raise HttpError(400, 'Bad request', 'Nothing to update')
        updated_post = self.post_repository.update(post_id, data)
        logging.info(f"Post patched (post_id: {post_id}, fields: {sorted(data)})")
        self.publisher.emit(EventType.UPDATE_POST)
        return updated_post
