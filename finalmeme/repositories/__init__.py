from .base import FirestoreRepository, reference_id
from .posts import PostRepository
from .users import UserRepository

__all__ = ['FirestoreRepository', 'reference_id', 'PostRepository', 'UserRepository']
