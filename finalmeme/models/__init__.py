from .event import EventType
from .image import Image
from .post import Comment, Post
from .user import User

__all__ = ['EventType', 'Image', 'Comment', 'Post', 'User']
