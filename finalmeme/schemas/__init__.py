from .image_schema import ImageSchema
from .post_schema import CommentSchema, PageResponseSchema, PostSchema
from .user_schema import LoginResponseSchema, UserSchema

__all__ = [
    'ImageSchema', 'CommentSchema', 'PageResponseSchema', 'PostSchema',
    'LoginResponseSchema', 'UserSchema'
]
