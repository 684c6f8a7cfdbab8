from marshmallow import Schema, fields

from finalmeme.schemas.fields import Reference
from finalmeme.schemas.image_schema import ImageSchema


def _user_schema():
    from finalmeme.schemas.user_schema import UserSchema
    return UserSchema()


class CommentSchema(Schema):
    comment = fields.Str()
    owner = Reference(_user_schema)


class PostSchema(Schema):
    id = fields.Str(dump_only=True)
    description = fields.Str()
    image = fields.Nested(ImageSchema, allow_none=True)
    flair = fields.Str()
    owner = Reference(_user_schema)
    comments = fields.List(fields.Nested(CommentSchema))


class PageResponseSchema(Schema):
    """Envelope of the post feed."""
    items = fields.List(fields.Nested(PostSchema))
    count = fields.Int()
    previous = fields.Str(allow_none=True)
    next = fields.Str(allow_none=True)
