# finalmeme/api/posts/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate


class PostCreateSchema(Schema):
    """Form fields of POST /post/. The image travels as the `image` file part."""
    class Meta:
        # `owner` or anything else the client sends is dropped, ownership comes from the token.
        unknown = EXCLUDE

    description = fields.Str(required=True, validate=validate.Length(min=1, max=2000))
    flair = fields.Str(required=True, validate=validate.Length(min=1))


class PostPatchSchema(Schema):
    """PATCH /post/{post_id}"""
    class Meta:
        unknown = EXCLUDE

    description = fields.Str(validate=validate.Length(min=1, max=2000))
    flair = fields.Str(validate=validate.Length(min=1))


class CommentCreateSchema(Schema):
    """PATCH /post/addcomment/{post_id}"""
    class Meta:
        unknown = EXCLUDE

    comment = fields.Str(required=True, validate=validate.Length(min=1, max=1000))
