from marshmallow import Schema, fields

from finalmeme.schemas.fields import Reference
from finalmeme.schemas.image_schema import ImageSchema


def _post_schema():
    from finalmeme.schemas.post_schema import PostSchema
    return PostSchema()


class UserSchema(Schema):
    """
    User serialization. `passwd` is load_only: the hash stored in Firestore
    is never written to a response, however the user was loaded.
    """
    id = fields.Str(dump_only=True)
    user_name = fields.Str(data_key='userName')
    email = fields.Email()
    passwd = fields.Str(load_only=True)
    avatar = fields.Nested(ImageSchema, allow_none=True)
    created_post = fields.List(Reference(_post_schema), data_key='createdPost')
    favorite_post = fields.List(Reference(_post_schema), data_key='favoritePost')


class LoginResponseSchema(Schema):
    token = fields.Str(required=True)
    user = fields.Nested(UserSchema, required=True)
