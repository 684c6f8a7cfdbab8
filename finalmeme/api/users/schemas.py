# finalmeme/api/users/schemas.py
from marshmallow import EXCLUDE, Schema, fields, validate


class UserRegisterSchema(Schema):
    """
    Form fields of POST /user/register. The avatar travels as the `avatar` file part.
    Passwords need at least 8 characters mixing letters and digits.
    """
    class Meta:
        unknown = EXCLUDE

    user_name = fields.Str(required=True, data_key='userName', validate=validate.Length(min=1))
    email = fields.Email(required=True)
    passwd = fields.Str(
        required=True,
        validate=validate.Regexp(
            r'^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d]{8,}$',
            error="Password needs 8 or more letters and digits."
        )
    )
