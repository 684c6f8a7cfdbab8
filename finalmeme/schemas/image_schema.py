from marshmallow import Schema, fields


class ImageSchema(Schema):
    """Image reference as it appears in responses."""
    url_original = fields.Str(data_key='urlOriginal')
    url = fields.Str()
    mimetype = fields.Str()
    size = fields.Int()
