# finalmeme/schemas/fields.py
from marshmallow import fields


class Reference(fields.Field):
    """
    Relationship stored as an id and expanded on reads.
    Dumps the nested document through `schema_factory()` when expanded,
    otherwise the bare id.
    """

    def __init__(self, schema_factory, **kwargs):
        super().__init__(**kwargs)
        self.schema_factory = schema_factory

    def _serialize(self, value, attr, obj, **kwargs):
        if value is None:
            return None
        if isinstance(value, dict):
            return self.schema_factory().dump(value)
        return value
