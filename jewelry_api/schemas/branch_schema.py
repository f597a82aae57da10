from marshmallow import Schema, fields, validate, EXCLUDE


class BranchSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(
        required=True,
        validate=validate.Length(min=1, max=120),
        error_messages={"required": "name is required"},
    )
