# schemas/item_schema.py
from marshmallow import (
    Schema, fields, validate, validates_schema, ValidationError, EXCLUDE
)


class ItemSchema(Schema):
    """Schema for creating an item."""

    class Meta:
        unknown = EXCLUDE

    # Required fields
    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    weight = fields.Float(required=True, validate=validate.Range(min=0))
    category = fields.Str(required=True, validate=validate.Length(min=1))
    karat = fields.Int(required=True, validate=validate.Range(min=1, max=24))
    factoryFees = fields.Float(required=True, validate=validate.Range(min=0))
    vendor = fields.Str(required=True, validate=validate.Length(min=1))

    # Optional fields
    Quantity = fields.Int(validate=validate.Range(min=0))
    photo = fields.Str(allow_none=True)
    branchId = fields.Str()


class ItemUpdateSchema(Schema):
    """Partial update; the owning branch cannot change."""

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(validate=validate.Length(min=1, max=200))
    weight = fields.Float(validate=validate.Range(min=0))
    category = fields.Str(validate=validate.Length(min=1))
    karat = fields.Int(validate=validate.Range(min=1, max=24))
    factoryFees = fields.Float(validate=validate.Range(min=0))
    vendor = fields.Str(validate=validate.Length(min=1))
    Quantity = fields.Int(validate=validate.Range(min=0))
    photo = fields.Str(allow_none=True)

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("No fields to update", field_name="_schema")
