# schemas/invoice_schema.py
from marshmallow import Schema, fields, validate, EXCLUDE


class InvoiceLineSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1))
    quantity = fields.Int(required=True, validate=validate.Range(min=1))
    weight = fields.Float(required=True, validate=validate.Range(min=0))
    price = fields.Float(required=True, validate=validate.Range(min=0))


class InvoiceSchema(Schema):
    """Schema for creating an invoice."""

    class Meta:
        unknown = EXCLUDE

    customerName = fields.Str(required=True, validate=validate.Length(min=1))
    customerPhone = fields.Str(required=True, validate=validate.Length(min=1, max=30))
    items = fields.List(
        fields.Nested(InvoiceLineSchema),
        required=True,
        validate=validate.Length(min=1),
    )
    totalPrice = fields.Float(required=True, validate=validate.Range(min=0))
    goldPrice = fields.Float(required=True, validate=validate.Range(min=0))
    totalProfits = fields.Float(load_default=None, allow_none=True)

    # honoured for admins only; everyone else is forced to their own branch
    branchId = fields.Str()


class InvoiceIdQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Str(required=True, error_messages={"required": "id is required"})
