from marshmallow import Schema, fields, EXCLUDE


class ChartQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    branchId = fields.Str()


class SumsSchema(Schema):
    branchId = fields.Str()
    userId = fields.Str()
    totalPrice = fields.Float()
    totalProfits = fields.Float()
    count = fields.Int()
