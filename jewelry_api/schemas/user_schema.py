# schemas/user_schema.py
from marshmallow import (
    Schema, fields, validate, validates_schema, ValidationError, EXCLUDE
)

from ..constants.service_code import VALID_ROLES


class UserCreateSchema(Schema):
    """Schema for creating an account and its profile."""

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(
        required=True,
        error_messages={"required": "email is required", "invalid": "Invalid email address"},
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(min=6),
        error_messages={"required": "password is required"},
    )
    firstName = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    lastName = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    role = fields.Str(required=True, validate=validate.OneOf(VALID_ROLES))
    branchId = fields.Str(required=True, validate=validate.Length(min=1))


class UserUpdateSchema(Schema):
    """Only role and branch membership are mutable."""

    class Meta:
        unknown = EXCLUDE

    role = fields.Str(validate=validate.OneOf(VALID_ROLES))
    branchId = fields.Str(validate=validate.Length(min=1))

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("Provide role or branchId", field_name="_schema")


class UserSchema(Schema):
    uid = fields.Str()
    email = fields.Str()
    firstName = fields.Str()
    lastName = fields.Str()
    role = fields.Str()
    branchId = fields.Str(allow_none=True)
    isDelete = fields.Bool()
    createdAt = fields.Str()
    updatedAt = fields.Str()
    deletedAt = fields.Str()
