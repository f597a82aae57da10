from marshmallow import Schema, fields, EXCLUDE


class LoginSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(
        required=True,
        error_messages={"required": "email is required", "invalid": "Invalid email address"},
    )
    password = fields.Str(
        required=True,
        load_only=True,
        error_messages={"required": "password is required"},
    )


# --- Responses ---
class LoginResponseSchema(Schema):
    id = fields.Str()
    email = fields.Str()
    role = fields.Str()
    branchId = fields.Str(allow_none=True)
    firstName = fields.Str(allow_none=True)
    lastName = fields.Str(allow_none=True)
    token = fields.Str()
