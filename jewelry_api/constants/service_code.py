HTTP_STATUS_CODES = {
    "OK": 200,
    "CREATED": 201,
    "NO_CONTENT": 204,
    "BAD_REQUEST": 400,
    "UNAUTHORIZED": 401,
    "FORBIDDEN": 403,
    "NOT_FOUND": 404,
    "METHOD_NOT_ALLOWED": 405,
    "CONFLICT": 409,
    "TOO_MANY_REQUESTS": 429,
    "INTERNAL_SERVER_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}

ERROR_MESSAGES = {
    "VALIDATION_FAILED": "Validation failed. Please check your inputs.",
    "SERVER_ERROR": "An unexpected error occurred. Please try again later.",
}

AUTHENTICATION_MESSAGES = {
    "AUTHENTICATION_REQUIRED": "Unauthorized: No token provided",
    "INVALID_TOKEN": "Invalid or expired token",
    "MISSING_CLAIMS": "Invalid token: Missing required claims",
    "INVALID_CREDENTIALS": "Invalid email or password",
    "ACCOUNT_DELETED": "This account has been deleted",
}

# Roles carried in the identity token claims
ROLES = {
    "ADMIN": "admin",
    "MANAGER": "manager",
    "SALES": "sales",
}

VALID_ROLES = tuple(ROLES.values())

ACTIONS = {
    "CREATE": "create",
    "READ": "read",
    "LIST": "list",
    "UPDATE": "update",
    "DELETE": "delete",
}

RESOURCES = {
    "BRANCH": "branch",
    "USER": "user",
    "ITEM": "item",
    "INVOICE": "invoice",
    "CHART": "chart",
}

COLLECTIONS = {
    "USERS": "users",
    "BRANCHES": "branches",
    "ITEMS": "items",
    "INVOICES": "invoices",
}
