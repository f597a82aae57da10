from flask import request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException
from pymongo.errors import PyMongoError

from .json_response import prepared_response
from .logger import Log
from .helpers import error_details
from ..constants.service_code import ERROR_MESSAGES, HTTP_STATUS_CODES

STATUS_NAMES = {code: name for name, code in HTTP_STATUS_CODES.items()}

# Handle the ApiError taxonomy (400/401/403/404/409)
def handle_api_error(error):
    Log.info(f"[error_handlers.py][{request.method} {request.path}] {error.status_name}: {error.message}")
    return prepared_response(False, error.status_name, error.message, errors=error.errors)

# Handle PermissionError raised outside the policy engine
def handle_permission_error(error):
    return prepared_response(False, "FORBIDDEN", str(error) or "Forbidden")

# Handle ValidationError
def handle_validation_error(error):
    return prepared_response(
        False,
        "BAD_REQUEST",
        ERROR_MESSAGES["VALIDATION_FAILED"],
        errors=error.messages,
    )

def handle_rate_limit(e):
    # e.description contains whatever was passed as error_message=
    return prepared_response(
        False,
        "TOO_MANY_REQUESTS",
        e.description or "Too many requests, please try again later.",
    )

# Handle werkzeug HTTP errors (routing 404/405 and request body validation aborts)
def handle_http_exception(error):
    status_name = STATUS_NAMES.get(error.code)
    if status_name is None:
        return error

    messages = (getattr(error, "data", None) or {}).get("messages")
    if messages is not None:
        return prepared_response(False, status_name, ERROR_MESSAGES["VALIDATION_FAILED"], errors=messages)
    return prepared_response(False, status_name, error.description or error.name)

def handle_store_error(error):
    Log.error(f"[error_handlers.py][{request.method} {request.path}] PyMongoError: {error}")
    return prepared_response(
        False,
        "INTERNAL_SERVER_ERROR",
        "An unexpected database error occurred.",
        errors=error_details(error),
    )

def handle_unexpected_error(error):
    Log.exception(f"[error_handlers.py][{request.method} {request.path}] Unhandled error: {error}")
    return prepared_response(
        False,
        "INTERNAL_SERVER_ERROR",
        ERROR_MESSAGES["SERVER_ERROR"],
        errors=error_details(error),
    )


def register_error_handlers(app):
    from flask_limiter.errors import RateLimitExceeded
    from .errors import ApiError

    app.errorhandler(ApiError)(handle_api_error)
    app.errorhandler(PermissionError)(handle_permission_error)
    app.errorhandler(ValidationError)(handle_validation_error)
    app.errorhandler(RateLimitExceeded)(handle_rate_limit)
    app.errorhandler(HTTPException)(handle_http_exception)
    app.errorhandler(PyMongoError)(handle_store_error)
    app.errorhandler(Exception)(handle_unexpected_error)
