# jewelry_api/utils/errors.py


class ApiError(Exception):
    """
    Base class for errors that map onto an HTTP status.

    `status_name` is a key of HTTP_STATUS_CODES so handlers and
    prepared_response agree on the numeric code.
    """
    status_name = "INTERNAL_SERVER_ERROR"

    def __init__(self, message=None, errors=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.errors = errors


class BadRequestError(ApiError):
    status_name = "BAD_REQUEST"


class UnauthorizedError(ApiError):
    status_name = "UNAUTHORIZED"


class ForbiddenError(ApiError, PermissionError):
    status_name = "FORBIDDEN"


class NotFoundError(ApiError):
    status_name = "NOT_FOUND"


class ConflictError(ApiError):
    status_name = "CONFLICT"
