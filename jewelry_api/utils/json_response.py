from flask import jsonify
from ..constants.service_code import HTTP_STATUS_CODES


def envelope(success, status_name, message, data=None, errors=None):
    """Build the response body. `data` and `errors` are left out when None."""
    body = {
        "success": success,
        "status_code": HTTP_STATUS_CODES[status_name],
        "message": f"{message}",
    }
    if data is not None:
        body["data"] = data
    if errors is not None:
        body["errors"] = errors
    return body


def prepared_response(status, status_code, message, data=None, errors=None):
    """Return `(json, http_code)` for a view or an error handler."""
    return jsonify(envelope(status, status_code, message, data=data, errors=errors)), HTTP_STATUS_CODES[status_code]
