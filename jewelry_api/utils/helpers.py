from datetime import datetime

from bson import ObjectId
from flask import current_app, request


def make_log_tag(file, resource, method, ip, user_id, role, branch_id, **kwargs):
    # Base tag
    log_tag = (
        f"[{file}]"
        f"[{resource}]"
        f"[{method}]"
        f"[ip:{ip}]"
        f"[user:{user_id}]"
        f"[role:{role}]"
        f"[branch:{branch_id}]"
    )

    # Append extra context fields
    for key, value in kwargs.items():
        log_tag += f"[{key}:{value}]"

    return log_tag


def principal_log_tag(file, resource, method, principal, **kwargs):
    """make_log_tag for an authenticated request."""
    return make_log_tag(
        file,
        resource,
        method,
        request.remote_addr,
        principal.uid,
        principal.role,
        principal.branch_id,
        **kwargs,
    )


def error_details(error):
    """Detail string for a response body, only when the app exposes error details."""
    if current_app.config.get("EXPOSE_ERROR_DETAILS"):
        return str(error)
    return None


def serialize_value(value):
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_value(v) for v in value]
    return value


def serialize_doc(doc, id_field="id"):
    """
    Shape a stored document for a JSON response: `_id` becomes `id_field`,
    ObjectIds become strings and datetimes ISO-8601 strings.
    """
    if doc is None:
        return None

    out = {id_field: str(doc["_id"])} if "_id" in doc else {}
    for key, value in doc.items():
        if key == "_id":
            continue
        out[key] = serialize_value(value)
    return out
