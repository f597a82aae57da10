# jewelry_api/utils/rate_limits.py

from flask import request
from flask_limiter.util import get_remote_address

from .extensions import limiter


def _get_request_data():
    """Safely get JSON or form data as a dict."""
    data = request.get_json(silent=True)
    if not data:
        data = request.form or request.values
    return data or {}


def login_key_func():
    """
    Rate-limit per email where possible, else fall back to IP.
    """
    email = _get_request_data().get("email")
    if email:
        return f"login:{str(email).lower()[:100]}"
    return get_remote_address()


def login_ip_limiter(
    entity_name: str = "login",
    limit_str: str = "5 per minute; 30 per hour; 100 per day",
):
    """
    Per-IP limit for the login endpoint.
    """
    return limiter.shared_limit(
        limit_str,
        scope=f"{entity_name}-ip",
        key_func=get_remote_address,
        methods=["POST"],
        error_message=f"Too many {entity_name} attempts from this IP. Please try again later.",
    )


def login_user_limiter(
    entity_name: str = "login",
    limit_str: str = "3 per 5 minutes; 10 per hour; 20 per day",
):
    """
    Per-account limit for the login endpoint; blocks credential stuffing
    against a single email.
    """
    return limiter.shared_limit(
        limit_str,
        scope=f"{entity_name}-user",
        key_func=login_key_func,
        methods=["POST"],
        error_message=f"Too many {entity_name} attempts for this account. Please try again later.",
    )


def crud_write_limiter(entity_name: str, limit_str: str = "60 per minute"):
    """Per-IP limit for create/update/delete endpoints."""
    return limiter.shared_limit(
        limit_str,
        scope=f"{entity_name}-write",
        key_func=get_remote_address,
        methods=["POST", "PUT", "PATCH", "DELETE"],
        error_message=f"Too many {entity_name} changes. Please slow down.",
    )
