# jewelry_api/utils/extensions.py

from flask import request, has_request_context
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .logger import Log


def _get_client_ip():
    """Safely get client IP, returns 'unknown' if outside request context."""
    if has_request_context():
        return get_remote_address() or "unknown"
    return "unknown"


def log_rate_limit_breach(request_limit):
    """
    Called by Flask-Limiter whenever a limit is exceeded.
    """
    client_ip = _get_client_ip()

    try:
        limit_str = str(request_limit.limit)
    except AttributeError:
        limit_str = str(request_limit)

    Log.warning(
        f"[RATE_LIMIT_BREACH][{client_ip}] "
        f"limit={limit_str}, key={getattr(request_limit, 'key', 'unknown')}, "
        f"method={request.method}, path={request.path}, endpoint={request.endpoint or 'unknown'}"
    )


# storage and enablement come from RATELIMIT_* app config
limiter = Limiter(
    key_func=get_remote_address,
    on_breach=log_rate_limit_breach,
)
