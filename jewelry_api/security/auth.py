# jewelry_api/security/auth.py

from dataclasses import dataclass
from functools import wraps

from flask import current_app, request

from ..constants.service_code import AUTHENTICATION_MESSAGES, ROLES, VALID_ROLES
from ..extensions.identity import get_identity
from ..utils.errors import UnauthorizedError
from ..utils.logger import Log


@dataclass(frozen=True)
class Principal:
    """The authenticated identity attached to a request."""
    uid: str
    role: str
    branch_id: str = ""
    first_name: str = ""

    @property
    def is_admin(self):
        return self.role == ROLES["ADMIN"]

    @property
    def is_manager(self):
        return self.role == ROLES["MANAGER"]

    @property
    def is_sales(self):
        return self.role == ROLES["SALES"]


def principal_from_claims(claims):
    """Build a Principal from decoded token claims; unknown roles are not authenticated."""
    uid = claims.get("uid") or claims.get("sub")
    role = claims.get("role")

    if not uid or not role:
        raise UnauthorizedError(AUTHENTICATION_MESSAGES["MISSING_CLAIMS"])
    if role not in VALID_ROLES:
        raise UnauthorizedError(AUTHENTICATION_MESSAGES["MISSING_CLAIMS"])

    return Principal(
        uid=uid,
        role=role,
        branch_id=claims.get("branchId") or "",
        first_name=claims.get("firstName") or "",
    )


def verify_bearer(auth_header, identity, check_revoked=True):
    """
    Verify an `Authorization` header value and return the caller's Principal.

    Raises UnauthorizedError when the header is absent or malformed, when the
    identity provider rejects the token, or when required claims are missing.
    """
    if not auth_header or not auth_header.startswith("Bearer "):
        raise UnauthorizedError(AUTHENTICATION_MESSAGES["AUTHENTICATION_REQUIRED"])

    token = auth_header[len("Bearer "):].strip()
    if not token:
        raise UnauthorizedError(AUTHENTICATION_MESSAGES["AUTHENTICATION_REQUIRED"])

    claims = identity.verify_id_token(token, check_revoked=check_revoked)
    return principal_from_claims(claims)


def token_required(f):
    """
    Verify the bearer token and hand the Principal to the view as the
    `principal` keyword argument.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        log_tag = f"[auth.py][token_required][{request.remote_addr}][{request.method} {request.path}]"
        try:
            principal = verify_bearer(
                request.headers.get("Authorization"),
                get_identity(),
                check_revoked=current_app.config.get("CHECK_REVOKED_TOKENS", True),
            )
        except UnauthorizedError as e:
            Log.info(f"{log_tag} {e.message}")
            raise

        return f(*args, principal=principal, **kwargs)
    return decorated
