# resources/auth_resource.py
from flask import request
from flask.views import MethodView

from ..constants.service_code import AUTHENTICATION_MESSAGES, HTTP_STATUS_CODES
from ..extensions.identity import get_identity
from ..models.user_model import User
from ..schemas.login_schema import LoginResponseSchema, LoginSchema
from ..security.auth import token_required
from ..utils.blueprint import Blueprint
from ..utils.errors import ForbiddenError, NotFoundError
from ..utils.helpers import make_log_tag, principal_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.rate_limits import login_ip_limiter, login_user_limiter


blp_auth = Blueprint("Authentication", __name__, description="Authentication management")


@blp_auth.route("/auth/login", methods=["POST"])
class LoginResource(MethodView):

    @login_ip_limiter("login")
    @login_user_limiter("login")
    @blp_auth.arguments(LoginSchema)
    @blp_auth.response(HTTP_STATUS_CODES["OK"], LoginResponseSchema)
    @blp_auth.doc(
        summary="Sign in with email and password",
        description="""
            Credentials are checked by the identity provider. The caller's
            role and branch are then written to the token claims so the
            returned token carries them.
        """,
    )
    def post(self, login_data):
        email = login_data["email"]
        password = login_data["password"]
        log_tag = make_log_tag("auth_resource.py", "LoginResource", "post", request.remote_addr, None, None, None, email=email)

        identity = get_identity()

        # raises UnauthorizedError on bad credentials
        session = identity.sign_in_with_password(email, password)
        uid = session.get("localId")

        user = User.get_by_id(uid)
        if not user:
            Log.info(f"{log_tag} No profile for uid {uid}")
            raise NotFoundError("User not found")

        if user.get("isDelete"):
            Log.info(f"{log_tag} Login refused, account deleted")
            raise ForbiddenError(AUTHENTICATION_MESSAGES["ACCOUNT_DELETED"])

        token = session["idToken"]
        claims = User.claims_for(user)
        current = identity.verify_id_token(token, check_revoked=False)

        if any(current.get(key) != value for key, value in claims.items()):
            Log.info(f"{log_tag} Syncing custom claims {claims}")
            identity.set_custom_claims(uid, claims)
            # claims only show up in tokens issued after they are set
            token = identity.sign_in_with_password(email, password)["idToken"]

        Log.info(f"{log_tag} Login successful for {uid}")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Login successful",
            data={
                "id": uid,
                "email": user.get("email") or email,
                "role": user.get("role"),
                "branchId": user.get("branchId"),
                "firstName": user.get("firstName"),
                "lastName": user.get("lastName"),
                "token": token,
            },
        )


@blp_auth.route("/auth/logout", methods=["POST"])
class LogoutResource(MethodView):

    @token_required
    @blp_auth.doc(summary="Revoke the caller's refresh tokens", security=[{"Bearer": []}])
    def post(self, principal):
        log_tag = principal_log_tag("auth_resource.py", "LogoutResource", "post", principal)

        get_identity().revoke_refresh_tokens(principal.uid)
        Log.info(f"{log_tag} Refresh tokens revoked")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Logout successful",
        )
