# resources/user_resource.py
from flask.views import MethodView

from ..constants.service_code import ACTIONS, HTTP_STATUS_CODES, RESOURCES
from ..extensions.identity import get_identity
from ..models.user_model import User
from ..schemas.user_schema import UserCreateSchema, UserSchema, UserUpdateSchema
from ..security.auth import token_required
from ..security.policy import authorize, needs_admin_count, require
from ..services.account_service import create_account
from ..utils.blueprint import Blueprint
from ..utils.errors import NotFoundError
from ..utils.helpers import principal_log_tag, serialize_doc
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.rate_limits import crud_write_limiter


blp_user = Blueprint("Users", __name__, description="User account management")


def _load_user(uid, log_tag):
    user = User.get_by_id(uid)
    if not user:
        Log.info(f"{log_tag} User not found")
        raise NotFoundError("User not found")
    return user


@blp_user.route("/users")
class UsersResource(MethodView):

    @token_required
    @crud_write_limiter(entity_name="user")
    @blp_user.arguments(UserCreateSchema)
    @blp_user.response(HTTP_STATUS_CODES["CREATED"], UserSchema)
    @blp_user.doc(
        summary="Create a user account",
        description="""
            • Admin: any role, any branch.
            • Manager: sales users in their own branch only.
            • Sales: not allowed.
        """,
        security=[{"Bearer": []}],
    )
    def post(self, user_data, principal):
        log_tag = principal_log_tag(
            "user_resource.py", "UsersResource", "post", principal,
            email=user_data["email"], target_role=user_data["role"],
        )

        require(authorize(principal, ACTIONS["CREATE"], RESOURCES["USER"], proposed=user_data))

        uid = create_account(
            get_identity(),
            email=user_data["email"],
            password=user_data["password"],
            role=user_data["role"],
            branch_id=user_data["branchId"],
            first_name=user_data["firstName"],
            last_name=user_data["lastName"],
            log_tag=log_tag,
        )

        Log.info(f"{log_tag} User created")

        return prepared_response(
            status=True,
            status_code="CREATED",
            message="User created",
            data=serialize_doc(User.get_by_id(uid), id_field="uid"),
        )

    @token_required
    @blp_user.response(HTTP_STATUS_CODES["OK"], UserSchema(many=True))
    @blp_user.doc(summary="List active users", security=[{"Bearer": []}])
    def get(self, principal):
        log_tag = principal_log_tag("user_resource.py", "UsersResource", "get", principal)

        require(authorize(principal, ACTIONS["LIST"], RESOURCES["USER"]))

        branch_filter = None if principal.is_admin else principal.branch_id
        users = User.find_active(branch_id=branch_filter)
        Log.info(f"{log_tag} {len(users)} users")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Users retrieved successfully",
            data=[serialize_doc(u, id_field="uid") for u in users],
        )


@blp_user.route("/users/<uid>")
class UserResource(MethodView):

    @token_required
    @blp_user.response(HTTP_STATUS_CODES["OK"], UserSchema)
    @blp_user.doc(summary="Get a user", security=[{"Bearer": []}])
    def get(self, uid, principal):
        log_tag = principal_log_tag("user_resource.py", "UserResource", "get", principal, target=uid)

        user = _load_user(uid, log_tag)
        require(authorize(principal, ACTIONS["READ"], RESOURCES["USER"], target=user))

        return prepared_response(
            status=True,
            status_code="OK",
            message="User retrieved successfully",
            data=serialize_doc(user, id_field="uid"),
        )

    @token_required
    @crud_write_limiter(entity_name="user")
    @blp_user.arguments(UserUpdateSchema)
    @blp_user.response(HTTP_STATUS_CODES["OK"], UserSchema)
    @blp_user.doc(summary="Change a user's role or branch", security=[{"Bearer": []}])
    def put(self, user_data, uid, principal):
        log_tag = principal_log_tag("user_resource.py", "UserResource", "put", principal, target=uid)

        user = _load_user(uid, log_tag)

        active_admins = None
        if needs_admin_count(ACTIONS["UPDATE"], user, user_data):
            active_admins = User.count_active_admins()

        require(authorize(
            principal, ACTIONS["UPDATE"], RESOURCES["USER"],
            target=user, proposed=user_data, active_admins=active_admins,
        ))

        User.update(uid, user_data)
        updated = User.get_by_id(uid)

        get_identity().set_custom_claims(uid, User.claims_for(updated))
        Log.info(f"{log_tag} User updated: {user_data}")

        return prepared_response(
            status=True,
            status_code="OK",
            message="User updated",
            data=serialize_doc(updated, id_field="uid"),
        )

    @token_required
    @crud_write_limiter(entity_name="user")
    @blp_user.doc(summary="Soft-delete a user", security=[{"Bearer": []}])
    def delete(self, uid, principal):
        log_tag = principal_log_tag("user_resource.py", "UserResource", "delete", principal, target=uid)

        user = _load_user(uid, log_tag)

        active_admins = None
        if needs_admin_count(ACTIONS["DELETE"], user):
            active_admins = User.count_active_admins()

        require(authorize(
            principal, ACTIONS["DELETE"], RESOURCES["USER"],
            target=user, active_admins=active_admins,
        ))

        User.soft_delete(uid)

        try:
            get_identity().revoke_refresh_tokens(uid)
        except Exception as e:
            Log.error(f"{log_tag} Could not revoke tokens of deleted user: {e}")

        return prepared_response(
            status=True,
            status_code="OK",
            message="User soft-deleted",
            data={"uid": uid},
        )
