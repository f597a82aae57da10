# resources/branch_resource.py
from flask.views import MethodView

from ..constants.service_code import ACTIONS, HTTP_STATUS_CODES, RESOURCES
from ..models.branch_model import Branch
from ..schemas.branch_schema import BranchSchema
from ..security.auth import token_required
from ..security.policy import authorize, require
from ..utils.blueprint import Blueprint
from ..utils.errors import ConflictError, NotFoundError
from ..utils.helpers import principal_log_tag, serialize_doc
from ..utils.json_response import prepared_response
from ..utils.logger import Log
from ..utils.rate_limits import crud_write_limiter


blp_branch = Blueprint("Branches", __name__, description="Branch management operations")


def _load_branch(branch_id, log_tag):
    branch = Branch.get_by_id(branch_id)
    if not branch:
        Log.info(f"{log_tag} Branch not found")
        raise NotFoundError("Branch not found")
    return branch


@blp_branch.route("/branches")
class BranchesResource(MethodView):

    @token_required
    @blp_branch.response(HTTP_STATUS_CODES["OK"], BranchSchema(many=True))
    @blp_branch.doc(summary="List active branches (admin only)", security=[{"Bearer": []}])
    def get(self, principal):
        log_tag = principal_log_tag("branch_resource.py", "BranchesResource", "get", principal)

        require(authorize(principal, ACTIONS["LIST"], RESOURCES["BRANCH"]))

        branches = Branch.find_active()
        Log.info(f"{log_tag} {len(branches)} branches")
        return prepared_response(
            status=True,
            status_code="OK",
            message="Branches retrieved successfully",
            data=[serialize_doc(b) for b in branches],
        )

    @token_required
    @crud_write_limiter(entity_name="branch")
    @blp_branch.arguments(BranchSchema)
    @blp_branch.response(HTTP_STATUS_CODES["CREATED"], BranchSchema)
    @blp_branch.doc(summary="Create a branch (admin only)", security=[{"Bearer": []}])
    def post(self, branch_data, principal):
        """Create a branch; names are unique among active branches."""
        name = branch_data["name"].strip()
        log_tag = principal_log_tag("branch_resource.py", "BranchesResource", "post", principal, name=name)

        require(authorize(principal, ACTIONS["CREATE"], RESOURCES["BRANCH"], proposed={"name": name}))

        Log.info(f"{log_tag} Checking if branch already exists")
        if Branch.name_exists(name):
            Log.info(f"{log_tag} Branch already exists")
            raise ConflictError("Branch already exists")

        branch_id = Branch(name=name).save()
        Log.info(f"{log_tag} Branch created: {branch_id}")

        return prepared_response(
            status=True,
            status_code="CREATED",
            message="Branch created",
            data=serialize_doc(Branch.get_by_id(branch_id)),
        )


@blp_branch.route("/branches/<branch_id>")
class BranchResource(MethodView):

    @token_required
    @crud_write_limiter(entity_name="branch")
    @blp_branch.arguments(BranchSchema)
    @blp_branch.response(HTTP_STATUS_CODES["OK"], BranchSchema)
    @blp_branch.doc(
        summary="Rename a branch",
        description="Admins may rename any branch; a manager may rename their own branch.",
        security=[{"Bearer": []}],
    )
    def put(self, branch_data, branch_id, principal):
        name = branch_data["name"].strip()
        log_tag = principal_log_tag("branch_resource.py", "BranchResource", "put", principal, target_branch=branch_id)

        branch = _load_branch(branch_id, log_tag)
        require(authorize(principal, ACTIONS["UPDATE"], RESOURCES["BRANCH"], target=branch, proposed={"name": name}))

        if Branch.name_exists(name, exclude_id=branch_id):
            Log.info(f"{log_tag} Another branch already uses this name")
            raise ConflictError("Branch already exists")

        Branch.update(branch_id, {"name": name})
        Log.info(f"{log_tag} Branch renamed")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Branch updated",
            data=serialize_doc(Branch.get_by_id(branch_id)),
        )

    @token_required
    @crud_write_limiter(entity_name="branch")
    @blp_branch.doc(summary="Soft-delete a branch (admin only)", security=[{"Bearer": []}])
    def delete(self, branch_id, principal):
        log_tag = principal_log_tag("branch_resource.py", "BranchResource", "delete", principal, target_branch=branch_id)

        branch = _load_branch(branch_id, log_tag)
        require(authorize(principal, ACTIONS["DELETE"], RESOURCES["BRANCH"], target=branch))

        Branch.soft_delete(branch_id)

        return prepared_response(
            status=True,
            status_code="OK",
            message="Branch deleted",
            data={"id": branch_id},
        )
