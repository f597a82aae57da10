# resources/chart_resource.py
from flask.views import MethodView

from ..constants.service_code import ACTIONS, HTTP_STATUS_CODES, RESOURCES
from ..schemas.chart_schema import ChartQuerySchema, SumsSchema
from ..security.auth import token_required
from ..security.policy import authorize, require
from ..services.chart_service import ChartService
from ..utils.blueprint import Blueprint
from ..utils.helpers import principal_log_tag
from ..utils.json_response import prepared_response
from ..utils.logger import Log


blp_chart = Blueprint("Charts", __name__, description="Invoice totals for dashboards")


def _scoped_branch(principal, query_data):
    """
    The branch a branch-level report covers. Admins see every branch unless
    they ask for one; everyone else defaults to their own.
    """
    requested = query_data.get("branchId")
    if requested:
        return requested
    return None if principal.is_admin else principal.branch_id


@blp_chart.route("/charts/userSums")
class UserSumsResource(MethodView):

    @token_required
    @blp_chart.response(HTTP_STATUS_CODES["OK"], SumsSchema)
    @blp_chart.doc(summary="Invoice totals of the caller", security=[{"Bearer": []}])
    def get(self, principal):
        log_tag = principal_log_tag("chart_resource.py", "UserSumsResource", "get", principal)

        require(authorize(principal, ACTIONS["READ"], RESOURCES["CHART"], target={"scope": "user"}))

        sums = ChartService.user_sums(principal.uid)
        Log.info(f"{log_tag} count={sums['count']}")

        return prepared_response(
            status=True,
            status_code="OK",
            message="User totals retrieved successfully",
            data=sums,
        )


@blp_chart.route("/charts/branchSums")
class BranchSumsResource(MethodView):

    @token_required
    @blp_chart.arguments(ChartQuerySchema, location="query")
    @blp_chart.response(HTTP_STATUS_CODES["OK"], SumsSchema(many=True))
    @blp_chart.doc(summary="Invoice totals per branch", security=[{"Bearer": []}])
    def get(self, query_data, principal):
        branch_id = _scoped_branch(principal, query_data)
        log_tag = principal_log_tag("chart_resource.py", "BranchSumsResource", "get", principal, scope=branch_id)

        require(authorize(
            principal, ACTIONS["READ"], RESOURCES["CHART"],
            target={"scope": "branch", "branchId": branch_id},
        ))

        rows = ChartService.branch_sums(branch_id)
        Log.info(f"{log_tag} {len(rows)} rows")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Branch totals retrieved successfully",
            data=rows,
        )


@blp_chart.route("/charts/branchUsersSums")
class BranchUsersSumsResource(MethodView):

    @token_required
    @blp_chart.arguments(ChartQuerySchema, location="query")
    @blp_chart.response(HTTP_STATUS_CODES["OK"], SumsSchema(many=True))
    @blp_chart.doc(summary="Invoice totals per user of a branch", security=[{"Bearer": []}])
    def get(self, query_data, principal):
        branch_id = _scoped_branch(principal, query_data)
        log_tag = principal_log_tag("chart_resource.py", "BranchUsersSumsResource", "get", principal, scope=branch_id)

        require(authorize(
            principal, ACTIONS["READ"], RESOURCES["CHART"],
            target={"scope": "branch", "branchId": branch_id},
        ))

        rows = ChartService.branch_users_sums(branch_id)
        Log.info(f"{log_tag} {len(rows)} rows")

        return prepared_response(
            status=True,
            status_code="OK",
            message="Branch user totals retrieved successfully",
            data=rows,
        )
