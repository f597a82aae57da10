from .auth_resource import blp_auth
from .user_resource import blp_user
from .branch_resource import blp_branch
from .item_resource import blp_item
from .invoice_resource import blp_invoice
from .chart_resource import blp_chart
