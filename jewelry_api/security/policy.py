# jewelry_api/security/policy.py
"""
Role/branch authorization decisions.

`authorize()` is a pure function: every piece of state it needs (the target
document, the proposed changes, the number of active admins) is fetched by
the caller and passed in. Handlers call it once per request and turn a
denial into an error with `require()`.

Rules in short:
  - admin is exempt from branch scoping everywhere, but may not create
    items and may not remove or demote the last active admin;
  - manager works inside their own branch, over sales users only;
  - sales may only work with items, invoices and their own totals.
"""

from dataclasses import dataclass
from typing import Optional

from ..constants.service_code import ACTIONS, RESOURCES, ROLES, VALID_ROLES
from ..utils.errors import ConflictError, ForbiddenError, UnauthorizedError

CREATE = ACTIONS["CREATE"]
READ = ACTIONS["READ"]
LIST = ACTIONS["LIST"]
UPDATE = ACTIONS["UPDATE"]
DELETE = ACTIONS["DELETE"]

UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: Optional[str] = None
    error: Optional[str] = None


ALLOW = Decision(True)


def deny(reason="Forbidden"):
    return Decision(False, reason, FORBIDDEN)


def conflict(reason):
    return Decision(False, reason, CONFLICT)


def require(decision):
    """Raise the error a denied Decision maps to."""
    if decision.allowed:
        return decision
    if decision.error == CONFLICT:
        raise ConflictError(decision.reason)
    if decision.error == UNAUTHORIZED:
        raise UnauthorizedError(decision.reason)
    raise ForbiddenError(decision.reason)


def _doc_id(doc):
    if not doc:
        return ""
    return str(doc.get("_id", doc.get("id", doc.get("uid", ""))))


def _same_branch(principal, doc):
    return bool(principal.branch_id) and (doc or {}).get("branchId") == principal.branch_id


def _is_last_admin(target, active_admins):
    """True when removing `target` from the admin set would leave no admin."""
    if not target or target.get("role") != ROLES["ADMIN"] or target.get("isDelete"):
        return False
    return active_admins is not None and active_admins <= 1


# ----------------------
# PER RESOURCE RULES
# ----------------------
def _branch_rules(principal, action, target, proposed):
    if principal.is_admin:
        return ALLOW

    if principal.is_manager and action == UPDATE:
        if _doc_id(target) != principal.branch_id or not principal.branch_id:
            return deny("Managers can only update their own branch")
        if set((proposed or {}).keys()) - {"name"}:
            return deny("Managers can only rename their own branch")
        return ALLOW

    return deny()


def _user_rules(principal, action, target, proposed, active_admins):
    proposed = proposed or {}

    if principal.is_sales:
        if action == READ and _doc_id(target) == principal.uid:
            return ALLOW
        return deny(f"Sales cannot {action} users")

    if action == CREATE:
        if principal.is_manager:
            if proposed.get("role") != ROLES["SALES"]:
                return deny("Managers can only create sales users")
            if proposed.get("branchId") != principal.branch_id:
                return deny("Managers can only create users in their own branch")
        return ALLOW

    if action == LIST:
        return ALLOW

    if principal.is_manager:
        if not _same_branch(principal, target):
            return deny(f"Managers can only {action} users in their branch")

        if action == DELETE and target.get("role") == ROLES["ADMIN"]:
            return deny("Managers cannot delete admins")

        if action == UPDATE:
            if target.get("role") != ROLES["SALES"]:
                return deny("Managers can only update sales users")
            if proposed.get("role") == ROLES["ADMIN"]:
                return deny("Managers cannot grant the admin role")
            if proposed.get("branchId") and proposed["branchId"] != principal.branch_id:
                return deny("Managers cannot move users to another branch")

    if action == DELETE and _is_last_admin(target, active_admins):
        return conflict("Cannot delete the last remaining admin")

    if action == UPDATE and proposed.get("role") and proposed["role"] != ROLES["ADMIN"] \
            and _is_last_admin(target, active_admins):
        return conflict("Cannot demote the last remaining admin")

    return ALLOW


def _item_rules(principal, action, target, proposed):
    if action == CREATE:
        if principal.is_admin:
            return deny("Admins cannot create items")
        if not principal.branch_id:
            return deny("A branch is required to create items")
        branch_id = (proposed or {}).get("branchId")
        if branch_id and branch_id != principal.branch_id:
            return deny("Items can only be created in your own branch")
        return ALLOW

    if action == LIST or principal.is_admin:
        return ALLOW

    if not _same_branch(principal, target):
        return deny()
    return ALLOW


def _invoice_rules(principal, action, target):
    if action in (UPDATE, DELETE):
        return deny("Invoices cannot be changed once created")

    if action == CREATE and not principal.is_admin and not principal.branch_id:
        return deny("A branch is required to create invoices")

    if action in (CREATE, LIST) or principal.is_admin:
        return ALLOW

    if not _same_branch(principal, target):
        return deny()
    return ALLOW


def _chart_rules(principal, target):
    scope = (target or {}).get("scope")

    if scope == "user" or principal.is_admin:
        return ALLOW

    if principal.is_manager and _same_branch(principal, target):
        return ALLOW

    return deny()


def authorize(principal, action, resource, target=None, proposed=None, active_admins=None):
    """
    Decide whether `principal` may perform `action` on `resource`.

    Args:
        principal: the authenticated Principal (None means unauthenticated).
        action: one of create/read/list/update/delete.
        resource: one of branch/user/item/invoice/chart.
        target: the existing document (update/delete/read) if any.
        proposed: the new field values for create/update.
        active_admins: number of active admin users, needed to protect the
            last admin on user delete/demotion.

    Returns: Decision
    """
    if principal is None or principal.role not in VALID_ROLES:
        return Decision(False, "Unauthorized", UNAUTHORIZED)

    if resource == RESOURCES["BRANCH"]:
        return _branch_rules(principal, action, target, proposed)
    if resource == RESOURCES["USER"]:
        return _user_rules(principal, action, target, proposed, active_admins)
    if resource == RESOURCES["ITEM"]:
        return _item_rules(principal, action, target, proposed)
    if resource == RESOURCES["INVOICE"]:
        return _invoice_rules(principal, action, target)
    if resource == RESOURCES["CHART"]:
        return _chart_rules(principal, target)

    return deny(f"Unknown resource: {resource}")


def needs_admin_count(action, target, proposed=None):
    """Whether a user delete/update has to know the active admin count."""
    if not target or target.get("role") != ROLES["ADMIN"]:
        return False
    if action == DELETE:
        return True
    return action == UPDATE and bool((proposed or {}).get("role")) and proposed["role"] != ROLES["ADMIN"]
