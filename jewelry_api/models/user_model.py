# jewelry_api/models/user_model.py

from ..constants.service_code import COLLECTIONS, ROLES
from .base_model import BaseModel


class User(BaseModel):
    """
    Profile document for an identity-provider account. The document id is
    the provider uid.
    """

    collection_name = COLLECTIONS["USERS"]

    def __init__(self, uid, email, role, branch_id, first_name=None, last_name=None):
        super().__init__()
        self._id = uid
        self.uid = uid
        self.email = email
        self.firstName = first_name or ""
        self.lastName = last_name or ""
        self.role = role
        self.branchId = branch_id

    @classmethod
    def _key(cls, record_id):
        return str(record_id) if record_id else None

    @classmethod
    def count_active_admins(cls):
        return cls.count({"role": ROLES["ADMIN"], "isDelete": False})

    @classmethod
    def claims_for(cls, user):
        """Custom token claims carried for this user."""
        return {
            "role": user.get("role"),
            "branchId": user.get("branchId") or None,
            "firstName": user.get("firstName") or None,
        }
