# jewelry_api/models/item_model.py

from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel


class Item(BaseModel):
    """A piece of stock owned by exactly one branch."""

    collection_name = COLLECTIONS["ITEMS"]

    def __init__(self, name, weight, category, karat, factory_fees, vendor, branch_id, quantity=None, photo=None):
        super().__init__()
        self.name = name
        self.weight = weight
        self.category = category
        self.karat = karat
        self.factoryFees = factory_fees
        self.vendor = vendor
        self.branchId = branch_id
        self.Quantity = quantity if quantity is not None else 0
        self.photo = photo

    @classmethod
    def name_exists(cls, branch_id, name, exclude_id=None):
        """Advisory check: an active item with this name already in the branch."""
        query = {"branchId": branch_id, "name": name, "isDelete": False}
        key = cls._key(exclude_id) if exclude_id else None
        if key is not None:
            query["_id"] = {"$ne": key}
        return cls.exists(query)
