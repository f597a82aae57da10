# jewelry_api/models/branch_model.py

from ..constants.service_code import COLLECTIONS
from .base_model import BaseModel


class Branch(BaseModel):

    collection_name = COLLECTIONS["BRANCHES"]

    def __init__(self, name):
        super().__init__()
        self.name = name

    @classmethod
    def name_exists(cls, name, exclude_id=None):
        """
        Advisory uniqueness check among active branches. Not enforced by the
        store; two concurrent creates can both pass it.
        """
        query = {"name": name, "isDelete": False}
        key = cls._key(exclude_id) if exclude_id else None
        if key is not None:
            query["_id"] = {"$ne": key}
        return cls.exists(query)
