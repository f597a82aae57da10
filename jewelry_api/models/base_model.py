# jewelry_api/models/base_model.py

from datetime import datetime, timezone

from bson.objectid import ObjectId
from pymongo import DESCENDING

from ..extensions.db import get_db
from ..utils.logger import Log


def utcnow():
    return datetime.now(timezone.utc)


class BaseModel:
    """
    A base class for models providing common CRUD operations over one
    collection. Documents are never physically removed: `soft_delete`
    sets `isDelete` and `deletedAt`.
    """
    collection_name = None
    soft_deletable = True

    def __init__(self, **kwargs):
        if self.soft_deletable:
            self.isDelete = False
        self.createdAt = utcnow()

        for key, value in kwargs.items():
            setattr(self, key, value)

    def to_dict(self):
        """
        Convert the model object to a dictionary representation.
        """
        return {key: getattr(self, key) for key in self.__dict__}

    def save(self):
        """
        Insert the document and return its id as a string.
        """
        result = self.collection().insert_one(self.to_dict())
        return str(result.inserted_id)

    @classmethod
    def collection(cls):
        return get_db().get_collection(cls.collection_name)

    @classmethod
    def _key(cls, record_id):
        """Convert an id from the URL into the stored `_id`; None when malformed."""
        if isinstance(record_id, ObjectId):
            return record_id
        if not record_id or not ObjectId.is_valid(str(record_id)):
            return None
        return ObjectId(str(record_id))

    @classmethod
    def get_by_id(cls, record_id):
        """
        Retrieve a document by id, including soft-deleted ones.
        """
        key = cls._key(record_id)
        if key is None:
            return None
        return cls.collection().find_one({"_id": key})

    @classmethod
    def find(cls, query=None, sort=None):
        cursor = cls.collection().find(query or {})
        cursor = cursor.sort(sort or [("createdAt", DESCENDING)])
        return list(cursor)

    @classmethod
    def find_active(cls, branch_id=None, **filters):
        """
        Active documents, optionally restricted to one branch; the filter is
        applied by the store, not in memory.
        """
        query = {"isDelete": False, **filters}
        if branch_id is not None:
            query["branchId"] = branch_id
        return cls.find(query)

    @classmethod
    def exists(cls, query):
        return cls.collection().find_one(query, {"_id": 1}) is not None

    @classmethod
    def count(cls, query):
        return cls.collection().count_documents(query)

    @classmethod
    def update(cls, record_id, updates, touch=True):
        """
        Apply `$set` updates. Returns True when the document matched.
        """
        key = cls._key(record_id)
        if key is None:
            return False
        if touch:
            updates = {**updates, "updatedAt": utcnow()}
        result = cls.collection().update_one({"_id": key}, {"$set": updates})
        return result.matched_count > 0

    @classmethod
    def soft_delete(cls, record_id):
        """
        Flag a document as deleted. Calling it again on a deleted document is
        harmless; it only refreshes `deletedAt`.
        """
        log_tag = f"[base_model.py][{cls.__name__}][soft_delete][{record_id}]"
        deleted = cls.update(record_id, {"isDelete": True, "deletedAt": utcnow()}, touch=False)
        Log.info(f"{log_tag} matched={deleted}")
        return deleted
