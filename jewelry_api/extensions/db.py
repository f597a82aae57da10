from flask import current_app
from pymongo import ASCENDING, DESCENDING, MongoClient

from ..constants.service_code import COLLECTIONS


class MongoDB:
    """
    Document store handle. One instance is constructed per Flask app and
    registered under app.extensions["mongo"]; a ready-made client can be
    injected (tests pass a mongomock client).
    """

    def __init__(self, app=None, client=None):
        self.client = None
        self.db = None
        if app is not None:
            self.init_app(app, client=client)

    def init_app(self, app, client=None):
        self.client = client if client is not None else MongoClient(app.config["MONGO_URI"])
        self.db = self.client[app.config["DB_NAME"]]
        app.extensions["mongo"] = self

        self.create_indexes()

    def create_indexes(self):
        self.db[COLLECTIONS["USERS"]].create_index([("isDelete", ASCENDING), ("branchId", ASCENDING)])
        self.db[COLLECTIONS["USERS"]].create_index([("role", ASCENDING), ("isDelete", ASCENDING)])

        self.db[COLLECTIONS["BRANCHES"]].create_index([("name", ASCENDING), ("isDelete", ASCENDING)])

        self.db[COLLECTIONS["ITEMS"]].create_index([("branchId", ASCENDING), ("isDelete", ASCENDING)])
        self.db[COLLECTIONS["ITEMS"]].create_index([("branchId", ASCENDING), ("name", ASCENDING)])

        self.db[COLLECTIONS["INVOICES"]].create_index([("branchId", ASCENDING), ("userId", ASCENDING)])
        self.db[COLLECTIONS["INVOICES"]].create_index([("createdAt", DESCENDING)])

    def get_collection(self, name):
        if self.db is None:
            raise RuntimeError("MongoDB not initialized")
        return self.db[name]


def get_db():
    """Return the store handle bound to the current app."""
    return current_app.extensions["mongo"]
