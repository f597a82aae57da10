# jewelry_api/extensions/__init__.py

from flask_cors import CORS
from .db import MongoDB, get_db
from .identity import FirebaseIdentity, get_identity

cors = CORS()

__all__ = [
    "cors",
    "MongoDB",
    "get_db",
    "FirebaseIdentity",
    "get_identity",
]
