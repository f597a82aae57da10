import os
import tempfile

# log files go to a throwaway directory; must be set before the app is imported
os.environ.setdefault("APP_LOG_DIR", tempfile.mkdtemp(prefix="jewelry-logs-"))
os.environ.setdefault("APP_ENV", "testing")

import itertools

import mongomock
import pytest

from jewelry_api import create_app
from jewelry_api.config import TestingConfig
from jewelry_api.models.user_model import User
from jewelry_api.utils.errors import ConflictError, UnauthorizedError


class FakeIdentity:
    """
    In-memory stand-in for FirebaseIdentity. Tokens are opaque strings that
    map to the claims they were issued with.
    """

    def __init__(self):
        self.accounts = {}
        self.tokens = {}
        self.revoked = set()
        self.deleted = []
        self.fail_claims = False
        self.fail_delete = False
        self.next_uid = None
        self._seq = itertools.count(1)

    # helpers used by the tests
    def add_account(self, uid, email, password="secret123", claims=None):
        self.accounts[uid] = {"email": email, "password": password, "claims": dict(claims or {})}

    def issue_token(self, uid, **claims):
        token = f"token-{uid}-{next(self._seq)}"
        self.tokens[token] = {"uid": uid, **claims}
        return token

    # identity provider interface
    def verify_id_token(self, token, check_revoked=True):
        claims = self.tokens.get(token)
        if claims is None:
            raise UnauthorizedError("Invalid or expired token")
        if check_revoked and token in self.revoked:
            raise UnauthorizedError("Invalid or expired token")
        return dict(claims)

    def sign_in_with_password(self, email, password):
        for uid, account in self.accounts.items():
            if account["email"] == email and account["password"] == password:
                return {"idToken": self.issue_token(uid, **account["claims"]), "localId": uid}
        raise UnauthorizedError("Invalid email or password")

    def create_user(self, email, password, display_name=None):
        if any(a["email"] == email for a in self.accounts.values()):
            raise ConflictError("Email already in use")
        uid = self.next_uid or f"uid-{next(self._seq)}"
        self.next_uid = None
        self.add_account(uid, email, password)
        return uid

    def delete_user(self, uid):
        if self.fail_delete:
            raise RuntimeError("identity provider unavailable")
        self.accounts.pop(uid, None)
        self.deleted.append(uid)

    def set_custom_claims(self, uid, claims):
        if self.fail_claims:
            raise RuntimeError("identity provider unavailable")
        self.accounts[uid]["claims"] = dict(claims)

    def revoke_refresh_tokens(self, uid):
        for token, claims in self.tokens.items():
            if claims["uid"] == uid:
                self.revoked.add(token)


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def mongo_client():
    client = mongomock.MongoClient()
    yield client
    client.drop_database(TestingConfig.DB_NAME)


@pytest.fixture
def app(identity, mongo_client):
    app = create_app(TestingConfig, mongo_client=mongo_client, identity=identity)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app, identity):
    """Create a profile document plus an identity account; returns the uid."""
    counter = itertools.count(1)

    def _make(role, branch_id="", uid=None, email=None, password="secret123", first_name="Test", deleted=False):
        n = next(counter)
        uid = uid or f"{role}-{n}"
        email = email or f"{uid}@example.com"
        with app.app_context():
            User(
                uid=uid,
                email=email,
                role=role,
                branch_id=branch_id,
                first_name=first_name,
                last_name="User",
            ).save()
            if deleted:
                User.soft_delete(uid)
        identity.add_account(uid, email, password)
        return uid

    return _make


@pytest.fixture
def auth_headers(identity):
    """Bearer headers for a token carrying the given claims."""
    def _headers(uid, role, branch_id=""):
        token = identity.issue_token(uid, role=role, branchId=branch_id or None)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def login_as(make_user, auth_headers):
    """Create a user and return (uid, headers) for it."""
    def _login(role, branch_id=""):
        uid = make_user(role, branch_id=branch_id)
        return uid, auth_headers(uid, role, branch_id)

    return _login
