# jewelry_api/extensions/identity.py

import json

import firebase_admin
import requests
from firebase_admin import auth, credentials
from flask import current_app

from ..constants.service_code import AUTHENTICATION_MESSAGES
from ..utils.errors import BadRequestError, ConflictError, UnauthorizedError
from ..utils.logger import Log

# REST sign-in error codes that mean "wrong credentials"
CREDENTIAL_ERRORS = (
    "EMAIL_NOT_FOUND",
    "INVALID_PASSWORD",
    "INVALID_LOGIN_CREDENTIALS",
    "INVALID_EMAIL",
    "USER_DISABLED",
)


class FirebaseIdentity:
    """
    Identity provider client backed by Firebase Authentication.

    Token signature/expiry checks, credential storage and password
    verification all happen on the Firebase side; this class only calls it
    and translates its failures into the API error taxonomy.
    """

    def __init__(self, app=None):
        self.firebase_app = None
        self.api_key = None
        self.auth_url = None
        self.timeout = 15
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        name = app.config.get("FIREBASE_APP_NAME", firebase_admin._DEFAULT_APP_NAME)
        try:
            self.firebase_app = firebase_admin.get_app(name)
        except ValueError:
            self.firebase_app = firebase_admin.initialize_app(self._credentials(app.config), name=name)

        self.api_key = app.config.get("FIREBASE_API_KEY")
        self.auth_url = app.config.get("FIREBASE_AUTH_URL")
        self.timeout = app.config.get("FIREBASE_TIMEOUT", 15)
        app.extensions["identity"] = self

    @staticmethod
    def _credentials(config):
        if config.get("FIREBASE_KEY"):
            return credentials.Certificate(json.loads(config["FIREBASE_KEY"]))
        return credentials.Certificate(config["FIREBASE_CREDENTIALS"])

    # ----------------------
    # TOKENS
    # ----------------------
    def verify_id_token(self, token, check_revoked=True):
        """Return the decoded claims of a valid ID token.

        CertificateFetchError (provider unreachable) is not a token problem
        and propagates.
        """
        try:
            return auth.verify_id_token(token, app=self.firebase_app, check_revoked=check_revoked)
        except (auth.InvalidIdTokenError, auth.UserDisabledError, auth.UserNotFoundError, ValueError) as e:
            Log.info(f"[identity.py][verify_id_token] token rejected: {e}")
            raise UnauthorizedError(AUTHENTICATION_MESSAGES["INVALID_TOKEN"])

    def revoke_refresh_tokens(self, uid):
        auth.revoke_refresh_tokens(uid, app=self.firebase_app)

    def set_custom_claims(self, uid, claims):
        auth.set_custom_user_claims(uid, claims, app=self.firebase_app)

    # ----------------------
    # ACCOUNTS
    # ----------------------
    def create_user(self, email, password, display_name=None):
        """Create the auth credential and return its uid."""
        try:
            record = auth.create_user(
                email=email,
                password=password,
                display_name=display_name or None,
                email_verified=False,
                disabled=False,
                app=self.firebase_app,
            )
        except auth.EmailAlreadyExistsError:
            raise ConflictError("Email already in use")
        except ValueError as e:
            # invalid email / weak password are rejected client-side by the SDK
            raise BadRequestError(str(e))
        return record.uid

    def delete_user(self, uid):
        auth.delete_user(uid, app=self.firebase_app)

    def sign_in_with_password(self, email, password):
        """
        Verify email/password through the Firebase Auth REST API.

        Returns the REST payload (`idToken`, `localId`, `refreshToken`, ...).
        """
        if not self.api_key:
            raise RuntimeError("Missing FIREBASE_API_KEY environment variable")

        resp = requests.post(
            self.auth_url,
            params={"key": self.api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
            timeout=self.timeout,
        )
        data = resp.json() if resp.content else {}

        if resp.status_code >= 400:
            message = (data.get("error") or {}).get("message", "")
            if message.split(" ")[0] in CREDENTIAL_ERRORS:
                raise UnauthorizedError(AUTHENTICATION_MESSAGES["INVALID_CREDENTIALS"])
            raise RuntimeError(f"Authentication failed: {message or resp.status_code}")

        if not data.get("idToken"):
            raise RuntimeError("No ID token received from identity provider")

        return data


def get_identity():
    """Return the identity provider bound to the current app."""
    return current_app.extensions["identity"]
