# services/account_service.py
from ..models.user_model import User
from ..utils.logger import Log


def _rollback_account(identity, uid, profile_written, log_tag):
    """
    Undo a half-created account: drop the profile if this call wrote it, then
    the auth credential. A failing cleanup is logged, never raised.
    """
    if profile_written:
        try:
            User.collection().delete_one({"_id": uid})
        except Exception as e:
            Log.error(f"{log_tag} Could not remove profile {uid} during rollback: {e}")

    try:
        identity.delete_user(uid)
        Log.info(f"{log_tag} Rolled back auth credential {uid}")
    except Exception as e:
        Log.error(f"{log_tag} Could not delete orphaned auth credential {uid}: {e}")


def create_account(identity, email, password, role, branch_id, first_name, last_name, log_tag=""):
    """
    Create the auth credential, then the profile document and the token
    claims. There is no transaction spanning the identity provider and the
    store, so a failure after the credential exists deletes it again.

    Returns the new uid.
    """
    display_name = f"{first_name or ''} {last_name or ''}".strip()

    # raises ConflictError / BadRequestError; nothing to undo yet
    uid = identity.create_user(email, password, display_name=display_name)
    Log.info(f"{log_tag} Auth credential created: {uid}")

    profile_written = False
    try:
        User(
            uid=uid,
            email=email,
            role=role,
            branch_id=branch_id,
            first_name=first_name,
            last_name=last_name,
        ).save()
        profile_written = True
        identity.set_custom_claims(uid, User.claims_for(User.get_by_id(uid)))
    except Exception as e:
        Log.error(f"{log_tag} Profile write failed for {uid}: {e}")
        _rollback_account(identity, uid, profile_written, log_tag)
        raise

    return uid
