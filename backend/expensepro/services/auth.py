# expensepro/services/auth.py
import logging

from expensepro.core.errors import ValidationError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.auth import AuthResult, PasswordChange
from expensepro.schemas.user import UserOut
from expensepro.services.activity import log_activity
from expensepro.services.security import hash_password, verify_password
from expensepro.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def authenticate(store: RecordStore, username: str, password: str) -> AuthResult:
    """
    Check credentials. On success the user's last_login is stamped and a
    login entry is logged; a bad username or password is a failed result,
    not an exception.
    """
    user = store.get("users", username)
    if not user or not verify_password(password, user.hashed_password):
        logger.info("Failed login for %r", username)
        return AuthResult(success=False, error="Invalid credentials")

    user.last_login = utcnow()
    store.update("users", user)
    log_activity(store, username, models.LogAction.login, "User logged in")
    return AuthResult(success=True, user=UserOut.model_validate(user))


def logout(store: RecordStore, actor: models.User) -> None:
    log_activity(store, actor.username, models.LogAction.logout, "User logged out")


def change_password(store: RecordStore, actor: models.User, payload: PasswordChange) -> None:
    user = store.get("users", actor.username)
    if not user or not verify_password(payload.current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    if payload.confirm_password is not None and payload.confirm_password != payload.new_password:
        raise ValidationError("New passwords do not match")

    user.hashed_password = hash_password(payload.new_password)
    store.update("users", user)
    log_activity(store, actor.username, models.LogAction.password_change, "Changed password")
