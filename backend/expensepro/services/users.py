# expensepro/services/users.py
import logging
from typing import List, Optional

from expensepro.core.errors import AuthorizationError, DuplicateKeyError, NotFoundError, ValidationError
from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.schemas.transaction import TransactionFilter
from expensepro.schemas.user import UserCreate, UserUpdate
from expensepro.services.access import require_admin, require_owner_or_admin
from expensepro.services.activity import log_activity
from expensepro.services.files import save_file
from expensepro.services.query import query_transactions
from expensepro.services.security import hash_password
from expensepro.utils.helpers import utcnow

logger = logging.getLogger(__name__)


def create_user(store: RecordStore, payload: UserCreate, actor: Optional[models.User] = None) -> models.User:
    """
    Admin "add user", or self sign-up when actor is None (always role User).
    A taken username raises DuplicateKeyError and leaves the existing record alone.
    """
    if actor is not None:
        require_admin(actor)
    elif payload.role != models.Role.User:
        raise AuthorizationError("Only an admin can create admin accounts")

    if store.get("users", payload.username) is not None:
        raise DuplicateKeyError("Username already exists")

    user = models.User(
        username=payload.username,
        hashed_password=hash_password(payload.password),
        role=payload.role,
        full_name=payload.full_name,
        email=payload.email or None,
        department=payload.department or None,
        profile_photo=None,
        created_at=utcnow(),
        last_login=None,
    )
    store.add("users", user)
    log_activity(
        store,
        actor.username if actor else user.username,
        models.LogAction.user_create,
        f"Created user: {user.username}",
    )
    return user


def get_user(store: RecordStore, username: str) -> Optional[models.User]:
    return store.get("users", username)


def list_users(store: RecordStore, role: Optional[models.Role] = None) -> List[models.User]:
    if role is not None:
        return store.get_all("users", "role", models.Role(role))
    return store.get_all("users")


def update_user(store: RecordStore, username: str, payload: UserUpdate, actor: models.User) -> models.User:
    require_owner_or_admin(actor, username, "profile")
    user = store.get("users", username)
    if user is None:
        raise NotFoundError("User not found")

    changes = payload.model_dump(exclude_unset=True)
    if "role" in changes:
        require_admin(actor)
        if changes["role"] is None:
            changes.pop("role")
    for field, value in changes.items():
        if field == "email":
            value = value or None
        setattr(user, field, value)

    store.update("users", user)
    log_activity(store, actor.username, models.LogAction.user_update, f"Updated profile: {username}")
    return user


def reset_password(store: RecordStore, username: str, new_password: str, actor: Optional[models.User] = None) -> models.User:
    """Admin (or operator script, actor None) sets a password without knowing the old one."""
    if actor is not None:
        require_admin(actor)
    if not new_password or len(new_password) < 6:
        raise ValidationError("Password must be at least 6 characters")
    user = store.get("users", username)
    if user is None:
        raise NotFoundError("User not found")
    user.hashed_password = hash_password(new_password)
    store.update("users", user)
    log_activity(
        store,
        actor.username if actor else "system",
        models.LogAction.password_change,
        f"Reset password for {username}",
    )
    return user


def delete_user(store: RecordStore, username: str, actor: models.User) -> int:
    """
    Delete a user and every transaction they own; returns how many
    transactions went with them. Transactions go first and each delete is
    its own store call, so an interruption can leave a user with only part
    of their history, never transactions without an owner.
    """
    require_admin(actor)
    if username == actor.username:
        raise ValidationError("Cannot delete your own account")
    if store.get("users", username) is None:
        raise NotFoundError("User not found")

    owned = query_transactions(store, TransactionFilter(user_id=username))
    for t in owned:
        store.delete("transactions", t.id)
        log_activity(store, actor.username, models.LogAction.transaction_delete, f"Deleted transaction: {t.id}")
    store.delete("users", username)
    logger.info("Deleted user %s with %d transactions", username, len(owned))
    return len(owned)


def set_profile_photo(
    store: RecordStore,
    username: str,
    filename: str,
    content: bytes,
    mimetype: Optional[str],
    actor: models.User,
) -> models.User:
    require_owner_or_admin(actor, username, "profile")
    if mimetype and not mimetype.startswith("image/"):
        raise ValidationError("Profile photo must be an image")
    user = store.get("users", username)
    if user is None:
        raise NotFoundError("User not found")

    rec = save_file(store, filename, content, mimetype, user_id=username)
    user.profile_photo = rec.id
    store.update("users", user)
    log_activity(store, actor.username, models.LogAction.user_update, "Updated profile photo")
    return user
