# expensepro/services/access.py
# Role checks run before any mutating store call; the store itself does not authorize.
from expensepro.core.errors import AuthorizationError
from expensepro.db import models


def require_admin(actor: models.User) -> None:
    if actor is None or not actor.is_admin:
        raise AuthorizationError("Admin privileges required")


def require_owner_or_admin(actor: models.User, owner: str, what: str = "record") -> None:
    if actor is None:
        raise AuthorizationError("Not authenticated")
    if not actor.is_admin and actor.username != owner:
        raise AuthorizationError(f"You can only modify your own {what}")
