# expensepro/services/settings.py
from typing import Any, Dict, Optional

from expensepro.db import models
from expensepro.db.store import RecordStore
from expensepro.services.access import require_admin
from expensepro.services.activity import log_activity


def get_setting(store: RecordStore, key: str) -> Optional[Any]:
    setting = store.get("settings", key)
    return setting.value if setting else None


def get_all_settings(store: RecordStore) -> Dict[str, Any]:
    return {s.key: s.value for s in store.get_all("settings")}


def update_setting(store: RecordStore, key: str, value: Any, actor: models.User) -> models.Setting:
    """Replace (or create) a setting; values are whole, there is no partial patch."""
    require_admin(actor)
    setting = models.Setting(key=key, value=value)
    store.update("settings", setting)
    log_activity(store, actor.username, models.LogAction.settings_update, f"Updated setting: {key}")
    return setting
