# reset_password.py
import sys

from expensepro.core.config import settings
from expensepro.core.errors import ExpenseProError
from expensepro.db.store import RecordStore
from expensepro.services.users import reset_password as reset_user_password


def reset_password(username: str, new_password: str, store: RecordStore = None) -> int:
    owned = store is None
    store = store or RecordStore(settings.DATABASE_URL)
    try:
        store.open()
        reset_user_password(store, username, new_password)
    except ExpenseProError as exc:
        print(f"Could not reset password for {username}: {exc.message}")
        return 1
    finally:
        if owned:
            store.close()
    print(f"Password reset for {username}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 3:
        print("Usage: python reset_password.py <username> <new_password>")
        sys.exit(2)
    username = sys.argv[1]
    new_password = sys.argv[2]
    sys.exit(reset_password(username, new_password))
