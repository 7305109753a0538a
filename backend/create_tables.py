# create_tables.py: create missing tables and seed defaults on DATABASE_URL (development helper)
from expensepro.core.config import settings
from expensepro.core.errors import ExpenseProError
from expensepro.db.store import RecordStore
import logging, sys

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    logger.info("Opening record store on %s ...", settings.DATABASE_URL)
    store = RecordStore(settings.DATABASE_URL)
    try:
        store.open()
        logger.info("Done (schema v%s).", store.schema_version)
        return 0
    except ExpenseProError:
        logger.exception("Error creating tables:")
        return 1
    finally:
        store.close()


if __name__ == "__main__":
    sys.exit(main())
