# expensepro/db/store.py
"""Record store: named collections over SQLAlchemy tables.

Every public operation runs in its own short session and commits on its
own, so each call is atomic for its collection and nothing spans two
collections. Records handed back are detached ORM instances; callers
read-modify-write them and pass them to ``update``.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from sqlalchemy import delete, inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, make_transient

from expensepro.core.config import settings
from expensepro.core.errors import (
    DuplicateKeyError,
    ExpenseProError,
    NotReadyError,
    StorageError,
    ValidationError,
)
from expensepro.db import defaults, models
from expensepro.db.base import Base
from expensepro.db.session import make_engine, make_session_factory
from expensepro.services.security import hash_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Collection:
    name: str
    model: type
    key: str
    indexes: Tuple[str, ...] = ()


COLLECTIONS: Dict[str, Collection] = {
    c.name: c
    for c in (
        Collection("users", models.User, "username", ("role", "email")),
        Collection(
            "transactions",
            models.Transaction,
            "id",
            ("user_id", "date", "type", "status", "approver", "created_by"),
        ),
        Collection("settings", models.Setting, "key"),
        Collection("categories", models.Category, "id", ("type", "parent_id")),
        Collection("logs", models.LogEntry, "id", ("user_id", "action", "timestamp")),
        Collection("files", models.StoredFile, "id", ("user_id",)),
    )
}

# collections each schema version introduced
VERSION_COLLECTIONS = {
    1: ("users", "transactions", "settings"),
    2: ("categories", "logs", "files"),
}


class RecordStore:
    def __init__(
        self,
        database_url: Optional[str] = None,
        engine: Optional[Engine] = None,
        seed_defaults: Optional[bool] = None,
    ):
        self._url = database_url or settings.DATABASE_URL
        self._engine = engine
        self._sessions = None
        self._seed = settings.SEED_DEFAULTS if seed_defaults is None else seed_defaults

    # ── lifecycle ────────────────────────────────────────────────────────────

    @property
    def is_ready(self) -> bool:
        return self._sessions is not None

    def open(self) -> None:
        """Create missing tables and bring the stored schema version up to date."""
        if self.is_ready:
            return
        if self._engine is None:
            self._engine = make_engine(self._url)
        try:
            Base.metadata.create_all(bind=self._engine)
        except SQLAlchemyError as exc:
            logger.exception("Could not create tables on %s", self._engine.url)
            raise StorageError(f"Could not initialise store: {exc}") from exc
        self._sessions = make_session_factory(self._engine)
        try:
            self._migrate()
        except ExpenseProError:
            self._sessions = None
            raise
        logger.info("Record store ready (schema v%s) on %s", settings.SCHEMA_VERSION, self._engine.url)

    def close(self) -> None:
        self._sessions = None
        if self._engine is not None:
            self._engine.dispose()

    @property
    def schema_version(self) -> int:
        with self._session() as db:
            info = db.get(models.SchemaInfo, 1)
            return info.version if info else 0

    def _migrate(self) -> None:
        current = self.schema_version
        target = settings.SCHEMA_VERSION
        if current > target:
            raise StorageError(f"Store schema v{current} is newer than supported v{target}")
        if current == target:
            return
        for version in range(current + 1, target + 1):
            if self._seed:
                for name in VERSION_COLLECTIONS.get(version, ()):
                    self._seed_collection(name)
            logger.info("Upgraded store schema to v%s", version)
        with self._session() as db:
            db.merge(models.SchemaInfo(id=1, version=target))
            db.commit()

    def _seed_collection(self, name: str) -> None:
        col = COLLECTIONS[name]
        with self._session() as db:
            if db.scalars(select(col.model).limit(1)).first() is not None:
                return
            if name == "users":
                for u in defaults.DEFAULT_USERS:
                    data = dict(u)
                    password = data.pop("password")
                    db.add(models.User(hashed_password=hash_password(password), **data))
            elif name == "settings":
                for key, value in defaults.DEFAULT_SETTINGS.items():
                    db.add(models.Setting(key=key, value=value))
            elif name == "categories":
                for c in defaults.DEFAULT_CATEGORIES:
                    db.add(models.Category(**c))
            db.commit()
        logger.debug("Seeded default %s", name)

    # ── plumbing ─────────────────────────────────────────────────────────────

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._sessions is None:
            raise NotReadyError("Record store is not open")
        db = self._sessions()
        try:
            yield db
        except ExpenseProError:
            db.rollback()
            raise
        except IntegrityError as exc:
            db.rollback()
            if "unique" in str(exc.orig).lower():
                raise DuplicateKeyError(f"Duplicate key: {exc.orig}") from exc
            raise ValidationError(f"Constraint violated: {exc.orig}") from exc
        except (SQLAlchemyError, OverflowError) as exc:
            # OverflowError comes straight from the DB-API driver on out-of-range integers
            db.rollback()
            logger.exception("Storage operation failed")
            raise StorageError(f"Storage operation failed: {exc}") from exc
        finally:
            db.close()

    @staticmethod
    def collection(name: str) -> Collection:
        try:
            return COLLECTIONS[name]
        except KeyError:
            raise ValidationError(f"Unknown collection: {name}")

    def _checked(self, name: str, record: Any) -> Collection:
        col = self.collection(name)
        if not isinstance(record, col.model):
            raise ValidationError(f"{name} expects {col.model.__name__}, got {type(record).__name__}")
        return col

    # ── CRUD ─────────────────────────────────────────────────────────────────

    def add(self, collection: str, record: Any) -> Any:
        """Insert a new record and return its key. Fails on an existing key."""
        col = self._checked(collection, record)
        if inspect(record).detached:
            make_transient(record)
        with self._session() as db:
            key = getattr(record, col.key)
            if key is not None and db.get(col.model, key) is not None:
                raise DuplicateKeyError(f"{collection}: {key!r} already exists")
            db.add(record)
            db.commit()
            return getattr(record, col.key)

    def get(self, collection: str, key: Any) -> Optional[Any]:
        col = self.collection(collection)
        if key is None:
            return None
        with self._session() as db:
            return db.get(col.model, key)

    def get_all(
        self, collection: str, index_name: Optional[str] = None, index_value: Any = None
    ) -> List[Any]:
        """
        Every record of the collection, or those whose secondary index
        equals index_value. With an index but no value the whole collection
        comes back ordered by that index.
        """
        col = self.collection(collection)
        q = select(col.model)
        if index_name is not None:
            if index_name not in col.indexes:
                raise ValidationError(f"{collection} has no index {index_name!r}")
            column = getattr(col.model, index_name)
            if index_value is not None:
                q = q.where(column == index_value)
            else:
                q = q.order_by(column)
        q = q.order_by(getattr(col.model, col.key))
        with self._session() as db:
            return list(db.scalars(q).all())

    def update(self, collection: str, record: Any) -> Any:
        """Insert-or-replace by primary key; returns the key."""
        col = self._checked(collection, record)
        with self._session() as db:
            merged = db.merge(record)
            db.commit()
            key = getattr(merged, col.key)
            setattr(record, col.key, key)
            return key

    def delete(self, collection: str, key: Any) -> None:
        col = self.collection(collection)
        with self._session() as db:
            db.execute(delete(col.model).where(getattr(col.model, col.key) == key))
            db.commit()

    def clear(self, collection: str) -> None:
        col = self.collection(collection)
        with self._session() as db:
            db.execute(delete(col.model))
            db.commit()
        logger.info("Cleared collection %s", collection)
