# expensepro/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


def make_engine(database_url: str) -> Engine:
    """
    Create an engine for DATABASE_URL.
    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory database must stay on a single connection to keep its data.
    """
    kwargs = {"future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(database_url, **kwargs)


def make_session_factory(engine: Engine) -> sessionmaker:
    # records leave the session detached, so keep their loaded state after commit
    return sessionmaker(
        autocommit=False, autoflush=False, bind=engine, future=True, expire_on_commit=False
    )
