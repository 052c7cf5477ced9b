# storefront_api/db/session.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from storefront_api.config import Settings

# ---------------------------------------------------------------------------
# Engine / Session factory
# ---------------------------------------------------------------------------


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """
    Create the process-wide engine (and its connection pool) for ``settings``.

    SQLite is only used for local runs and tests: it gets a single shared
    connection for in-memory URLs and has foreign keys switched on so the
    schema behaves like the MySQL deployment.
    """
    url = settings.database_url
    is_sqlite = str(url).startswith("sqlite")

    kwargs: dict[str, Any] = {"echo": settings.DATABASE_ECHO, "future": True}
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in str(url) or str(url) in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"] = settings.DATABASE_POOL_SIZE
        kwargs["pool_pre_ping"] = True
        kwargs["pool_recycle"] = 3600

    engine = create_engine(url, **kwargs)

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=0.5, max=8),
    retry=retry_if_exception_type(OperationalError),
    reraise=True,
)
def check_connection(engine: Engine) -> None:
    """
    Run ``SELECT 1``, retrying while the database is still coming up.
    Raises the last ``OperationalError`` when it never answers.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        class_=Session,
    )


# ---------------------------------------------------------------------------
# Transaction helpers
# ---------------------------------------------------------------------------


@contextmanager
def transaction(session: Session) -> Generator[Session, None, None]:
    """
    Run a block of writes as one unit: commit on success, roll back and
    re-raise on any error.

        with transaction(self._session):
            repo.clear_default(user_id)
            repo.create(...)
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise


@contextmanager
def db_session(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """
    Context manager for non-request usage, e.g. the CLI or scripts.

        with db_session(container.session_factory()) as db:
            ...
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = ["build_engine", "check_connection", "build_session_factory", "transaction", "db_session"]
