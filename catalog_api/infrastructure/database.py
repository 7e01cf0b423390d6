"""Database Session Manager — async connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - All SQLAlchemy exceptions surface as DatabaseError carrying a DbErrorKind
    - One manager per process, created in the FastAPI lifespan and kept on app.state
    - SQLite connections enforce foreign keys (same RESTRICT semantics as PostgreSQL)

Design Decisions:
    - Manager injected through app.state instead of a module global: the app owns
      its engine, tests swap it without patching modules
    - expire_on_commit=False: prevents lazy-load issues in async context
    - Error kind derived from SQLSTATE when the driver exposes it, message text otherwise
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)

from catalog_api.core.domain_types import DbErrorKind
from catalog_api.core.errors import DatabaseError

logger = logging.getLogger(__name__)

_UNIQUE_SQLSTATE = "23505"
_FOREIGN_KEY_SQLSTATE = "23503"

# PostgreSQL detail, SQLite message, constraint name from the naming convention
_FIELD_PATTERNS = (
    re.compile(r"key \((?P<field>\w+)\)="),
    re.compile(r"unique constraint failed: \w+\.(?P<field>\w+)"),
    re.compile(r"uq_[a-z]+_(?P<field>\w+?)[\"']"),
)


def classify_db_error(exc: SQLAlchemyError) -> DbErrorKind:
    """Reduce a SQLAlchemy exception to its DbErrorKind."""
    if isinstance(exc, NoResultFound):
        return DbErrorKind.NOT_FOUND
    if isinstance(exc, IntegrityError):
        sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
        message = str(exc.orig).lower()
        if sqlstate == _UNIQUE_SQLSTATE or "unique" in message:
            return DbErrorKind.UNIQUE_VIOLATION
        if sqlstate == _FOREIGN_KEY_SQLSTATE or "foreign key" in message:
            return DbErrorKind.FOREIGN_KEY_VIOLATION
    return DbErrorKind.OTHER


def extract_constraint_field(exc: SQLAlchemyError) -> str | None:
    """Best-effort column name of a violated unique constraint."""
    message = str(getattr(exc, "orig", exc)).lower()
    for pattern in _FIELD_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group("field")
    return None


def to_database_error(exc: SQLAlchemyError, operation: str) -> DatabaseError:
    kind = classify_db_error(exc)
    field = (
        extract_constraint_field(exc)
        if kind is DbErrorKind.UNIQUE_VIOLATION else None
    )
    log = logger.error if kind is DbErrorKind.OTHER else logger.warning
    log(
        f"DB {operation} failed ({kind.value}): {exc}",
        extra={"error_code": f"DATABASE_{kind.name}"},
    )
    return DatabaseError(kind, operation, field=field)


@asynccontextmanager
async def translate_db_errors(
    session: AsyncSession, operation: str,
) -> AsyncGenerator[None, None]:
    """Roll back and re-raise SQLAlchemy failures as DatabaseError."""
    try:
        yield
    except SQLAlchemyError as e:
        await session.rollback()
        raise to_database_error(e, operation) from e


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseSessionManager:
    """Manages async database sessions with pooling, rollback, and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        is_sqlite = database_url.startswith("sqlite")
        engine_options = {} if is_sqlite else {
            "pool_size": pool_size,
            "max_overflow": max_overflow,
            "pool_pre_ping": True,
            "pool_recycle": 3600,
        }
        self.engine = create_async_engine(database_url, **engine_options)
        if is_sqlite:
            event.listen(
                self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys,
            )
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise to_database_error(e, "request") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db_manager: DatabaseSessionManager | None = getattr(
        request.app.state, "db_manager", None,
    )
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
