"""SQLite database operations.

Handles database connection, session management, and the store-level
CRUD operations the history and reading list managers are built on.
Records cross this boundary as plain dictionaries.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Optional, Union

from sqlalchemy import create_engine, delete, select
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base, HistoryRecord, ReadingListRecord, StoreRecord

logger = logging.getLogger(__name__)

HISTORY_STORE = "readingHistory"
READING_LIST_STORE = "readingLists"

STORES: dict[str, type[StoreRecord]] = {
    HISTORY_STORE: HistoryRecord,
    READING_LIST_STORE: ReadingListRecord,
}

Key = Union[int, str]


class Database:
    """Database connection and operations manager."""

    def __init__(self, db_path: Optional[str] = None):
        """Initialize database connection.

        Args:
            db_path: Path to SQLite database file. If None, uses
                     MDREADER_DB_PATH from the config or its default.
        """
        if db_path is None:
            from ..config import get_config

            db_path = str(get_config().db_path)

        self.db_path = Path(db_path)
        self._is_memory = str(db_path) == ":memory:"

        if not self._is_memory:
            self._ensure_directory()

        # For in-memory databases, use StaticPool to reuse the same connection
        # This ensures all sessions share the same in-memory database
        if self._is_memory:
            self.engine = create_engine(
                "sqlite:///:memory:",
                echo=False,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            self.engine = create_engine(
                f"sqlite:///{self.db_path}",
                echo=False,
                connect_args={"check_same_thread": False},
            )
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)

    def _ensure_directory(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(self.engine)
        logger.debug("Tables ready in %s", self.db_path)

    def drop_tables(self) -> None:
        """Drop all database tables. Use with caution!"""
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session context manager."""
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _run(self, op, session: Optional[Session]):
        if session:
            return op(session)
        with self.get_session() as s:
            return op(s)

    # ========================================================================
    # Store Lookup
    # ========================================================================

    @staticmethod
    def model_for(store: str) -> type[StoreRecord]:
        """Resolve a store name to its ORM model.

        Raises:
            KeyError: If the store is not known.
        """
        try:
            return STORES[store]
        except KeyError:
            raise KeyError(f"Unknown store: {store}") from None

    def _build_record(self, model: type[StoreRecord], values: dict[str, Any]) -> StoreRecord:
        record = model()
        record.apply(values)
        return record

    # ========================================================================
    # Store Operations
    # ========================================================================

    def get_all(self, store: str, session: Optional[Session] = None) -> list[dict[str, Any]]:
        """Get every record in a store, in key order."""
        model = self.model_for(store)

        def _get(s: Session) -> list[dict[str, Any]]:
            stmt = select(model).order_by(model.id)
            return [record.to_dict() for record in s.execute(stmt).scalars()]

        return self._run(_get, session)

    def get_by_index(
        self, store: str, index: str, value: Any, session: Optional[Session] = None
    ) -> list[dict[str, Any]]:
        """Get every record whose indexed field equals a value.

        Args:
            store: Store name
            index: Column name to match on
            value: Value to match

        Raises:
            KeyError: If the store or the column is not known.
        """
        model = self.model_for(store)
        if index not in model.column_names():
            raise KeyError(f"Unknown index for {store}: {index}")

        def _get(s: Session) -> list[dict[str, Any]]:
            stmt = select(model).where(getattr(model, index) == value).order_by(model.id)
            return [record.to_dict() for record in s.execute(stmt).scalars()]

        return self._run(_get, session)

    def get_by_key(
        self, store: str, key: Key, session: Optional[Session] = None
    ) -> Optional[dict[str, Any]]:
        """Get one record by primary key."""
        model = self.model_for(store)

        def _get(s: Session) -> Optional[dict[str, Any]]:
            record = s.get(model, key)
            return record.to_dict() if record else None

        return self._run(_get, session)

    def add(self, store: str, values: dict[str, Any], session: Optional[Session] = None) -> Key:
        """Insert a record and return its key.

        A missing or None ``id`` lets the store assign one.
        """
        model = self.model_for(store)

        def _add(s: Session) -> Key:
            record = self._build_record(model, _without_empty_id(values))
            s.add(record)
            s.flush()
            return record.id

        return self._run(_add, session)

    def update(self, store: str, values: dict[str, Any], session: Optional[Session] = None) -> bool:
        """Overwrite the record whose key is ``values["id"]``.

        Returns:
            True if the record existed and was updated, False otherwise
        """
        model = self.model_for(store)
        key = values.get("id")
        if key is None:
            return False

        def _update(s: Session) -> bool:
            record = s.get(model, key)
            if not record:
                return False
            record.apply({k: v for k, v in values.items() if k != "id"})
            return True

        return self._run(_update, session)

    def delete(self, store: str, key: Key, session: Optional[Session] = None) -> bool:
        """Delete a record by key."""
        model = self.model_for(store)

        def _delete(s: Session) -> bool:
            record = s.get(model, key)
            if not record:
                return False
            s.delete(record)
            return True

        return self._run(_delete, session)

    def clear_store(self, store: str, session: Optional[Session] = None) -> int:
        """Delete every record in a store. Returns the number removed."""
        model = self.model_for(store)

        def _clear(s: Session) -> int:
            return s.execute(delete(model)).rowcount

        removed = self._run(_clear, session)
        logger.info("Cleared %d record(s) from %s", removed, store)
        return removed

    def replace_all(
        self, store: str, rows: list[dict[str, Any]], session: Optional[Session] = None
    ) -> int:
        """Replace the contents of a store in a single transaction.

        Either every row is written or the store is left untouched.

        Returns:
            Number of rows written
        """
        model = self.model_for(store)

        def _replace(s: Session) -> int:
            s.execute(delete(model))
            for row in rows:
                s.add(self._build_record(model, _without_empty_id(row)))
            s.flush()
            return len(rows)

        return self._run(_replace, session)


def _without_empty_id(values: dict[str, Any]) -> dict[str, Any]:
    if values.get("id") is None:
        return {k: v for k, v in values.items() if k != "id"}
    return values


# Global database instance
_db: Optional[Database] = None


def get_db(db_path: Optional[str] = None) -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database(db_path)
        _db.create_tables()
    return _db


def reset_db() -> None:
    """Reset the global database instance. Used for testing."""
    global _db
    _db = None
