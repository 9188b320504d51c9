"""Database layer for mdreader."""

from .models import Base, HistoryRecord, ReadingListRecord
from .sqlite import (
    HISTORY_STORE,
    READING_LIST_STORE,
    STORES,
    Database,
    get_db,
    reset_db,
)

__all__ = [
    "Base",
    "HistoryRecord",
    "ReadingListRecord",
    "HISTORY_STORE",
    "READING_LIST_STORE",
    "STORES",
    "Database",
    "get_db",
    "reset_db",
]
