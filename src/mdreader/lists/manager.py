"""Manager for the reading list of documents to read later."""

import logging
from typing import Optional

from ..db.models import generate_uuid
from ..db.sqlite import READING_LIST_STORE, Database
from ..reading.estimate import round_half_up
from ..utils import now_ms
from .schemas import CompletionStats, ReadingTodoItem

logger = logging.getLogger(__name__)


class ReadingListManager:
    """Manager for reading list operations.

    Paths are stored exactly as given. Storage errors are logged and turned
    into a safe default, except for ``clear_list`` which re-raises.
    """

    def __init__(self, db: Database):
        """Initialize the reading list manager.

        Args:
            db: Database instance
        """
        self.db = db

    # ========================================================================
    # Reading List CRUD
    # ========================================================================

    def add_to_reading_list(self, path: str, title: str) -> bool:
        """Add a document unless its path is already on the list.

        Returns:
            True if added, False if already present or on error
        """
        try:
            if self.db.get_by_index(READING_LIST_STORE, "path", path):
                return False

            item = ReadingTodoItem(
                id=generate_uuid(),
                path=path,
                title=title,
                added_at=now_ms(),
            )
            self.db.add(READING_LIST_STORE, item.model_dump())
            logger.debug("Added %s to reading list", path)
            return True
        except Exception:
            logger.exception("Error adding %s to reading list", path)
            return False

    def get_all_items(self) -> list[ReadingTodoItem]:
        try:
            return [ReadingTodoItem.model_validate(row) for row in self.db.get_all(READING_LIST_STORE)]
        except Exception:
            logger.exception("Error getting reading list items")
            return []

    def get_item(self, item_id: str) -> Optional[ReadingTodoItem]:
        """Get a reading list item by ID.

        Returns:
            The item, or None if not found or on error
        """
        try:
            row = self.db.get_by_key(READING_LIST_STORE, item_id)
            return ReadingTodoItem.model_validate(row) if row else None
        except Exception:
            logger.exception("Error getting reading list item %s", item_id)
            return None

    def toggle_completion(self, item_id: str) -> Optional[ReadingTodoItem]:
        """Flip an item between read and unread.

        Marking read stamps ``completed_at``; marking unread clears it.

        Returns:
            The updated item, or None if not found or on error
        """
        try:
            item = self.get_item(item_id)
            if not item:
                return None

            updated = item.model_copy(
                update={
                    "completed": not item.completed,
                    "completed_at": None if item.completed else now_ms(),
                }
            )
            self.db.update(READING_LIST_STORE, updated.model_dump())
            return updated
        except Exception:
            logger.exception("Error toggling completion for %s", item_id)
            return None

    def remove_item(self, item_id: str) -> bool:
        """Remove an item from the list.

        Returns:
            True if the item was removed, False if not found or on error
        """
        try:
            return self.db.delete(READING_LIST_STORE, item_id)
        except Exception:
            logger.exception("Error removing %s from reading list", item_id)
            return False

    def clear_list(self) -> None:
        """Remove every item from the list.

        Raises:
            Exception: Any storage error, after logging it
        """
        try:
            self.db.clear_store(READING_LIST_STORE)
        except Exception:
            logger.exception("Error clearing reading list")
            raise

    # ========================================================================
    # Statistics
    # ========================================================================

    def get_completion_stats(self) -> CompletionStats:
        """Count completed and pending items.

        Returns:
            Stats with a whole completion percentage, all zero for an empty list
        """
        items = self.get_all_items()
        total = len(items)
        completed = sum(1 for item in items if item.completed)

        return CompletionStats(
            total=total,
            completed=completed,
            pending=total - completed,
            completion_percentage=round_half_up(completed / total * 100) if total else 0,
        )
