"""Manager for per-document reading history.

History items are keyed by a normalised document path. Each public
operation is one read-then-write through the database; there is no lock
across operations, so concurrent writers to the same path may lose a
time or word delta.
"""

import logging
from typing import Iterable, Optional

from ..db.sqlite import HISTORY_STORE, Database
from ..reading.estimate import AVERAGE_READING_SPEED_WPM, estimate_words_read, round_half_up
from ..utils import now_ms, snake_to_title
from .schemas import CleanupResult, ReadingHistoryItem

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def normalize_path(path: str) -> str:
    """Lower-case a document path and drop a trailing ``.md``.

    Example:
        >>> normalize_path("Guides/Getting_Started.MD")
        'guides/getting_started'
    """
    cleaned = path.lower()
    if cleaned.endswith(MARKDOWN_SUFFIX):
        cleaned = cleaned[: -len(MARKDOWN_SUFFIX)]
    return cleaned


def title_from_path(path: str) -> str:
    """Display title derived from the file name of a document path."""
    name = path.rstrip("/").split("/")[-1]
    if name.lower().endswith(MARKDOWN_SUFFIX):
        name = name[: -len(MARKDOWN_SUFFIX)]
    return snake_to_title(name)


def union_indices(*groups: Optional[Iterable[int]]) -> list[int]:
    """Sorted set union of section index collections."""
    merged: set[int] = set()
    for group in groups:
        merged.update(group or ())
    return sorted(merged)


class ReadingHistoryManager:
    """Manager for reading history operations."""

    def __init__(self, db: Database, reading_speed: int = AVERAGE_READING_SPEED_WPM):
        """Initialize the reading history manager.

        Args:
            db: Database instance
            reading_speed: Words per minute used to estimate words read
        """
        self.db = db
        self.reading_speed = reading_speed

    def _find(self, path: str) -> Optional[ReadingHistoryItem]:
        rows = self.db.get_by_index(HISTORY_STORE, "path", normalize_path(path))
        return ReadingHistoryItem.model_validate(rows[0]) if rows else None

    def _save(self, item: ReadingHistoryItem) -> bool:
        return self.db.update(HISTORY_STORE, item.model_dump())

    # ========================================================================
    # Recording Reads
    # ========================================================================

    def add_to_reading_history(
        self,
        path: str,
        title: str,
        completed_section_indices: Optional[list[int]] = None,
        time_spent: Optional[int] = None,
        words_read: Optional[int] = None,
    ) -> ReadingHistoryItem:
        """Record a reading session for a document.

        An existing item has its read count bumped, the time and word deltas
        added, and the completed indices unioned in. Otherwise a new item is
        created.

        Args:
            path: Document path, normalised before lookup
            title: Document title, used only when creating the item
            completed_section_indices: Sections completed in this session
            time_spent: Session duration in ms
            words_read: Words read this session; estimated from time_spent
                when omitted. Negative deltas are treated as zero

        Returns:
            The stored item

        Raises:
            Exception: Any storage error, after logging it
        """
        try:
            # Totals only grow, so negative deltas count as zero
            session_time = max(0, time_spent or 0)
            session_words = (
                max(0, words_read)
                if words_read is not None
                else estimate_words_read(session_time, self.reading_speed)
            )
            now = now_ms()
            existing = self._find(path)

            if existing:
                updated = existing.model_copy(
                    update={
                        "last_read_at": now,
                        "read_count": existing.read_count + 1,
                        "time_spent": existing.time_spent + session_time,
                        "words_read": existing.words_read + session_words,
                        "completed_section_indices": union_indices(
                            existing.completed_section_indices, completed_section_indices
                        ),
                    }
                )
                self._save(updated)
                logger.debug(
                    "Updated history for %s (read %d times)", updated.path, updated.read_count
                )
                return updated

            item = ReadingHistoryItem(
                path=normalize_path(path),
                title=title,
                last_read_at=now,
                read_count=1,
                time_spent=session_time,
                words_read=session_words,
                completed_section_indices=union_indices(completed_section_indices),
            )
            item.id = self.db.add(HISTORY_STORE, item.model_dump())
            logger.debug("Created history for %s", item.path)
            return item
        except Exception:
            logger.exception("Error adding %s to reading history", path)
            raise

    def mark_sections_completed(self, path: str, section_indices: list[int]) -> bool:
        """Union section indices into a document's completed set.

        Returns:
            True if the document has history and was updated, False otherwise
        """
        try:
            existing = self._find(path)
            if not existing:
                return False

            updated = existing.model_copy(
                update={
                    "last_read_at": now_ms(),
                    "completed_section_indices": union_indices(
                        existing.completed_section_indices, section_indices
                    ),
                }
            )
            return self._save(updated)
        except Exception:
            logger.exception("Error marking sections completed for %s", path)
            return False

    def update_history_item(self, item: ReadingHistoryItem) -> bool:
        """Overwrite the stored item for ``item.path`` with the fields set on ``item``.

        Completed section indices are unioned into the stored set rather
        than replacing it.

        Returns:
            True if updated, False if no item exists for the path
        """
        try:
            existing = self._find(item.path)
            if not existing:
                logger.warning("No history item found for path: %s", normalize_path(item.path))
                return False

            fields = item.model_dump(exclude={"id"}, exclude_unset=True)
            fields["path"] = normalize_path(item.path)
            if "completed_section_indices" in fields:
                fields["completed_section_indices"] = union_indices(
                    existing.completed_section_indices, fields["completed_section_indices"]
                )
            return self._save(existing.model_copy(update=fields))
        except Exception:
            logger.exception("Error updating history item for %s", item.path)
            return False

    # ========================================================================
    # Queries
    # ========================================================================

    def get_all_history(self) -> list[ReadingHistoryItem]:
        """Get every history item, titled from its file name."""
        try:
            items = [ReadingHistoryItem.model_validate(row) for row in self.db.get_all(HISTORY_STORE)]
        except Exception:
            logger.exception("Error getting reading history")
            return []

        for item in items:
            item.title = title_from_path(item.path)
        return items

    def get_document_history(self, path: str) -> Optional[ReadingHistoryItem]:
        """Get the history item for a document, or None."""
        try:
            return self._find(path)
        except Exception:
            logger.exception("Error getting document history for %s", path)
            return None

    def get_completed_sections(self, path: str) -> list[int]:
        item = self.get_document_history(path)
        return list(item.completed_section_indices) if item else []

    def is_section_completed(self, path: str, section_index: int) -> bool:
        return section_index in self.get_completed_sections(path)

    def get_document_completion_percentage(self, path: str, total_sections: int) -> int:
        """Completed sections as a whole percentage of ``total_sections``.

        Returns 0 when ``total_sections`` is not positive.
        """
        if total_sections <= 0:
            return 0
        completed = len(self.get_completed_sections(path))
        return round_half_up(completed / total_sections * 100)

    # ========================================================================
    # Maintenance
    # ========================================================================

    def clean_duplicate_history(self) -> CleanupResult:
        """Merge history items that share a normalised path.

        Within each group the item with the latest ``last_read_at`` is kept,
        with the completed indices of every member unioned into it. The store
        is then replaced in one transaction, so a failure leaves the previous
        contents in place.

        Callers must not run this concurrently with other history writes.

        Returns:
            Number of items removed and number remaining

        Raises:
            Exception: Any storage error, after logging it
        """
        try:
            items = [ReadingHistoryItem.model_validate(row) for row in self.db.get_all(HISTORY_STORE)]

            groups: dict[str, list[ReadingHistoryItem]] = {}
            for item in items:
                groups.setdefault(normalize_path(item.path), []).append(item)

            keep = [self._merge(path, members) for path, members in groups.items()]
            self.db.replace_all(HISTORY_STORE, [item.model_dump() for item in keep])

            result = CleanupResult(removed_count=len(items) - len(keep), total_count=len(keep))
            logger.info(
                "Cleaned reading history: removed %d duplicate(s), %d item(s) remain",
                result.removed_count,
                result.total_count,
            )
            return result
        except Exception:
            logger.exception("Error cleaning reading history")
            raise

    @staticmethod
    def _merge(path: str, members: list[ReadingHistoryItem]) -> ReadingHistoryItem:
        if len(members) == 1:
            return members[0]

        base = max(members, key=lambda item: item.last_read_at)
        return base.model_copy(
            update={
                "path": path,
                "completed_section_indices": union_indices(
                    *(member.completed_section_indices for member in members)
                ),
            }
        )

    def clear_history(self) -> None:
        """Delete every history item.

        Raises:
            Exception: Any storage error, after logging it
        """
        try:
            self.db.clear_store(HISTORY_STORE)
        except Exception:
            logger.exception("Error clearing reading history")
            raise
