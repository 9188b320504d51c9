"""Reading list of documents to read later."""

from .manager import ReadingListManager
from .schemas import CompletionStats, ReadingTodoItem

__all__ = ["ReadingListManager", "CompletionStats", "ReadingTodoItem"]
