"""Pydantic schemas for reading history."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

UNCATEGORIZED = "uncategorized"


class TimePeriod(str, Enum):
    """Look-back window for history queries."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class HistorySortOption(str, Enum):
    """Sort order for history items."""

    RECENT = "recent"
    OLDEST = "oldest"
    TIME_SPENT = "time_spent"
    WORDS_READ = "words_read"


class ReadingHistoryItem(BaseModel):
    """Reading state for one document."""

    id: Optional[int] = None
    path: str
    title: str = ""
    last_read_at: int = 0  # epoch ms
    read_count: int = Field(default=0, ge=0)
    time_spent: int = Field(default=0, ge=0)  # ms
    words_read: int = Field(default=0, ge=0)
    completed_section_indices: list[int] = Field(default_factory=list)

    model_config = {"from_attributes": True}

    @property
    def category(self) -> str:
        """First path segment, used to group documents."""
        return self.path.split("/")[0] or UNCATEGORIZED

    @property
    def last_read_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.last_read_at / 1000)


class CleanupResult(BaseModel):
    """Outcome of a duplicate-history cleanup."""

    removed_count: int
    total_count: int


class HistoryFilterOptions(BaseModel):
    """Combined filter, sort and limit options for history listings."""

    category: Optional[str] = None
    time_period: Optional[TimePeriod] = None
    sort_by: HistorySortOption = HistorySortOption.RECENT
    limit: Optional[int] = None
    search_term: Optional[str] = None


class ReadingPeriodStats(BaseModel):
    """Aggregate reading statistics for a time period."""

    total_items: int = 0
    total_time_spent: int = 0
    total_words_read: int = 0
    average_time_per_item: float = 0.0
    average_words_per_item: float = 0.0
