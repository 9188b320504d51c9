"""Reading history tracking."""

from .filters import (
    filter_history,
    get_history_by_category,
    get_history_by_date_range,
    get_history_by_time_period,
    get_latest_read_items,
    get_most_words_read_items,
    get_reading_stats_for_period,
    group_history_by_category,
    group_history_by_date,
    search_history,
    sort_history,
)
from .manager import ReadingHistoryManager, normalize_path, title_from_path
from .schemas import (
    CleanupResult,
    HistoryFilterOptions,
    HistorySortOption,
    ReadingHistoryItem,
    ReadingPeriodStats,
    TimePeriod,
)

__all__ = [
    "ReadingHistoryManager",
    "normalize_path",
    "title_from_path",
    "CleanupResult",
    "HistoryFilterOptions",
    "HistorySortOption",
    "ReadingHistoryItem",
    "ReadingPeriodStats",
    "TimePeriod",
    "filter_history",
    "get_history_by_category",
    "get_history_by_date_range",
    "get_history_by_time_period",
    "get_latest_read_items",
    "get_most_words_read_items",
    "get_reading_stats_for_period",
    "group_history_by_category",
    "group_history_by_date",
    "search_history",
    "sort_history",
]
