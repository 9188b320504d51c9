"""Filtering, sorting and grouping of reading history items.

All functions are pure: they take a list of items and return a new list
(or mapping) without touching storage.
"""

from collections import defaultdict
from datetime import datetime
from typing import Optional, Union

from ..utils import date_key, now_ms
from .schemas import (
    HistoryFilterOptions,
    HistorySortOption,
    ReadingHistoryItem,
    ReadingPeriodStats,
    TimePeriod,
)

DAY_MS = 24 * 60 * 60 * 1000

PERIOD_LENGTH_MS = {
    TimePeriod.TODAY: DAY_MS,
    TimePeriod.WEEK: 7 * DAY_MS,
    TimePeriod.MONTH: 30 * DAY_MS,
    TimePeriod.YEAR: 365 * DAY_MS,
}

History = list[ReadingHistoryItem]


def get_history_by_category(history: History, category: Optional[str]) -> History:
    """Items whose first path segment matches a category, case-insensitively.

    An empty category or ``"all"`` returns the history unchanged.
    """
    if not category or category == "all":
        return list(history)
    wanted = category.lower()
    return [item for item in history if item.category.lower() == wanted]


def get_history_by_time_period(
    history: History,
    period: Optional[Union[TimePeriod, str]],
    now: Optional[int] = None,
) -> History:
    """Items read within a rolling window ending now.

    Args:
        history: Items to filter
        period: Window name; None or ``all`` keeps everything
        now: Reference time in epoch ms, defaults to the current time

    Returns:
        Items with ``last_read_at`` inside the window
    """
    if not period:
        return list(history)
    length = PERIOD_LENGTH_MS.get(TimePeriod(period))
    if length is None:
        return list(history)

    cutoff = (now if now is not None else now_ms()) - length
    return [item for item in history if item.last_read_at >= cutoff]


def sort_history(
    history: History, sort_by: Union[HistorySortOption, str] = HistorySortOption.RECENT
) -> History:
    """Return a sorted copy of the history."""
    option = HistorySortOption(sort_by)
    if option == HistorySortOption.RECENT:
        return sorted(history, key=lambda item: item.last_read_at, reverse=True)
    if option == HistorySortOption.OLDEST:
        return sorted(history, key=lambda item: item.last_read_at)
    if option == HistorySortOption.TIME_SPENT:
        return sorted(history, key=lambda item: item.time_spent, reverse=True)
    return sorted(history, key=lambda item: item.words_read, reverse=True)


def search_history(history: History, search_term: Optional[str]) -> History:
    """Items whose title or path contains the term, case-insensitively."""
    if not search_term:
        return list(history)
    term = search_term.lower()
    return [
        item for item in history if term in item.title.lower() or term in item.path.lower()
    ]


def filter_history(
    history: History, options: Optional[HistoryFilterOptions] = None
) -> History:
    """Apply category, period and search filters, then sort and limit."""
    options = options or HistoryFilterOptions()
    filtered = list(history)

    if options.category:
        filtered = get_history_by_category(filtered, options.category)
    if options.time_period:
        filtered = get_history_by_time_period(filtered, options.time_period)
    if options.search_term:
        filtered = search_history(filtered, options.search_term)

    filtered = sort_history(filtered, options.sort_by)

    if options.limit and options.limit > 0:
        filtered = filtered[: options.limit]
    return filtered


def get_latest_read_items(history: History, limit: int = 5) -> History:
    return sort_history(history, HistorySortOption.RECENT)[:limit]


def get_most_words_read_items(history: History, limit: int = 5) -> History:
    return sort_history(history, HistorySortOption.WORDS_READ)[:limit]


def group_history_by_date(history: History) -> dict[str, History]:
    """Group items by local ``YYYY-MM-DD`` of their last read, newest first."""
    grouped: dict[str, History] = defaultdict(list)
    for item in history:
        grouped[date_key(item.last_read_at)].append(item)
    return {key: sort_history(items) for key, items in grouped.items()}


def group_history_by_category(history: History) -> dict[str, History]:
    """Group items by category, newest first within each group."""
    grouped: dict[str, History] = defaultdict(list)
    for item in history:
        grouped[item.category].append(item)
    return {key: sort_history(items) for key, items in grouped.items()}


def get_history_by_date_range(history: History, start: datetime, end: datetime) -> History:
    """Items last read between two datetimes, inclusive."""
    start_ms = int(start.timestamp() * 1000)
    end_ms = int(end.timestamp() * 1000)
    return [item for item in history if start_ms <= item.last_read_at <= end_ms]


def get_reading_stats_for_period(
    history: History,
    period: Optional[Union[TimePeriod, str]] = TimePeriod.ALL,
    now: Optional[int] = None,
) -> ReadingPeriodStats:
    """Totals and per-item averages for items read within a period."""
    items = get_history_by_time_period(history, period, now=now)
    total_items = len(items)
    total_time = sum(item.time_spent for item in items)
    total_words = sum(item.words_read for item in items)

    return ReadingPeriodStats(
        total_items=total_items,
        total_time_spent=total_time,
        total_words_read=total_words,
        average_time_per_item=total_time / total_items if total_items else 0.0,
        average_words_per_item=total_words / total_items if total_items else 0.0,
    )
