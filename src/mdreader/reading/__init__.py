"""Reading metrics estimation."""

from .estimate import (
    AVERAGE_READING_SPEED_WPM,
    estimate_document_reading_time,
    estimate_reading_progress,
    estimate_reading_time,
    estimate_words_read,
    round_half_up,
)

__all__ = [
    "AVERAGE_READING_SPEED_WPM",
    "estimate_document_reading_time",
    "estimate_reading_progress",
    "estimate_reading_time",
    "estimate_words_read",
    "round_half_up",
]
