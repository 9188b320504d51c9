"""Reading time, words-read and progress estimates.

All estimates assume a constant reading speed in words per minute.
"""

import math

AVERAGE_READING_SPEED_WPM = 250
MS_PER_MINUTE = 60 * 1000


def _check_speed(reading_speed: float) -> None:
    if reading_speed <= 0:
        raise ValueError(f"Reading speed must be positive, got {reading_speed}")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def estimate_reading_time(
    word_count: int,
    reading_speed: float = AVERAGE_READING_SPEED_WPM,
) -> float:
    """Estimate how long a text takes to read.

    Never less than one minute, so empty documents still get a usable
    estimate.

    Args:
        word_count: Number of words in the text
        reading_speed: Words per minute

    Returns:
        Estimated reading time in milliseconds

    Raises:
        ValueError: If reading_speed is not positive
    """
    _check_speed(reading_speed)
    minutes = max(1, word_count / reading_speed)
    return minutes * MS_PER_MINUTE


def estimate_words_read(
    time_spent_ms: float,
    reading_speed: float = AVERAGE_READING_SPEED_WPM,
) -> int:
    """Estimate how many words were read in the given time.

    Args:
        time_spent_ms: Time spent reading in milliseconds
        reading_speed: Words per minute

    Returns:
        Estimated words read, 0 for non-positive time
    """
    _check_speed(reading_speed)
    if time_spent_ms <= 0:
        return 0

    minutes = time_spent_ms / MS_PER_MINUTE
    return math.floor(minutes * reading_speed)


def estimate_reading_progress(
    word_count: int,
    time_spent_ms: float,
    reading_speed: float = AVERAGE_READING_SPEED_WPM,
) -> int:
    """Estimate reading progress from time spent.

    Args:
        word_count: Total words in the document
        time_spent_ms: Time spent reading in milliseconds
        reading_speed: Words per minute

    Returns:
        Percentage read, 0-100
    """
    _check_speed(reading_speed)
    if word_count <= 0 or time_spent_ms <= 0:
        return 0

    total_ms = estimate_reading_time(word_count, reading_speed)
    percentage = min((time_spent_ms / total_ms) * 100, 100)
    return round_half_up(percentage)


def estimate_document_reading_time(
    total_word_count: int,
    reading_speed: float = AVERAGE_READING_SPEED_WPM,
) -> int:
    """Whole-minute reading time for a document, in milliseconds.

    Used for the section metadata artifact, which rounds up to full
    minutes rather than applying the one-minute floor.
    """
    _check_speed(reading_speed)
    return math.ceil(total_word_count / reading_speed) * MS_PER_MINUTE
