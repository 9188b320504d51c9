"""Small helpers shared across mdreader."""

import re
import time
from datetime import datetime

ACRONYMS = frozenset(
    {
        "AI", "AMI", "API", "AWS", "CPU", "CSS", "DNS", "DRY", "EC2", "ECS",
        "EKS", "FTP", "GPU", "HTML", "HTTP", "HTTPS", "IDE", "IP", "JS",
        "JSON", "KISS", "MVC", "MVP", "MVVM", "NPM", "NUMA", "OOP", "PHP",
        "RAM", "REST", "SDK", "SOLID", "SQL", "SSD", "TCP", "UI", "URI",
        "URL", "UX", "VPC", "XML", "YAGNI",
    }
)

_WORD_START = re.compile(r"\b\w")


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)


def snake_to_title(text: str, keep_acronyms: bool = True) -> str:
    """
    Convert a snake_case name into Title Case.

    Args:
        text: The snake_case name
        keep_acronyms: Upper-case well-known acronyms such as API or SQL

    Returns:
        The title-cased name

    Example:
        >>> snake_to_title("javascript_basics")
        'Javascript Basics'
        >>> snake_to_title("rest_api_design")
        'REST API Design'
        >>> snake_to_title("rest_api_design", keep_acronyms=False)
        'Rest Api Design'
    """
    titled = _WORD_START.sub(lambda m: m.group(0).upper(), text.replace("_", " "))
    if not keep_acronyms:
        return titled
    return " ".join(
        word.upper() if word.upper() in ACRONYMS else word for word in titled.split(" ")
    )


def date_key(timestamp_ms: int) -> str:
    """
    Local calendar date of an epoch-millisecond timestamp.

    Example:
        >>> date_key(0) in ("1969-12-31", "1970-01-01")
        True
    """
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d")


def format_duration(ms: int, describe: bool = True) -> str:
    """
    Format a duration in milliseconds for display.

    Args:
        ms: Duration in milliseconds
        describe: Use unit words ("05min 20sec") instead of a clock ("05:20")

    Returns:
        The formatted duration

    Example:
        >>> format_duration(320_000)
        '05min 20sec'
        >>> format_duration(5_445_000, describe=False)
        '01:30:45'
        >>> format_duration(9_000)
        '09sec'
    """
    total_seconds = max(0, int(ms)) // 1000
    seconds = total_seconds % 60
    minutes = (total_seconds // 60) % 60
    hours = total_seconds // 3600

    if hours > 0:
        if describe:
            return f"{hours:02d}h {minutes:02d}min {seconds:02d}sec"
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if minutes > 0:
        return f"{minutes:02d}min {seconds:02d}sec" if describe else f"{minutes:02d}:{seconds:02d}"
    return f"{seconds:02d}sec" if describe else f"{seconds:02d}s"
