"""Reading statistics formatting for status lines."""

from typing import Optional


def format_clock(seconds: float) -> str:
    """
    Format seconds as ``M:SS``.

    Examples:
        >>> format_clock(45)
        '0:45'
        >>> format_clock(90)
        '1:30'
        >>> format_clock(3661)
        '61:01'
    """
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes}:{secs:02d}"


def format_reading_stats(
    tokens_read: int,
    total_tokens: int,
    elapsed_seconds: float,
    current_wpm: int,
    remaining_seconds: float,
) -> str:
    """
    Status line shown while reading.

    Example:
        >>> format_reading_stats(150, 500, 45, 200, 105)
        '150/500 words | 0:45 | 200 WPM | 1:45 left'
    """
    return " | ".join(
        [
            f"{tokens_read}/{total_tokens} words",
            format_clock(elapsed_seconds),
            f"{current_wpm} WPM",
            f"{format_clock(remaining_seconds)} left",
        ]
    )


def format_loaded_stats(
    remaining_tokens: int,
    total_tokens: int,
    estimated_seconds: float,
    source_name: Optional[str] = None,
) -> str:
    """
    Status line shown right after a load.

    Examples:
        >>> format_loaded_stats(500, 500, 150)
        '500 words loaded - ~2:30'
        >>> format_loaded_stats(300, 500, 90, "notes.md")
        '300/500 words loaded from notes.md - ~1:30'
    """
    words = f"{total_tokens} words" if remaining_tokens == total_tokens else f"{remaining_tokens}/{total_tokens} words"
    source = f" from {source_name}" if source_name else ""
    return f"{words} loaded{source} - ~{format_clock(estimated_seconds)}"
