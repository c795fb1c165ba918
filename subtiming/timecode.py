"""Tick-based timestamp helpers.

Timestamps are plain integers counting 100-nanosecond ticks, which keeps
repeated scaling on long files free of drift.
"""

TICKS_PER_MS = 10_000
TICKS_PER_SECOND = 10_000_000

ZERO = 0


def from_seconds(seconds: float) -> int:
    """
    Convert seconds to ticks, rounding to the nearest tick.

    Args:
        seconds: Time in seconds (may be negative)

    Returns:
        Time in ticks
    """
    return round(seconds * TICKS_PER_SECOND)


def from_ms(ms: float) -> int:
    """
    Convert milliseconds to ticks, rounding to the nearest tick.

    Args:
        ms: Time in milliseconds (may be negative)

    Returns:
        Time in ticks
    """
    return round(ms * TICKS_PER_MS)


def to_seconds(ticks: int) -> float:
    """Ticks to seconds."""
    return ticks / TICKS_PER_SECOND


def to_ms(ticks: int) -> float:
    """Ticks to milliseconds."""
    return ticks / TICKS_PER_MS


def format_timestamp(ticks: int) -> str:
    """
    Format ticks as H:MM:SS.mmm.

    Sub-millisecond ticks are dropped. Negative values get a leading "-".

    Args:
        ticks: Time in ticks

    Returns:
        Formatted timestamp string
    """
    sign = "-" if ticks < 0 else ""
    ms = abs(ticks) // TICKS_PER_MS

    hours = ms // 3600000
    ms %= 3600000
    minutes = ms // 60000
    ms %= 60000
    seconds = ms // 1000
    millis = ms % 1000

    return f"{sign}{hours}:{minutes:02d}:{seconds:02d}.{millis:03d}"


__all__ = [
    "TICKS_PER_MS",
    "TICKS_PER_SECOND",
    "ZERO",
    "from_seconds",
    "from_ms",
    "to_seconds",
    "to_ms",
    "format_timestamp",
]
