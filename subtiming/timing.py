"""Timing transforms for sequences of subtitle lines.

Every function mutates the given lines in place. Times are integer ticks
(see ``subtiming.timecode``). Functions that look at neighbouring lines
expect the sequence to be sorted by start time and do not check it.
"""

from typing import Iterable, MutableSequence

from .logging_config import get_logger
from .models import SubtitleLine
from .timecode import ZERO, format_timestamp, from_ms, from_seconds, to_seconds

logger = get_logger(__name__)

DEFAULT_TARGET_CPS = 15.0
DEFAULT_MIN_DURATION = 1.0
DEFAULT_MAX_DURATION = 7.0
DEFAULT_FPS = 23.976
DEFAULT_MAX_GAP_MS = 200
DEFAULT_MIN_GAP_MS = 50


def shift_timing(
    lines: Iterable[SubtitleLine],
    offset: int,
    shift_start: bool = True,
    shift_end: bool = True
) -> None:
    """
    Shift lines by a fixed offset, never going below zero.

    Args:
        lines: Lines to shift
        offset: Offset in ticks (negative = earlier)
        shift_start: Whether to shift start times
        shift_end: Whether to shift end times
    """
    count = 0
    for line in lines:
        if shift_start:
            line.start = max(ZERO, line.start + offset)
        if shift_end:
            line.end = max(ZERO, line.end + offset)
        count += 1

    logger.debug(f"Shifted {count} lines by {format_timestamp(offset)}")


def scale_timing(
    lines: Iterable[SubtitleLine],
    scale_factor: float,
    reference_time: int
) -> None:
    """
    Scale line timing proportionally around a reference point.

    Times before the reference scale away from it on the other side, so
    results can be negative; nothing is clamped here.

    Args:
        lines: Lines to scale
        scale_factor: 1.0 = no change, 1.1 = 10% slower, 0.9 = 10% faster
        reference_time: Pivot in ticks (typically the first line's start)
    """
    count = 0
    for line in lines:
        start_offset = line.start - reference_time
        end_offset = line.end - reference_time

        line.start = reference_time + int(start_offset * scale_factor)
        line.end = reference_time + int(end_offset * scale_factor)
        count += 1

    logger.debug(f"Scaled {count} lines by {scale_factor} around {format_timestamp(reference_time)}")


def stretch_timing(
    lines: MutableSequence[SubtitleLine],
    new_start: int,
    new_end: int
) -> None:
    """
    Stretch lines so the first starts at new_start and the last ends at new_end.

    Does nothing for an empty sequence or when the current span has zero
    length. A reversed target span is not rejected; it mirrors the lines.

    Args:
        lines: Lines to stretch, in timeline order
        new_start: New start time for the first line, in ticks
        new_end: New end time for the last line, in ticks
    """
    if len(lines) == 0:
        return

    old_start = lines[0].start
    old_end = lines[-1].end
    old_duration = old_end - old_start
    new_duration = new_end - new_start

    if old_duration == 0:
        logger.debug("Stretch skipped: current span has zero length")
        return

    scale_factor = new_duration / old_duration

    for line in lines:
        start_offset = line.start - old_start
        end_offset = line.end - old_start

        line.start = new_start + round(start_offset * scale_factor)
        line.end = new_start + round(end_offset * scale_factor)

    logger.debug(
        f"Stretched {len(lines)} lines onto "
        f"{format_timestamp(new_start)} - {format_timestamp(new_end)} (x{scale_factor:.4f})"
    )


def set_auto_duration(
    line: SubtitleLine,
    target_cps: float = DEFAULT_TARGET_CPS,
    min_duration: float = DEFAULT_MIN_DURATION,
    max_duration: float = DEFAULT_MAX_DURATION
) -> None:
    """
    Set a line's end time from its character count.

    Neighbouring lines are not considered, so this can create overlaps.
    The duration is rounded to the nearest tick, so it can be one tick
    longer than a truncating conversion would give.

    Args:
        line: Line to adjust
        target_cps: Target characters per second
        min_duration: Minimum duration in seconds
        max_duration: Maximum duration in seconds

    Raises:
        ValueError: If target_cps is not positive or min_duration > max_duration
    """
    if target_cps <= 0:
        raise ValueError(f"target_cps must be positive, got {target_cps}")
    if min_duration > max_duration:
        raise ValueError(
            f"min_duration {min_duration} cannot be greater than max_duration {max_duration}"
        )

    char_count = len(line.plain_text)
    calculated_duration = char_count / target_cps

    # Clamp duration
    calculated_duration = min(max(calculated_duration, min_duration), max_duration)

    line.end = line.start + from_seconds(calculated_duration)


def snap_to_frame(time: int, fps: float = DEFAULT_FPS) -> int:
    """
    Snap a time to the nearest video frame boundary.

    Ties go to the even frame (Python's round).

    Args:
        time: Time in ticks
        fps: Frames per second

    Returns:
        Snapped time in ticks

    Raises:
        ValueError: If fps is not positive
    """
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")

    frame_duration = 1.0 / fps
    frames = round(to_seconds(time) / frame_duration)
    return from_seconds(frames * frame_duration)


def fill_gaps(
    lines: MutableSequence[SubtitleLine],
    max_gap_ms: int = DEFAULT_MAX_GAP_MS
) -> None:
    """
    Extend end times to close small gaps before the next line.

    Only positive gaps up to max_gap_ms are closed; overlaps are left alone.

    Args:
        lines: Lines to adjust, sorted by start time
        max_gap_ms: Largest gap to fill, in milliseconds
    """
    max_gap = from_ms(max_gap_ms)
    filled = 0

    for i in range(len(lines) - 1):
        current = lines[i]
        next_line = lines[i + 1]

        gap = next_line.start - current.end
        if 0 < gap <= max_gap:
            current.end = next_line.start
            filled += 1

    logger.debug(f"Filled {filled} gaps (max {max_gap_ms}ms)")


def fix_overlaps(
    lines: MutableSequence[SubtitleLine],
    min_gap_ms: int = DEFAULT_MIN_GAP_MS,
    clamp_to_start: bool = False
) -> None:
    """
    Pull end times back so each line stops min_gap_ms before the next starts.

    Ends are only ever shortened. When the next line starts less than
    min_gap_ms after the current one, the current end lands before its own
    start unless clamp_to_start is set.

    Args:
        lines: Lines to fix, sorted by start time
        min_gap_ms: Minimum gap between lines, in milliseconds
        clamp_to_start: Never move an end before its line's start
    """
    min_gap = from_ms(min_gap_ms)
    fixed = 0

    for i in range(len(lines) - 1):
        current = lines[i]
        next_line = lines[i + 1]

        min_end = next_line.start - min_gap
        if current.end > min_end:
            if clamp_to_start:
                new_end = min(current.end, max(current.start, min_end))
            else:
                new_end = min_end
            if new_end == current.end:
                continue

            current.end = new_end
            fixed += 1

            if current.end < current.start:
                logger.warning(
                    f"Line {current.index} now ends before it starts "
                    f"({format_timestamp(current.start)} -> {format_timestamp(current.end)})"
                )

    logger.debug(f"Fixed {fixed} overlaps (min gap {min_gap_ms}ms)")


__all__ = [
    "DEFAULT_TARGET_CPS",
    "DEFAULT_MIN_DURATION",
    "DEFAULT_MAX_DURATION",
    "DEFAULT_FPS",
    "DEFAULT_MAX_GAP_MS",
    "DEFAULT_MIN_GAP_MS",
    "shift_timing",
    "scale_timing",
    "stretch_timing",
    "set_auto_duration",
    "snap_to_frame",
    "fill_gaps",
    "fix_overlaps",
]
