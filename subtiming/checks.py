"""Timing checks for subtitle lines."""

from typing import List, Optional, Sequence

from .models import (
    SubtitleLine,
    TimingConstraints,
    TimingIssue,
    TimingIssueType,
    TimingIssueSeverity,
    TimingSummary,
    TimingReport,
)
from .timecode import format_timestamp, from_ms, to_ms


def check_inverted(line: SubtitleLine) -> Optional[TimingIssue]:
    """
    Check if a line ends before it starts.

    Args:
        line: The subtitle line to check

    Returns:
        TimingIssue if violation found, None otherwise
    """
    if line.end < line.start:
        return TimingIssue(
            line_index=line.index,
            issue_type=TimingIssueType.INVERTED,
            severity=TimingIssueSeverity.ERROR,
            message=(
                f"Line ends at {format_timestamp(line.end)} "
                f"before it starts at {format_timestamp(line.start)}"
            ),
            value=to_ms(line.duration),
            threshold=0.0
        )

    return None


def check_short_duration(
    line: SubtitleLine,
    min_duration_ms: int
) -> Optional[TimingIssue]:
    """
    Check if a line is shown for less than the minimum duration.

    Inverted lines are left to check_inverted.

    Args:
        line: The subtitle line to check
        min_duration_ms: Minimum acceptable duration in milliseconds

    Returns:
        TimingIssue if violation found, None otherwise
    """
    if 0 <= line.duration < from_ms(min_duration_ms):
        duration_ms = to_ms(line.duration)
        return TimingIssue(
            line_index=line.index,
            issue_type=TimingIssueType.SHORT_DURATION,
            severity=TimingIssueSeverity.WARNING,
            message=f"Line duration {duration_ms:g}ms is less than minimum {min_duration_ms}ms",
            value=duration_ms,
            threshold=min_duration_ms
        )

    return None


def check_cps(line: SubtitleLine, max_cps: float) -> Optional[TimingIssue]:
    """
    Check if a line's reading speed exceeds the maximum characters per second.

    Args:
        line: The subtitle line to check
        max_cps: Maximum allowed CPS

    Returns:
        TimingIssue if violation found, None otherwise
    """
    if not line.plain_text or line.duration <= 0:
        return None

    cps = line.cps
    if cps > max_cps:
        return TimingIssue(
            line_index=line.index,
            issue_type=TimingIssueType.CPS_EXCEEDED,
            severity=TimingIssueSeverity.WARNING,
            message=f"CPS {cps:.1f} exceeds maximum {max_cps}",
            value=round(cps, 2),
            threshold=max_cps
        )

    return None


def check_overlap(
    current: SubtitleLine,
    next_line: SubtitleLine,
    min_gap_ms: int = 0
) -> Optional[TimingIssue]:
    """
    Check if a line runs into (or too close to) the next one.

    Args:
        current: The current line
        next_line: The line after it
        min_gap_ms: Required silence between the two, in milliseconds

    Returns:
        TimingIssue if violation found, None otherwise
    """
    gap = next_line.start - current.end
    if gap < from_ms(min_gap_ms):
        if gap < 0:
            message = f"Line {current.index} overlaps with line {next_line.index} by {to_ms(-gap):g}ms"
        else:
            message = (
                f"Line {current.index} ends {to_ms(gap):g}ms before line {next_line.index}, "
                f"minimum gap is {min_gap_ms}ms"
            )
        return TimingIssue(
            line_index=current.index,
            issue_type=TimingIssueType.OVERLAP,
            severity=TimingIssueSeverity.WARNING,
            message=message,
            value=to_ms(gap),
            threshold=min_gap_ms
        )

    return None


def run_timing_checks(
    lines: Sequence[SubtitleLine],
    constraints: TimingConstraints
) -> TimingReport:
    """
    Run all timing checks on a list of lines.

    Neighbour checks use the order the lines are given in.

    Args:
        lines: Subtitle lines to check
        constraints: Thresholds to check against

    Returns:
        Complete timing report with all issues
    """
    issues: List[TimingIssue] = []

    for i, line in enumerate(lines):
        issue = check_inverted(line)
        if issue:
            issues.append(issue)

        issue = check_short_duration(line, constraints.min_duration_ms)
        if issue:
            issues.append(issue)

        issue = check_cps(line, constraints.max_cps)
        if issue:
            issues.append(issue)

        if i < len(lines) - 1:
            issue = check_overlap(line, lines[i + 1], constraints.min_gap_ms)
            if issue:
                issues.append(issue)

    errors = [i for i in issues if i.severity == TimingIssueSeverity.ERROR]
    warnings = [i for i in issues if i.severity == TimingIssueSeverity.WARNING]

    by_type: dict[str, int] = {}
    for issue in issues:
        type_name = issue.issue_type.value
        by_type[type_name] = by_type.get(type_name, 0) + 1

    summary = TimingSummary(
        total_lines=len(lines),
        issues_count=len(issues),
        errors_count=len(errors),
        warnings_count=len(warnings),
        passed=len(errors) == 0,
        by_type=by_type
    )

    return TimingReport(issues=issues, summary=summary)


__all__ = [
    "check_inverted",
    "check_short_duration",
    "check_cps",
    "check_overlap",
    "run_timing_checks",
]
