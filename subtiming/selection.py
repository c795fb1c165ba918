"""Choosing which lines an editor shift applies to."""

from typing import List, Optional, Sequence

from .models import ShiftScope, SubtitleLine
from .timing import shift_timing


def select_lines(
    lines: Sequence[SubtitleLine],
    scope: ShiftScope,
    current: Optional[SubtitleLine] = None
) -> List[SubtitleLine]:
    """
    Pick the lines covered by a scope.

    FROM_CURRENT takes the current line (matched by identity) and everything
    after it; without a usable current line it falls back to all lines.

    Args:
        lines: All lines of the document, in order
        scope: Which lines to pick
        current: The line the editor cursor is on

    Returns:
        The selected lines, in document order
    """
    if scope == ShiftScope.SELECTED:
        return [line for line in lines if line.is_selected]

    if scope == ShiftScope.FROM_CURRENT and current is not None:
        for i, line in enumerate(lines):
            if line is current:
                return list(lines[i:])

    return list(lines)


def shift_scope(
    lines: Sequence[SubtitleLine],
    offset: int,
    scope: ShiftScope = ShiftScope.ALL,
    current: Optional[SubtitleLine] = None,
    shift_start: bool = True,
    shift_end: bool = True
) -> List[SubtitleLine]:
    """Shift the lines picked by scope and return them."""
    selected = select_lines(lines, scope, current)
    shift_timing(selected, offset, shift_start, shift_end)
    return selected
