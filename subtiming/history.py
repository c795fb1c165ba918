"""Timing snapshots for undoing transforms."""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Tuple

from .models import SubtitleLine


@dataclass
class TimingSnapshot:
    """Start/end times of a batch of lines, captured before an edit."""
    states: List[Tuple[SubtitleLine, int, int]] = field(default_factory=list)

    @classmethod
    def capture(cls, lines: Iterable[SubtitleLine]) -> "TimingSnapshot":
        return cls(states=[(line, line.start, line.end) for line in lines])

    def restore(self) -> None:
        """Write the captured times back onto the same line objects."""
        for line, start, end in self.states:
            line.start = start
            line.end = end

    def changed_lines(self) -> List[SubtitleLine]:
        """Lines whose timing differs from the captured values."""
        return [
            line for line, start, end in self.states
            if line.start != start or line.end != end
        ]

    def __len__(self) -> int:
        return len(self.states)

    @classmethod
    def apply(
        cls,
        lines: List[SubtitleLine],
        transform: Callable[..., Any],
        *args: Any,
        **kwargs: Any
    ) -> "TimingSnapshot":
        """
        Capture the lines, run transform(lines, *args, **kwargs) and return
        the snapshot so the caller can undo it.
        """
        snapshot = cls.capture(lines)
        transform(lines, *args, **kwargs)
        return snapshot
