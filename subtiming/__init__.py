from .history import TimingSnapshot
from .models import SubtitleLine, ShiftScope, TimingDefaults
from .timing import (
    shift_timing,
    scale_timing,
    stretch_timing,
    set_auto_duration,
    snap_to_frame,
    fill_gaps,
    fix_overlaps,
)

__all__ = [
    "SubtitleLine",
    "ShiftScope",
    "TimingSnapshot",
    "TimingDefaults",
    "shift_timing",
    "scale_timing",
    "stretch_timing",
    "set_auto_duration",
    "snap_to_frame",
    "fill_gaps",
    "fix_overlaps",
]
