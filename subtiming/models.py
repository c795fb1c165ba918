"""Pydantic models for subtitle timing."""

import re
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .timecode import TICKS_PER_SECOND, from_ms, to_ms


_ASS_OVERRIDE_RE = re.compile(r"\{[^}]*\}")


class ShiftScope(str, Enum):
    """Which lines a shift applies to."""
    ALL = "all"
    SELECTED = "selected"
    FROM_CURRENT = "from_current"


class TimingIssueType(str, Enum):
    """Types of timing issues."""
    INVERTED = "inverted"
    SHORT_DURATION = "short_duration"
    CPS_EXCEEDED = "cps_exceeded"
    OVERLAP = "overlap"


class TimingIssueSeverity(str, Enum):
    """Severity levels for timing issues."""
    ERROR = "error"
    WARNING = "warning"


class TimingDefaults(BaseModel):
    """Default parameters for the timing transforms."""
    model_config = ConfigDict(allow_inf_nan=False)

    target_cps: float = Field(default=15.0, gt=0.0, description="Target characters per second for auto duration")
    min_duration: float = Field(default=1.0, ge=0.0, description="Minimum auto duration in seconds")
    max_duration: float = Field(default=7.0, ge=0.0, description="Maximum auto duration in seconds")
    fps: float = Field(default=23.976, gt=0.0, description="Frame rate used for frame snapping")
    max_gap_ms: int = Field(default=200, ge=0, description="Largest gap closed by gap filling, in ms")
    min_gap_ms: int = Field(default=50, ge=0, description="Silence kept between lines by overlap fixing, in ms")

    @model_validator(mode="after")
    def check_duration_range(self) -> "TimingDefaults":
        if self.min_duration > self.max_duration:
            raise ValueError(
                f"min_duration {self.min_duration} cannot be greater than max_duration {self.max_duration}"
            )
        return self


class TimingConstraints(BaseModel):
    """Thresholds for timing checks."""
    model_config = ConfigDict(allow_inf_nan=False)

    max_cps: float = Field(default=17.0, gt=0.0, description="Maximum characters per second")
    min_duration_ms: int = Field(default=500, ge=0, description="Minimum line duration in ms")
    min_gap_ms: int = Field(default=0, ge=0, description="Minimum silence between consecutive lines in ms")


class SubtitleLine(BaseModel):
    """A single subtitle line. Times are 100ns ticks."""
    index: int = Field(default=0, description="Line index (1-based for display)")
    start: int = Field(default=0, description="Start time in ticks")
    end: int = Field(default=0, description="End time in ticks")
    text: str = Field(default="", description="Text, may include ASS override tags")
    is_selected: bool = Field(default=False, description="Whether the line is selected in the editor")

    @property
    def plain_text(self) -> str:
        """Text without ASS override blocks; \\N and \\n count as a space."""
        if not self.text:
            return ""
        result = _ASS_OVERRIDE_RE.sub("", self.text)
        result = result.replace("\\N", " ").replace("\\n", " ")
        return result.strip()

    @property
    def duration(self) -> int:
        """Duration in ticks."""
        return self.end - self.start

    @property
    def duration_seconds(self) -> float:
        """Duration in seconds."""
        return self.duration / TICKS_PER_SECOND

    @property
    def cps(self) -> float:
        """Characters per second of the plain text."""
        if self.duration_seconds <= 0:
            return 0.0
        return len(self.plain_text) / self.duration_seconds

    def clone(self) -> "SubtitleLine":
        """Independent copy of this line."""
        return self.model_copy()


class TimingIssue(BaseModel):
    """A single timing issue."""
    line_index: int = Field(..., description="Index of the affected line")
    issue_type: TimingIssueType = Field(..., description="Type of issue")
    severity: TimingIssueSeverity = Field(..., description="Severity level")
    message: str = Field(..., description="Human-readable description")
    value: Optional[float] = Field(default=None, description="Actual value that triggered the issue")
    threshold: Optional[float] = Field(default=None, description="Threshold that was crossed")


class TimingSummary(BaseModel):
    """Summary of timing check results."""
    total_lines: int = Field(..., description="Total number of lines")
    issues_count: int = Field(..., description="Total number of issues")
    errors_count: int = Field(..., description="Number of errors")
    warnings_count: int = Field(..., description="Number of warnings")
    passed: bool = Field(..., description="Whether the checks passed (no errors)")
    by_type: dict[str, int] = Field(default_factory=dict, description="Issue counts by type")


class TimingReport(BaseModel):
    """Full timing report."""
    issues: list[TimingIssue] = Field(default_factory=list, description="All timing issues")
    summary: TimingSummary = Field(..., description="Summary statistics")


class LinePayload(BaseModel):
    """A subtitle line as exchanged over HTTP, with times in milliseconds."""
    model_config = ConfigDict(allow_inf_nan=False)

    index: int = Field(default=0, description="Line index (1-based)")
    start_ms: float = Field(..., description="Start time in milliseconds")
    end_ms: float = Field(..., description="End time in milliseconds")
    text: str = Field(default="", description="Subtitle text")
    is_selected: bool = Field(default=False, description="Editor selection flag")

    def to_line(self) -> SubtitleLine:
        return SubtitleLine(
            index=self.index,
            start=from_ms(self.start_ms),
            end=from_ms(self.end_ms),
            text=self.text,
            is_selected=self.is_selected,
        )

    @classmethod
    def from_line(cls, line: SubtitleLine) -> "LinePayload":
        return cls(
            index=line.index,
            start_ms=to_ms(line.start),
            end_ms=to_ms(line.end),
            text=line.text,
            is_selected=line.is_selected,
        )


class LinesRequest(BaseModel):
    """Base request carrying the lines to transform."""
    model_config = ConfigDict(allow_inf_nan=False)

    lines: list[LinePayload] = Field(default_factory=list, description="Lines in timeline order")


class ShiftRequest(LinesRequest):
    """Request to shift line timing."""
    offset_ms: float = Field(..., description="Signed offset in milliseconds")
    shift_start: bool = Field(default=True, description="Shift start times")
    shift_end: bool = Field(default=True, description="Shift end times")
    scope: ShiftScope = Field(default=ShiftScope.ALL, description="Which lines to shift")
    current_index: Optional[int] = Field(default=None, description="Index of the current line for from_current")


class ScaleRequest(LinesRequest):
    """Request to scale line timing around a reference point."""
    scale_factor: float = Field(..., description="1.0 = unchanged, >1 slower, <1 faster")
    reference_ms: float = Field(default=0.0, description="Pivot time in milliseconds")


class StretchRequest(LinesRequest):
    """Request to stretch the lines onto a new span."""
    new_start_ms: float = Field(..., description="New start of the first line, in ms")
    new_end_ms: float = Field(..., description="New end of the last line, in ms")


class AutoDurationRequest(LinesRequest):
    """Request to set end times from reading speed."""
    target_cps: Optional[float] = Field(default=None, gt=0.0, description="Target characters per second")
    min_duration: Optional[float] = Field(default=None, ge=0.0, description="Minimum duration in seconds")
    max_duration: Optional[float] = Field(default=None, ge=0.0, description="Maximum duration in seconds")


class SnapRequest(LinesRequest):
    """Request to snap start and end times to the frame grid."""
    fps: Optional[float] = Field(default=None, gt=0.0, description="Frames per second")


class FillGapsRequest(LinesRequest):
    """Request to close small gaps between lines."""
    max_gap_ms: Optional[int] = Field(default=None, ge=0, description="Largest gap to close, in ms")


class FixOverlapsRequest(LinesRequest):
    """Request to pull back end times that run into the next line."""
    min_gap_ms: Optional[int] = Field(default=None, ge=0, description="Silence to keep before the next line, in ms")
    clamp_to_start: bool = Field(default=False, description="Never move an end before its own start")


class CheckRequest(LinesRequest):
    """Request to run timing checks."""
    constraints: TimingConstraints = Field(default_factory=TimingConstraints, description="Check thresholds")


class LinesResponse(BaseModel):
    """Lines after a transform."""
    lines: list[LinePayload]
