"""FastAPI application exposing the subtitle timing transforms."""

from typing import List, Optional

from .config import load_env_file

load_env_file()

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .checks import run_timing_checks
from .config import get_timing_defaults
from .logging_config import get_logger, setup_logging
from .models import (
    AutoDurationRequest,
    CheckRequest,
    FillGapsRequest,
    FixOverlapsRequest,
    LinePayload,
    LinesResponse,
    ScaleRequest,
    ShiftRequest,
    SnapRequest,
    StretchRequest,
    SubtitleLine,
    TimingDefaults,
    TimingReport,
)
from .selection import shift_scope
from .timecode import from_ms
from .timing import (
    fill_gaps,
    fix_overlaps,
    scale_timing,
    set_auto_duration,
    snap_to_frame,
    stretch_timing,
)

logger = get_logger(__name__)


app = FastAPI(
    title="Subtitle Timing API",
    description="API for shifting, scaling and cleaning up subtitle timing",
    version="1.0.0"
)


@app.on_event("startup")
async def startup_event():
    """Configure logging and print the active defaults on startup."""
    setup_logging()
    defaults = get_timing_defaults()
    print("=" * 60)
    print("SUBTITLE TIMING API - Starting up...")
    print("=" * 60)
    print(f"[STARTUP] Default CPS: {defaults.target_cps}, duration {defaults.min_duration}s-{defaults.max_duration}s")
    print(f"[STARTUP] Default FPS: {defaults.fps}")
    print(f"[STARTUP] Gap fill up to {defaults.max_gap_ms}ms, overlap gap {defaults.min_gap_ms}ms")
    print("=" * 60)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _to_lines(payloads: List[LinePayload]) -> List[SubtitleLine]:
    return [payload.to_line() for payload in payloads]


def _respond(lines: List[SubtitleLine]) -> LinesResponse:
    return LinesResponse(lines=[LinePayload.from_line(line) for line in lines])


def _find_line(lines: List[SubtitleLine], index: Optional[int]) -> Optional[SubtitleLine]:
    if index is None:
        return None
    for line in lines:
        if line.index == index:
            return line
    return None


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "subtitle-timing"}


@app.get("/api/defaults", response_model=TimingDefaults)
async def get_defaults():
    """Return the defaults used when a request omits a parameter."""
    return get_timing_defaults()


@app.post("/api/timing/shift", response_model=LinesResponse)
async def shift(request: ShiftRequest):
    """
    Shift the timing of all, selected, or current-and-following lines.

    Returns every line, shifted or not.
    """
    lines = _to_lines(request.lines)
    current = _find_line(lines, request.current_index)
    shifted = shift_scope(
        lines,
        from_ms(request.offset_ms),
        scope=request.scope,
        current=current,
        shift_start=request.shift_start,
        shift_end=request.shift_end,
    )
    logger.info(f"Shifted {len(shifted)}/{len(lines)} lines by {request.offset_ms}ms ({request.scope.value})")
    return _respond(lines)


@app.post("/api/timing/scale", response_model=LinesResponse)
async def scale(request: ScaleRequest):
    """Scale timing around a reference point."""
    lines = _to_lines(request.lines)
    scale_timing(lines, request.scale_factor, from_ms(request.reference_ms))
    return _respond(lines)


@app.post("/api/timing/stretch", response_model=LinesResponse)
async def stretch(request: StretchRequest):
    """Stretch the lines onto a new start/end span."""
    lines = _to_lines(request.lines)
    stretch_timing(lines, from_ms(request.new_start_ms), from_ms(request.new_end_ms))
    return _respond(lines)


@app.post("/api/timing/auto-duration", response_model=LinesResponse)
async def auto_duration(request: AutoDurationRequest):
    """Set each line's end time from its text length."""
    defaults = get_timing_defaults()
    target_cps = request.target_cps if request.target_cps is not None else defaults.target_cps
    min_duration = request.min_duration if request.min_duration is not None else defaults.min_duration
    max_duration = request.max_duration if request.max_duration is not None else defaults.max_duration

    lines = _to_lines(request.lines)
    try:
        for line in lines:
            set_auto_duration(line, target_cps, min_duration, max_duration)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _respond(lines)


@app.post("/api/timing/snap", response_model=LinesResponse)
async def snap(request: SnapRequest):
    """Snap start and end times to the nearest frame."""
    fps = request.fps if request.fps is not None else get_timing_defaults().fps

    lines = _to_lines(request.lines)
    try:
        for line in lines:
            line.start = snap_to_frame(line.start, fps)
            line.end = snap_to_frame(line.end, fps)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _respond(lines)


@app.post("/api/timing/fill-gaps", response_model=LinesResponse)
async def fill_gaps_endpoint(request: FillGapsRequest):
    """Close small gaps between consecutive lines."""
    max_gap_ms = request.max_gap_ms if request.max_gap_ms is not None else get_timing_defaults().max_gap_ms

    lines = _to_lines(request.lines)
    fill_gaps(lines, max_gap_ms)
    return _respond(lines)


@app.post("/api/timing/fix-overlaps", response_model=LinesResponse)
async def fix_overlaps_endpoint(request: FixOverlapsRequest):
    """Pull back end times that run into the next line."""
    min_gap_ms = request.min_gap_ms if request.min_gap_ms is not None else get_timing_defaults().min_gap_ms

    lines = _to_lines(request.lines)
    fix_overlaps(lines, min_gap_ms, clamp_to_start=request.clamp_to_start)
    return _respond(lines)


@app.post("/api/timing/check", response_model=TimingReport)
async def check(request: CheckRequest):
    """Run timing checks on the lines."""
    return run_timing_checks(_to_lines(request.lines), request.constraints)
