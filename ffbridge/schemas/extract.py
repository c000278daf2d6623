from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .config import LogLevel
from .transcode import Seconds


class ExtractFrameSpec(BaseModel):
    """Grab a single still at one timestamp."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: Path
    timestamp: Seconds
    output: str
    scale_width: int | None = Field(None, gt=0)
    # Do not default this, not every image format honours -q:v.
    quality: int | None = Field(None, ge=1, le=31)
    log_level: LogLevel | None = None


class ExtractFramesSpec(BaseModel):
    """Dump frames continuously at a target rate, e.g. ``thumbs/%04d.jpg``."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    input: Path
    output: str = Field(..., description="Image sequence pattern.")
    fps: float = Field(..., gt=0)
    scale_width: int | None = Field(None, gt=0)
    start: Seconds | None = None
    duration: Seconds | None = None
    quality: int | None = Field(None, ge=1, le=31)
    log_level: LogLevel | None = None


class ConcatSpec(BaseModel):
    """Join inputs without re-encoding through the concat demuxer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    inputs: tuple[Path, ...] = Field(..., min_length=1)
    manifest: Path = Field(..., description="Where the file list is written.")
    output: str
    log_level: LogLevel | None = None
