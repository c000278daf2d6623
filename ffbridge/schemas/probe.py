from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class VideoStream(BaseModel):
    """First video stream reported by ffprobe."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    codec: str | None = None
    width: int | None = None
    height: int | None = None
    fps: float | None = None


class AudioStream(BaseModel):
    """First audio stream reported by ffprobe."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    codec: str | None = None
    channels: int | None = None
    sample_rate: int | None = None
    bit_rate: int | None = None


class MediaProbeResult(BaseModel):
    """Container and stream properties of one probed file.

    Anything ffprobe did not report (or reported as ``N/A``) is ``None``;
    a file without an audio track has ``audio=None`` rather than a zeroed
    stream.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    video: VideoStream | None = None
    audio: AudioStream | None = None
    duration: float | None = Field(None, description="Seconds.")
    container_format: str | None = None
    size_bytes: int | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
