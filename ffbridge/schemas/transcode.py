"""Configuration model for a single ffmpeg transcode invocation.

Codec families are closed unions discriminated by their ``codec`` tag, so a
field that only makes sense for one family cannot be attached to another.
``video``/``audio`` also accept a plain boolean: ``True`` copies the stream,
``False`` drops it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import LogLevel

Seconds = Annotated[float, Field(ge=0)]
# ffmpeg accepts plain bit counts or suffixed values such as "2M" or "800k".
Bitrate = Union[
    Annotated[int, Field(ge=0)],
    Annotated[str, Field(pattern=r"^\d+(\.\d+)?[kKMG]?$")],
]


class _Spec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class InputSpec(_Spec):
    """The source file plus trims applied before decoding."""

    file: Path
    start: Seconds | None = None
    duration: Seconds | None = None
    end: Seconds | None = Field(
        None, description="Stop reading at this offset; exclusive with duration."
    )
    copy_timestamps: bool = False


class MovFlag(str, Enum):
    FASTSTART = "faststart"
    FRAG_KEYFRAME = "frag_keyframe"
    EMPTY_MOOV = "empty_moov"
    DEFAULT_BASE_MOOF = "default_base_moof"
    SEPARATE_MOOF = "separate_moof"
    OMIT_TFHD_OFFSET = "omit_tfhd_offset"
    FRAG_CUSTOM = "frag_custom"
    DASH = "dash"


class OutputSpec(_Spec):
    """Destination file, container and trims applied after decoding."""

    file: str
    format: str | None = None
    start: Seconds | None = None
    duration: Seconds | None = None
    end: Seconds | None = None
    # Only meaningful for mp4/mov-like containers.
    movflags: tuple[MovFlag, ...] = ()


class StreamMap(_Spec):
    """One ``-map`` directive selecting or excluding streams of an input."""

    input_index: int = Field(0, ge=0)
    stream_type: Literal["v", "V", "a", "s", "d", "t"] | None = None
    stream_index: int | None = Field(None, ge=0)
    optional: bool = Field(False, description="Do not fail if nothing matches.")
    exclude: bool = Field(False, description="Negative mapping.")


class Resize(_Spec):
    """Target frame size; -2 derives that side from the other one."""

    width: int = -2
    height: int = -2

    @field_validator("width", "height")
    @classmethod
    def _positive_or_derived(cls, value: int) -> int:
        if value != -2 and value <= 0:
            raise ValueError("must be a positive pixel count or -2")
        return value


class _VideoBase(_Spec):
    fps: float | None = Field(None, gt=0)
    resize: Resize | None = None
    filter: str | None = Field(None, description="Appended to the filter graph.")


class X264Video(_VideoBase):
    codec: Literal["libx264"]
    preset: Literal[
        "ultrafast",
        "superfast",
        "veryfast",
        "faster",
        "fast",
        "medium",
        "slow",
        "slower",
        "veryslow",
    ] = "medium"
    crf: int = Field(23, ge=0, le=51)


class TheoraVideo(_VideoBase):
    codec: Literal["libtheora"]
    quality: int = Field(..., ge=0, le=10)


class GifVideo(_VideoBase):
    codec: Literal["gif"]
    loop: bool | Annotated[int, Field(ge=-1)] = Field(
        True, description="True loops forever, False plays once, N repeats N times."
    )


class AverageBitrate(_Spec):
    mode: Literal["average_bitrate"]
    bitrate: Bitrate


class ConstantQuality(_Spec):
    mode: Literal["constant_quality"]
    crf: int = Field(..., ge=0, le=63)


class ConstrainedQualityCrf(_Spec):
    mode: Literal["constrained_quality_crf"]
    crf: int = Field(..., ge=0, le=63)
    bitrate: Bitrate = Field(..., description="Upper bound on the average rate.")


class ConstrainedQualityBounds(_Spec):
    mode: Literal["constrained_quality_bounds"]
    minimum: Bitrate
    target: Bitrate
    maximum: Bitrate


class ConstantBitrate(_Spec):
    mode: Literal["constant_bitrate"]
    bitrate: Bitrate


class Lossless(_Spec):
    mode: Literal["lossless"]


Vp9BitrateMode = Annotated[
    Union[
        AverageBitrate,
        ConstantQuality,
        ConstrainedQualityCrf,
        ConstrainedQualityBounds,
        ConstantBitrate,
        Lossless,
    ],
    Field(discriminator="mode"),
]


class Vp9Video(_VideoBase):
    codec: Literal["vp9"]
    bitrate_mode: Vp9BitrateMode
    deadline: Literal["good", "best", "realtime"] | None = None
    cpu_used: int | None = Field(None, ge=-8, le=8)
    multithreading: bool | None = Field(None, description="Row-based threading.")


VideoCodec = Annotated[
    Union[X264Video, TheoraVideo, GifVideo, Vp9Video],
    Field(discriminator="codec"),
]


class _AudioBase(_Spec):
    sample_rate: int | None = Field(None, gt=0)
    # Mix a single stereo stream into a mono stream.
    downmix: bool = False
    filter: str | None = None


class AacAudio(_AudioBase):
    codec: Literal["aac"]


class FlacAudio(_AudioBase):
    codec: Literal["flac"]


class Mp3Audio(_AudioBase):
    codec: Literal["libmp3lame"]
    quality: int = Field(..., ge=0, le=9)


class OpusAudio(_AudioBase):
    codec: Literal["libopus"]
    bitrate: Bitrate | None = None


class VorbisAudio(_AudioBase):
    codec: Literal["libvorbis"]
    quality: int = Field(..., ge=-1, le=10)


class PcmAudio(_AudioBase):
    codec: Literal["pcm"]
    signedness: Literal["s", "u"]
    bits: Literal[8, 16, 24, 32, 64]
    # Omit if 8 bits.
    endianness: Literal["be", "le"] | None = None


AudioCodec = Annotated[
    Union[AacAudio, FlacAudio, Mp3Audio, OpusAudio, VorbisAudio, PcmAudio],
    Field(discriminator="codec"),
]


class TranscodeSpec(_Spec):
    """Everything needed to compile one ffmpeg transcode command."""

    input: InputSpec
    output: OutputSpec
    video: bool | VideoCodec = True
    audio: bool | AudioCodec = True
    maps: tuple[StreamMap, ...] = ()
    metadata: bool = Field(True, description="Preserve source metadata.")
    threads: int | None = Field(None, ge=0)
    log_level: LogLevel | None = None
