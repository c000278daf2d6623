"""Compile a TranscodeSpec into the exact ffmpeg argument list."""

from __future__ import annotations

from ffbridge.compile.args import global_args, opt, seconds, when
from ffbridge.compile.audio import audio_args
from ffbridge.compile.video import video_args
from ffbridge.errors import InvalidSpec
from ffbridge.schemas.config import FfConfig
from ffbridge.schemas.transcode import InputSpec, OutputSpec, StreamMap, TranscodeSpec


def _trim_args(side: str, start: float | None, duration: float | None, end: float | None) -> list[str]:
    if duration is not None and end is not None:
        raise InvalidSpec(f"{side} trim sets both duration and end")
    return [
        *opt("-ss", start, seconds),
        *opt("-t", duration, seconds),
        *opt("-to", end, seconds),
    ]


def input_args(spec: InputSpec) -> list[str]:
    """Trims apply to the next -i only, so they come first."""
    return [
        *_trim_args("input", spec.start, spec.duration, spec.end),
        *when(spec.copy_timestamps, "-copyts"),
        "-i", str(spec.file),
    ]


def map_token(stream_map: StreamMap) -> str:
    """``[-]input[:type][:index][?]``, e.g. ``-0:a:1?``."""
    token = f"{'-' if stream_map.exclude else ''}{stream_map.input_index}"
    if stream_map.stream_type is not None:
        token += f":{stream_map.stream_type}"
    if stream_map.stream_index is not None:
        token += f":{stream_map.stream_index}"
    if stream_map.optional:
        token += "?"
    return token


def output_args(spec: OutputSpec) -> list[str]:
    """Container flags and trims; the destination is always the last token."""
    movflags = "+".join(flag.value for flag in spec.movflags)
    return [
        *opt("-f", spec.format),
        *when(bool(movflags), "-movflags", movflags),
        *_trim_args("output", spec.start, spec.duration, spec.end),
        spec.file,
    ]


def compile_transcode(spec: TranscodeSpec, config: FfConfig | None = None) -> list[str]:
    """
    Build the ffmpeg arguments (without the executable) for ``spec``.

    Raises:
        InvalidSpec: if a trim sets both duration and end, or a codec
            variant carries an impossible combination.
        UnsupportedVariant: if a codec or bitrate mode is unknown.
    """
    config = config or FfConfig()
    args = global_args(config, spec.log_level)
    args += opt("-threads", spec.threads)
    args += input_args(spec.input)
    args += when(not spec.metadata, "-map_metadata", "-1")
    for stream_map in spec.maps:
        args += ["-map", map_token(stream_map)]
    args += video_args(spec.video)
    args += audio_args(spec.audio)
    args += output_args(spec.output)
    return args
