"""Frame extraction and concatenation commands."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from ffbridge.compile.args import filter_chain, format_fps, global_args, opt, seconds
from ffbridge.schemas.config import FfConfig
from ffbridge.schemas.extract import ConcatSpec, ExtractFrameSpec, ExtractFramesSpec


def compile_extract_frame(spec: ExtractFrameSpec, config: FfConfig | None = None) -> list[str]:
    """Seek on the input, then write exactly one frame."""
    config = config or FfConfig()
    return [
        *global_args(config, spec.log_level),
        "-ss", seconds(spec.timestamp),
        "-i", str(spec.input),
        *opt("-filter:v", spec.scale_width, lambda w: f"scale={w}:-1"),
        "-frames:v", "1",
        *opt("-q:v", spec.quality),
        spec.output,
    ]


def compile_extract_frames(spec: ExtractFramesSpec, config: FfConfig | None = None) -> list[str]:
    """Write an image sequence sampled at ``spec.fps``."""
    config = config or FfConfig()
    vf = filter_chain(
        f"fps={format_fps(spec.fps)}",
        f"scale={spec.scale_width}:-1" if spec.scale_width else None,
    )
    return [
        *global_args(config, spec.log_level),
        *opt("-ss", spec.start, seconds),
        *opt("-t", spec.duration, seconds),
        "-i", str(spec.input),
        "-filter:v", vf,
        *opt("-q:v", spec.quality),
        spec.output,
    ]


def _quote(path: Path) -> str:
    # concat demuxer quoting: close the quote, escape, reopen.
    return "'" + str(path).replace("'", "'\\''") + "'"


def render_concat_manifest(inputs: Iterable[Path]) -> str:
    """File list understood by ``-f concat``."""
    return "".join(f"file {_quote(Path(item))}\n" for item in inputs)


def compile_concat(spec: ConcatSpec, config: FfConfig | None = None) -> list[str]:
    """Stream-copy every input listed in ``spec.manifest`` into one output."""
    config = config or FfConfig()
    return [
        *global_args(config, spec.log_level),
        "-f", "concat",
        "-safe", "0",
        "-i", str(spec.manifest),
        "-c", "copy",
        spec.output,
    ]
