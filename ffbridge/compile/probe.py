"""ffprobe argument lists for the two supported output formats."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

ProbeFormat = Literal["json", "default"]

# Entries the bracketed parser knows how to read.
DEFAULT_ENTRIES = (
    "stream=codec_type,codec_name,width,height,r_frame_rate,"
    "channels,sample_rate,bit_rate"
    ":format=duration,size,format_name:format_tags"
)


def compile_probe(file: Path | str, fmt: ProbeFormat = "json") -> list[str]:
    """Arguments for ffprobe; ``default`` yields [SECTION] key=value blocks."""
    if fmt == "json":
        return [
            "-v", "error",
            "-print_format", "json",
            "-show_format",
            "-show_streams",
            str(file),
        ]
    if fmt == "default":
        return [
            "-v", "error",
            "-show_entries", DEFAULT_ENTRIES,
            "-ignore_chapters", "1",
            str(file),
        ]
    raise ValueError(f"Unknown probe format: {fmt!r}")


def compile_keyframes(file: Path | str) -> list[str]:
    """Timestamps of the first video stream's keyframes, one per line."""
    return [
        "-v", "error",
        "-skip_frame", "nokey",
        "-select_streams", "v:0",
        "-show_entries", "frame=pts_time",
        "-of", "csv=p=0",
        str(file),
    ]
