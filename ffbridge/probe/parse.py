"""Pure parsing of ffprobe output into MediaProbeResult.

Two wire formats are accepted through one entry point: the JSON document
printed with ``-print_format json`` and the default writer's bracketed
``[SECTION] key=value ... [/SECTION]`` blocks. The format is picked from the
first non-whitespace character.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Mapping

from ffbridge.errors import ParseFailure
from ffbridge.schemas.probe import AudioStream, MediaProbeResult, VideoStream

# Non-greedy body so a "[" inside a value does not end the section early.
_SECTION_RE = re.compile(r"\[([A-Z_]+)\](.*?)\[/\1\]", re.DOTALL)
_MARKER_RE = re.compile(r"\[/?[A-Z_]+\]")
_LINE_RE = re.compile(r"[\r\n]+")
_ABSENT = ("", "N/A")
_TAG_PREFIX = "TAG:"


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() in _ABSENT)


def _to_int(value: Any, field: str, raw: str) -> int | None:
    if _is_absent(value):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    number = _to_float(value, field, raw)
    if number is None or not number.is_integer():
        raise ParseFailure(f"Non-integral {field}: {value!r}", raw)
    return int(number)


def _to_float(value: Any, field: str, raw: str) -> float | None:
    if _is_absent(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ParseFailure(f"Non-numeric {field}: {value!r}", raw) from exc


def _to_str(value: Any) -> str | None:
    return None if _is_absent(value) else str(value)


def _frame_rate(value: Any, raw: str) -> float | None:
    """``30000/1001`` -> 29.97; ``0/0`` means unknown."""
    if _is_absent(value):
        return None
    numerator, _, denominator = str(value).partition("/")
    num = _to_float(numerator, "r_frame_rate", raw)
    den = _to_float(denominator, "r_frame_rate", raw) if denominator else 1.0
    if num is None or not den:
        return None
    return num / den


def _video(values: Mapping[str, Any], raw: str) -> VideoStream:
    return VideoStream(
        codec=_to_str(values.get("codec_name")),
        width=_to_int(values.get("width"), "width", raw),
        height=_to_int(values.get("height"), "height", raw),
        fps=_frame_rate(values.get("r_frame_rate"), raw),
    )


def _audio(values: Mapping[str, Any], raw: str) -> AudioStream:
    return AudioStream(
        codec=_to_str(values.get("codec_name")),
        channels=_to_int(values.get("channels"), "channels", raw),
        sample_rate=_to_int(values.get("sample_rate"), "sample_rate", raw),
        bit_rate=_to_int(values.get("bit_rate"), "bit_rate", raw),
    )


def _build(
    streams: Iterable[Mapping[str, Any]],
    fmt: Mapping[str, Any],
    tags: Mapping[str, Any],
    raw: str,
) -> MediaProbeResult:
    video: VideoStream | None = None
    audio: AudioStream | None = None
    for stream in streams:
        codec_type = stream.get("codec_type")
        # The first stream of each kind is the primary one.
        if codec_type == "video" and video is None:
            video = _video(stream, raw)
        elif codec_type == "audio" and audio is None:
            audio = _audio(stream, raw)

    return MediaProbeResult(
        video=video,
        audio=audio,
        duration=_to_float(fmt.get("duration"), "duration", raw),
        container_format=_to_str(fmt.get("format_name")),
        size_bytes=_to_int(fmt.get("size"), "size", raw),
        metadata={str(k): str(v) for k, v in tags.items() if v is not None},
    )


def _section_values(body: str) -> dict[str, str]:
    # Nested blocks (e.g. SIDE_DATA inside STREAM) are not needed.
    body = _SECTION_RE.sub("", body)
    values: dict[str, str] = {}
    last_key: str | None = None
    for line in _LINE_RE.split(body.strip()):
        if not line.strip():
            continue
        key, sep, value = line.partition("=")
        if sep:
            last_key = key.strip()
            values[last_key] = value.strip()
        elif last_key is not None:
            # ffprobe does not escape newlines inside tag values.
            values[last_key] += "\n" + line.strip()
    return values


def parse_bracketed(raw: str) -> MediaProbeResult:
    """Parse ffprobe's default writer output."""
    streams: list[dict[str, str]] = []
    fmt: dict[str, str] = {}
    tags: dict[str, str] = {}

    for match in _SECTION_RE.finditer(raw):
        name, body = match.group(1), match.group(2)
        values = _section_values(body)
        if name == "STREAM":
            streams.append(values)
        elif name == "FORMAT":
            for key, value in values.items():
                if key.startswith(_TAG_PREFIX):
                    tags[key[len(_TAG_PREFIX):]] = value
                else:
                    fmt[key] = value

    leftover = _MARKER_RE.search(_SECTION_RE.sub("", raw))
    if leftover:
        raise ParseFailure(f"Unterminated section marker {leftover.group(0)}", raw)

    return _build(streams, fmt, tags, raw)


def parse_json(raw: str) -> MediaProbeResult:
    """Parse ``-print_format json`` output; missing keys decode as empty."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseFailure(f"Invalid JSON: {exc.msg}", raw) from exc
    if not isinstance(data, dict):
        raise ParseFailure("Expected a JSON object", raw)

    streams = data.get("streams") or []
    fmt = data.get("format") or {}
    if not isinstance(streams, list) or not isinstance(fmt, dict):
        raise ParseFailure("Unexpected shape for 'streams' or 'format'", raw)
    tags = fmt.get("tags") or {}
    if not isinstance(tags, dict):
        raise ParseFailure("Unexpected shape for 'format.tags'", raw)

    return _build(
        (stream for stream in streams if isinstance(stream, dict)),
        fmt,
        tags,
        raw,
    )


def parse_probe_output(raw: str) -> MediaProbeResult:
    """Parse either ffprobe output format into a MediaProbeResult."""
    if raw.lstrip().startswith("{"):
        return parse_json(raw)
    return parse_bracketed(raw)


def parse_keyframe_timestamps(raw: str) -> list[float]:
    """Whitespace (or CSV) separated timestamps, returned ascending."""
    timestamps: list[float] = []
    for token in re.split(r"[\s,]+", raw.strip()):
        if _is_absent(token):
            continue
        value = _to_float(token, "keyframe timestamp", raw)
        if value is not None:
            timestamps.append(value)
    return sorted(timestamps)
