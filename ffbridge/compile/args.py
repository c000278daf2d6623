"""Small helpers that keep flag assembly declarative."""

from __future__ import annotations

from typing import Callable, TypeVar

from ffbridge.schemas.config import FfConfig, LogLevel

T = TypeVar("T")


def seconds(value: float) -> str:
    """Millisecond resolution, always three decimals."""
    return f"{value:.3f}"


def opt(flag: str, value: T | None, render: Callable[[T], str] = str) -> list[str]:
    """``[flag, render(value)]`` when value is set, otherwise nothing."""
    if value is None:
        return []
    return [flag, render(value)]


def when(condition: bool, *tokens: str) -> list[str]:
    """The given tokens when condition holds, otherwise nothing."""
    return list(tokens) if condition else []


def global_args(config: FfConfig, log_level: LogLevel | None = None) -> list[str]:
    """Flags every ffmpeg invocation starts with."""
    level = log_level or config.log_level
    return ["-hide_banner", "-nostdin", "-y", "-loglevel", level.value]


def filter_chain(*parts: str | None) -> str | None:
    """Join filter fragments with commas; None if nothing is left."""
    present = [part for part in parts if part]
    return ",".join(present) if present else None


def format_fps(fps: float) -> str:
    """``30`` rather than ``30.0``; fractional rates pass through."""
    return str(int(fps)) if float(fps).is_integer() else str(fps)
