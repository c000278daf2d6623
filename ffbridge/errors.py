"""Error taxonomy shared by the compiler, the probe parser and the runner."""

from __future__ import annotations


class FfBridgeError(Exception):
    """Base class for every error raised by ffbridge."""


class InvalidSpec(FfBridgeError, ValueError):
    """A structurally impossible configuration reached the compiler."""


class UnsupportedVariant(FfBridgeError):
    """A variant tag the compiler does not know how to lower."""

    def __init__(self, kind: str, tag: object) -> None:
        super().__init__(f"Unsupported {kind} variant: {tag!r}")
        self.kind = kind
        self.tag = tag


class ParseFailure(FfBridgeError, ValueError):
    """Raw probe output matched neither known format."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw

    def __str__(self) -> str:
        excerpt = self.raw if len(self.raw) <= 200 else self.raw[:200] + "..."
        return f"{self.args[0]} (raw output: {excerpt!r})"


class ExecutableNotFound(FfBridgeError, RuntimeError):
    """The configured ffmpeg/ffprobe binary could not be started."""
