"""High-level entry point tying the compiler, parser and runner together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Sequence

from ffbridge.compile.extract import (
    compile_concat,
    compile_extract_frame,
    compile_extract_frames,
    render_concat_manifest,
)
from ffbridge.compile.probe import ProbeFormat, compile_keyframes, compile_probe
from ffbridge.compile.transcode import compile_transcode
from ffbridge.errors import ParseFailure
from ffbridge.probe.parse import parse_keyframe_timestamps, parse_probe_output
from ffbridge.run.process import run_capturing_output, run_for_side_effect
from ffbridge.schemas.config import FfConfig
from ffbridge.schemas.extract import ConcatSpec, ExtractFrameSpec, ExtractFramesSpec
from ffbridge.schemas.probe import MediaProbeResult
from ffbridge.schemas.transcode import TranscodeSpec

logger = logging.getLogger(__name__)

CaptureRunner = Callable[[str, Sequence[str]], tuple[str, int]]
SideEffectRunner = Callable[[str, Sequence[str]], int]


class Ff:
    """
    ffmpeg/ffprobe client.

    The runners default to subprocess execution and can be swapped out, e.g.
    to run inside a container or to record commands in tests.
    """

    def __init__(
        self,
        config: FfConfig | None = None,
        run_capturing: CaptureRunner = run_capturing_output,
        run_side_effect: SideEffectRunner = run_for_side_effect,
    ) -> None:
        self.config = config or FfConfig()
        self._run_capturing = run_capturing
        self._run_side_effect = run_side_effect

    def probe(self, file: Path | str, fmt: ProbeFormat = "json") -> MediaProbeResult:
        """
        Inspect ``file``.

        Output is parsed even when ffprobe exits non-zero.

        Raises:
            ParseFailure: if ffprobe printed nothing usable.
        """
        raw, status = self._run_capturing(
            self.config.ffprobe_command, compile_probe(file, fmt)
        )
        if not raw.strip():
            raise ParseFailure(f"ffprobe produced no output (exit {status})", raw)
        return parse_probe_output(raw)

    def keyframes(self, file: Path | str) -> list[float]:
        """Keyframe timestamps of the first video stream, ascending."""
        raw, _status = self._run_capturing(
            self.config.ffprobe_command, compile_keyframes(file)
        )
        return parse_keyframe_timestamps(raw)

    def convert(self, spec: TranscodeSpec) -> int:
        return self._ffmpeg(compile_transcode(spec, self.config))

    def extract_frame(self, spec: ExtractFrameSpec) -> int:
        return self._ffmpeg(compile_extract_frame(spec, self.config))

    def extract_frames(self, spec: ExtractFramesSpec) -> int:
        return self._ffmpeg(compile_extract_frames(spec, self.config))

    def concat(self, spec: ConcatSpec) -> int:
        """Write the file list to ``spec.manifest``, then stream-copy."""
        args = compile_concat(spec, self.config)
        spec.manifest.parent.mkdir(parents=True, exist_ok=True)
        spec.manifest.write_text(render_concat_manifest(spec.inputs), encoding="utf-8")
        logger.debug("Wrote concat manifest %s (%d inputs)", spec.manifest, len(spec.inputs))
        return self._ffmpeg(args)

    def _ffmpeg(self, args: list[str]) -> int:
        return self._run_side_effect(self.config.ffmpeg_command, args)
