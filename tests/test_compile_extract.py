"""Unit tests for frame extraction, concat and probe command builders."""

from pathlib import Path

import pytest

from ffbridge.compile.extract import (
    compile_concat,
    compile_extract_frame,
    compile_extract_frames,
    render_concat_manifest,
)
from ffbridge.compile.probe import compile_keyframes, compile_probe
from ffbridge.errors import InvalidSpec
from ffbridge.schemas.config import FfConfig, LogLevel
from ffbridge.schemas.extract import ConcatSpec, ExtractFrameSpec, ExtractFramesSpec

GLOBAL = ["-hide_banner", "-nostdin", "-y", "-loglevel", "error"]


class TestExtractFrame:
    def test_minimal(self):
        spec = ExtractFrameSpec(input=Path("in.mp4"), timestamp=12.3456, output="still.png")
        assert compile_extract_frame(spec) == [
            *GLOBAL, "-ss", "12.346", "-i", "in.mp4", "-frames:v", "1", "still.png"
        ]

    def test_scale_and_quality(self):
        spec = ExtractFrameSpec(
            input=Path("in.mp4"), timestamp=0, output="still.jpg", scale_width=320, quality=2
        )
        args = compile_extract_frame(spec)
        assert args[-7:] == [
            "-filter:v", "scale=320:-1", "-frames:v", "1", "-q:v", "2", "still.jpg"
        ]


class TestExtractFrames:
    def test_fps_and_downscale_share_one_filter(self):
        spec = ExtractFramesSpec(
            input=Path("in.mp4"), output="thumbs/%04d.jpg", fps=0.5, scale_width=160
        )
        args = compile_extract_frames(spec)
        assert args.count("-filter:v") == 1
        assert args[args.index("-filter:v") + 1] == "fps=0.5,scale=160:-1"
        assert args[-1] == "thumbs/%04d.jpg"

    def test_trims_precede_input(self):
        spec = ExtractFramesSpec(
            input=Path("in.mp4"), output="f%03d.png", fps=1, start=10, duration=5,
            log_level=LogLevel.QUIET,
        )
        args = compile_extract_frames(spec)
        assert args[:11] == [
            "-hide_banner", "-nostdin", "-y", "-loglevel", "quiet",
            "-ss", "10.000", "-t", "5.000", "-i", "in.mp4",
        ]
        assert args[args.index("-filter:v") + 1] == "fps=1"


class TestConcat:
    def test_args(self):
        spec = ConcatSpec(
            inputs=(Path("a.mp4"), Path("b.mp4")), manifest=Path("list.txt"), output="ab.mp4"
        )
        assert compile_concat(spec) == [
            *GLOBAL, "-f", "concat", "-safe", "0", "-i", "list.txt", "-c", "copy", "ab.mp4"
        ]

    def test_manifest_quotes_paths(self):
        text = render_concat_manifest([Path("/clips/a.mp4"), Path("/clips/it's.mp4")])
        assert text == "file '/clips/a.mp4'\nfile '/clips/it'\\''s.mp4'\n"

    def test_empty_inputs_rejected(self):
        with pytest.raises(ValueError):
            ConcatSpec(inputs=(), manifest=Path("list.txt"), output="x.mp4")


class TestProbeCommands:
    def test_json(self):
        assert compile_probe("clip.mp4") == [
            "-v", "error", "-print_format", "json", "-show_format", "-show_streams", "clip.mp4"
        ]

    def test_default_writer(self):
        args = compile_probe(Path("clip.mp4"), "default")
        assert "-print_format" not in args
        entries = args[args.index("-show_entries") + 1]
        assert "r_frame_rate" in entries and "format_tags" in entries
        assert args[-1] == "clip.mp4"

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="xml"):
            compile_probe("clip.mp4", "xml")

    def test_keyframes(self):
        args = compile_keyframes("clip.mp4")
        assert args[args.index("-skip_frame") + 1] == "nokey"
        assert args[-1] == "clip.mp4"


class TestConfig:
    def test_defaults(self):
        config = FfConfig()
        assert config.ffmpeg_command == "ffmpeg"
        assert config.ffprobe_command == "ffprobe"
        assert config.log_level is LogLevel.ERROR

    def test_from_env(self):
        config = FfConfig.from_env(
            {
                "FFBRIDGE_FFMPEG": "/opt/ff/ffmpeg",
                "FFBRIDGE_FFPROBE": "/opt/ff/ffprobe",
                "FFBRIDGE_LOG_LEVEL": "WARNING",
            }
        )
        assert config.ffmpeg_command == "/opt/ff/ffmpeg"
        assert config.ffprobe_command == "/opt/ff/ffprobe"
        assert config.log_level is LogLevel.WARNING

    def test_from_empty_env(self):
        assert FfConfig.from_env({}) == FfConfig()

    def test_unknown_log_level_in_env(self):
        with pytest.raises(InvalidSpec, match="log_level"):
            FfConfig.from_env({"FFBRIDGE_LOG_LEVEL": "loud"})
