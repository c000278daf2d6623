"""Lower the video part of a transcode spec to ffmpeg flags."""

from __future__ import annotations

from ffbridge.compile.args import filter_chain, format_fps, opt, when
from ffbridge.errors import InvalidSpec, UnsupportedVariant
from ffbridge.schemas.transcode import (
    AverageBitrate,
    ConstantBitrate,
    ConstantQuality,
    ConstrainedQualityBounds,
    ConstrainedQualityCrf,
    GifVideo,
    Lossless,
    Resize,
    TheoraVideo,
    VideoCodec,
    Vp9BitrateMode,
    Vp9Video,
    X264Video,
)

# Large queue so x264 muxing does not stall on sparse audio.
X264_MAX_MUXING_QUEUE = "1048576"


def _scale(resize: Resize) -> str:
    if resize.width == -2 and resize.height == -2:
        raise InvalidSpec("resize needs at least one concrete dimension")
    return f"scale={resize.width}:{resize.height}"


def video_filter(video: VideoCodec) -> str | None:
    """Frame-rate conversion, then resize, then the user's own fragment."""
    return filter_chain(
        f"fps={format_fps(video.fps)}" if video.fps is not None else None,
        _scale(video.resize) if video.resize is not None else None,
        video.filter,
    )


def bitrate_mode_args(mode: Vp9BitrateMode) -> list[str]:
    """Rate-control flags for libvpx-vp9, one fixed set per mode."""
    if isinstance(mode, AverageBitrate):
        return ["-b:v", str(mode.bitrate)]
    if isinstance(mode, ConstantQuality):
        return ["-crf", str(mode.crf), "-b:v", "0"]
    if isinstance(mode, ConstrainedQualityCrf):
        return ["-crf", str(mode.crf), "-b:v", str(mode.bitrate)]
    if isinstance(mode, ConstrainedQualityBounds):
        return [
            "-minrate", str(mode.minimum),
            "-b:v", str(mode.target),
            "-maxrate", str(mode.maximum),
        ]
    if isinstance(mode, ConstantBitrate):
        return [
            "-minrate", str(mode.bitrate),
            "-maxrate", str(mode.bitrate),
            "-b:v", str(mode.bitrate),
        ]
    if isinstance(mode, Lossless):
        return ["-lossless", "1"]
    raise UnsupportedVariant("bitrate mode", getattr(mode, "mode", type(mode).__name__))


def _gif_loop(loop: bool | int) -> str:
    if isinstance(loop, bool):
        return "0" if loop else "-1"
    return str(loop)


def _codec_args(video: VideoCodec) -> list[str]:
    if isinstance(video, X264Video):
        return [
            "-c:v", "libx264",
            "-preset", video.preset,
            "-crf", str(video.crf),
            "-max_muxing_queue_size", X264_MAX_MUXING_QUEUE,
        ]
    if isinstance(video, TheoraVideo):
        return ["-c:v", "libtheora", "-q:v", str(video.quality)]
    if isinstance(video, GifVideo):
        return ["-c:v", "gif", "-loop", _gif_loop(video.loop)]
    if isinstance(video, Vp9Video):
        return [
            "-c:v", "libvpx-vp9",
            *bitrate_mode_args(video.bitrate_mode),
            *opt("-deadline", video.deadline),
            *opt("-cpu-used", video.cpu_used),
            *opt("-row-mt", video.multithreading, lambda on: "1" if on else "0"),
        ]
    raise UnsupportedVariant("video codec", getattr(video, "codec", type(video).__name__))


def video_args(video: bool | VideoCodec) -> list[str]:
    """Flags for ``TranscodeSpec.video``; booleans short-circuit to copy/drop."""
    if isinstance(video, bool):
        return when(video, "-c:v", "copy") or ["-vn"]
    # Dispatch first so an unknown variant never reaches the filter code.
    codec_args = _codec_args(video)
    return [*opt("-filter:v", video_filter(video)), *codec_args]
