"""Lower the audio part of a transcode spec to ffmpeg flags."""

from __future__ import annotations

from ffbridge.compile.args import opt, when
from ffbridge.errors import InvalidSpec, UnsupportedVariant
from ffbridge.schemas.transcode import (
    AacAudio,
    AudioCodec,
    FlacAudio,
    Mp3Audio,
    OpusAudio,
    PcmAudio,
    VorbisAudio,
)


def pcm_codec_name(pcm: PcmAudio) -> str:
    """e.g. ``pcm_s16le``; 8-bit samples carry no byte order (``pcm_u8``)."""
    if pcm.bits == 8 and pcm.endianness is not None:
        raise InvalidSpec("8-bit PCM has no endianness")
    return f"pcm_{pcm.signedness}{pcm.bits}{pcm.endianness or ''}"


def _codec(audio: AudioCodec) -> tuple[str, list[str]]:
    """Codec token plus the tuning flags that follow the common ones."""
    if isinstance(audio, (AacAudio, FlacAudio)):
        return audio.codec, []
    if isinstance(audio, Mp3Audio):
        return "libmp3lame", ["-q:a", str(audio.quality)]
    if isinstance(audio, OpusAudio):
        return "libopus", opt("-b:a", audio.bitrate)
    if isinstance(audio, VorbisAudio):
        return "libvorbis", ["-q:a", str(audio.quality)]
    if isinstance(audio, PcmAudio):
        return pcm_codec_name(audio), []
    raise UnsupportedVariant("audio codec", getattr(audio, "codec", type(audio).__name__))


def audio_args(audio: bool | AudioCodec) -> list[str]:
    """Flags for ``TranscodeSpec.audio``; booleans short-circuit to copy/drop."""
    if isinstance(audio, bool):
        return when(audio, "-c:a", "copy") or ["-an"]
    codec, tuning = _codec(audio)
    return [
        *opt("-filter:a", audio.filter),
        "-c:a", codec,
        *opt("-ar", audio.sample_rate),
        *when(audio.downmix, "-ac", "1"),
        *tuning,
    ]
