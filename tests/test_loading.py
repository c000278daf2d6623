"""Tests for load_spec: mapping untrusted dicts onto the spec models."""

import pytest

from ffbridge.errors import InvalidSpec, UnsupportedVariant
from ffbridge.schemas.loading import load_spec
from ffbridge.schemas.transcode import PcmAudio, TranscodeSpec, Vp9Video

BASE = {"input": {"file": "in.mp4"}, "output": {"file": "out.webm"}}


class TestLoadSpec:
    def test_boolean_shorthand(self):
        spec = load_spec(TranscodeSpec, {**BASE, "video": False, "audio": True})
        assert spec.video is False
        assert spec.audio is True

    def test_codec_variants(self):
        spec = load_spec(
            TranscodeSpec,
            {
                **BASE,
                "video": {
                    "codec": "vp9",
                    "bitrate_mode": {"mode": "constrained_quality_crf", "crf": 31, "bitrate": "2M"},
                    "deadline": "good",
                },
                "audio": {"codec": "pcm", "signedness": "s", "bits": 16, "endianness": "le"},
            },
        )
        assert isinstance(spec.video, Vp9Video)
        assert spec.video.bitrate_mode.crf == 31
        assert isinstance(spec.audio, PcmAudio)

    def test_unknown_codec_tag(self):
        with pytest.raises(UnsupportedVariant, match="hevc"):
            load_spec(TranscodeSpec, {**BASE, "video": {"codec": "hevc"}})

    def test_unknown_bitrate_mode(self):
        with pytest.raises(UnsupportedVariant, match="two_pass"):
            load_spec(
                TranscodeSpec,
                {**BASE, "video": {"codec": "vp9", "bitrate_mode": {"mode": "two_pass"}}},
            )

    def test_field_from_other_variant_rejected(self):
        with pytest.raises(InvalidSpec, match="crf"):
            load_spec(TranscodeSpec, {**BASE, "video": {"codec": "gif", "crf": 20}})

    def test_out_of_range_quality(self):
        with pytest.raises(InvalidSpec):
            load_spec(TranscodeSpec, {**BASE, "audio": {"codec": "libmp3lame", "quality": 12}})

    def test_invalid_resize(self):
        with pytest.raises(InvalidSpec, match="resize"):
            load_spec(
                TranscodeSpec,
                {**BASE, "video": {"codec": "gif", "resize": {"width": 0}}},
            )

    def test_specs_are_frozen(self):
        spec = load_spec(TranscodeSpec, BASE)
        with pytest.raises(Exception):
            spec.metadata = False

    def test_gif_loop_below_no_loop_rejected(self):
        with pytest.raises(InvalidSpec, match="loop"):
            load_spec(TranscodeSpec, {**BASE, "video": {"codec": "gif", "loop": -2}})

    def test_gif_loop_count_and_flags(self):
        for loop in (-1, 0, 3, True, False):
            spec = load_spec(TranscodeSpec, {**BASE, "video": {"codec": "gif", "loop": loop}})
            assert spec.video.loop == loop
            assert type(spec.video.loop) is type(loop)
