"""Shared test fixtures."""

from pathlib import Path

import pytest

from ffbridge.schemas.transcode import InputSpec, OutputSpec, TranscodeSpec

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def bracketed_probe() -> str:
    return (FIXTURES_DIR / "probe_default.txt").read_text(encoding="utf-8")


@pytest.fixture
def json_probe() -> str:
    return (FIXTURES_DIR / "probe.json").read_text(encoding="utf-8")


@pytest.fixture
def make_spec():
    """Build a TranscodeSpec with sensible input/output defaults."""

    def _make(**overrides) -> TranscodeSpec:
        fields = {
            "input": InputSpec(file=Path("in.mp4")),
            "output": OutputSpec(file="out.mp4"),
        }
        fields.update(overrides)
        return TranscodeSpec(**fields)

    return _make
