from __future__ import annotations

import os
from enum import Enum
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ffbridge.errors import InvalidSpec


class LogLevel(str, Enum):
    """Values accepted by ffmpeg's ``-loglevel`` flag."""

    QUIET = "quiet"
    PANIC = "panic"
    FATAL = "fatal"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    VERBOSE = "verbose"
    DEBUG = "debug"
    TRACE = "trace"


class FfConfig(BaseModel):
    """Binaries and defaults shared by every compiled command."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ffmpeg_command: str = Field("ffmpeg", description="Transcoder executable.")
    ffprobe_command: str = Field("ffprobe", description="Inspector executable.")
    log_level: LogLevel = Field(
        LogLevel.ERROR, description="Default verbosity passed to -loglevel."
    )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FfConfig":
        """Build a config from FFBRIDGE_* environment variables.

        Raises:
            InvalidSpec: if a variable holds a value the config rejects.
        """
        env = os.environ if environ is None else environ
        values: dict[str, str] = {}
        if env.get("FFBRIDGE_FFMPEG"):
            values["ffmpeg_command"] = env["FFBRIDGE_FFMPEG"]
        if env.get("FFBRIDGE_FFPROBE"):
            values["ffprobe_command"] = env["FFBRIDGE_FFPROBE"]
        if env.get("FFBRIDGE_LOG_LEVEL"):
            values["log_level"] = env["FFBRIDGE_LOG_LEVEL"].lower()
        try:
            return cls.model_validate(values)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidSpec(f"Invalid FFBRIDGE_* environment: {problems}") from exc
