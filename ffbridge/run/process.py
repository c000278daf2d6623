"""Run ffmpeg/ffprobe as subprocesses.

Non-zero exit codes are returned rather than raised: ffmpeg routinely exits
non-zero on damaged media while still printing usable output, so callers
decide what a failure means.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Sequence

from ffbridge.errors import ExecutableNotFound

logger = logging.getLogger(__name__)


def _describe(command: str, args: Sequence[str]) -> str:
    return shlex.join([command, *args])


def run_capturing_output(command: str, args: Sequence[str]) -> tuple[str, int]:
    """
    Run ``command`` and return its stdout together with the exit status.

    Raises:
        ExecutableNotFound: if the binary cannot be started.
    """
    logger.debug("Running %s", _describe(command, args))
    try:
        result = subprocess.run(
            [command, *args], capture_output=True, text=True, check=False
        )
    except FileNotFoundError as exc:
        raise ExecutableNotFound(
            f"{command} not found. Please install FFmpeg or configure its path."
        ) from exc

    if result.returncode != 0:
        logger.warning(
            "%s exited with %d: %s", command, result.returncode, result.stderr.strip()
        )
    elif result.stderr.strip():
        logger.info("%s stderr: %s", command, result.stderr.strip())
    return result.stdout, result.returncode


def run_for_side_effect(command: str, args: Sequence[str]) -> int:
    """Run ``command`` with inherited stdout/stderr and return its exit status."""
    logger.debug("Running %s", _describe(command, args))
    try:
        result = subprocess.run(
            [command, *args], stdin=subprocess.DEVNULL, check=False
        )
    except FileNotFoundError as exc:
        raise ExecutableNotFound(
            f"{command} not found. Please install FFmpeg or configure its path."
        ) from exc

    if result.returncode != 0:
        logger.warning("%s exited with %d", command, result.returncode)
    return result.returncode
