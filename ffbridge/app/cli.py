from __future__ import annotations

import json
import logging
import shlex
from enum import Enum
from pathlib import Path

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ffbridge.client import Ff
from ffbridge.compile.extract import (
    compile_concat,
    compile_extract_frame,
    compile_extract_frames,
)
from ffbridge.compile.transcode import compile_transcode
from ffbridge.errors import FfBridgeError
from ffbridge.schemas.config import FfConfig
from ffbridge.schemas.extract import ConcatSpec, ExtractFrameSpec, ExtractFramesSpec
from ffbridge.schemas.loading import load_spec
from ffbridge.schemas.transcode import TranscodeSpec

app = typer.Typer(help="Compile ffmpeg commands and parse ffprobe output")
console = Console()


class SpecKind(str, Enum):
    transcode = "transcode"
    frame = "frame"
    frames = "frames"
    concat = "concat"


class ProbeOutput(str, Enum):
    json = "json"
    default = "default"


_MODELS: dict[SpecKind, type[BaseModel]] = {
    SpecKind.transcode: TranscodeSpec,
    SpecKind.frame: ExtractFrameSpec,
    SpecKind.frames: ExtractFramesSpec,
    SpecKind.concat: ConcatSpec,
}

_COMPILERS = {
    SpecKind.transcode: compile_transcode,
    SpecKind.frame: compile_extract_frame,
    SpecKind.frames: compile_extract_frames,
    SpecKind.concat: compile_concat,
}

# What a bad spec file or environment can raise.
_FAILURES = (FfBridgeError, json.JSONDecodeError, UnicodeDecodeError, OSError)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every command."),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load(spec_path: Path, kind: SpecKind) -> BaseModel:
    data = json.loads(spec_path.read_text(encoding="utf-8"))
    return load_spec(_MODELS[kind], data)


@app.command()
def probe(
    input_file: Path = typer.Argument(..., exists=True, help="Media file to inspect"),
    output_format: ProbeOutput = typer.Option(
        ProbeOutput.json, "--format", help="ffprobe writer to request."
    ),
) -> None:
    """Probe a media file and print the normalized properties as JSON."""
    try:
        result = Ff(FfConfig.from_env()).probe(input_file, output_format.value)
    except (FfBridgeError, OSError) as exc:
        console.print(f"[red]Probe failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print_json(result.model_dump_json())


@app.command()
def keyframes(
    input_file: Path = typer.Argument(..., exists=True, help="Media file to inspect"),
) -> None:
    """Print keyframe timestamps of the first video stream."""
    try:
        timestamps = Ff(FfConfig.from_env()).keyframes(input_file)
    except (FfBridgeError, OSError) as exc:
        console.print(f"[red]Keyframe scan failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print_json(data=timestamps)


@app.command(name="compile")
def compile_cmd(
    spec_path: Path = typer.Argument(..., exists=True, help="JSON spec file"),
    kind: SpecKind = typer.Option(SpecKind.transcode, help="What the spec describes."),
) -> None:
    """Print the ffmpeg command a spec compiles to, without running it."""
    try:
        config = FfConfig.from_env()
        spec = _load(spec_path, kind)
        args = _COMPILERS[kind](spec, config)
    except _FAILURES as exc:
        console.print(f"[red]Compile failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)

    command = shlex.join([config.ffmpeg_command, *args])
    console.print(command, markup=False, highlight=False, soft_wrap=True)


@app.command()
def run(
    spec_path: Path = typer.Argument(..., exists=True, help="JSON spec file"),
    kind: SpecKind = typer.Option(SpecKind.transcode, help="What the spec describes."),
) -> None:
    """Compile a spec and run ffmpeg with it."""
    try:
        ff = Ff(FfConfig.from_env())
        runners = {
            SpecKind.transcode: ff.convert,
            SpecKind.frame: ff.extract_frame,
            SpecKind.frames: ff.extract_frames,
            SpecKind.concat: ff.concat,
        }
        spec = _load(spec_path, kind)
        status = runners[kind](spec)
    except _FAILURES as exc:
        console.print(f"[red]Run failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if status != 0:
        console.print(f"[red]ffmpeg exited with {status}[/]")
        raise typer.Exit(code=1)
    console.print("[green]Done[/]")


if __name__ == "__main__":
    app()
