"""ffbridge: argument compiler and probe parser for ffmpeg/ffprobe."""

from importlib import metadata

try:
    __version__ = metadata.version("ffbridge")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["__version__"]
