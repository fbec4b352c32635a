"""tersite: turn a tree of Markdown notes into an interlinked static site."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .config import Config, load_config
from .pipeline import BuildResult, build_site

__all__ = ["__version__", "BuildResult", "Config", "build_site", "load_config"]

try:
    __version__ = version("tersite")
except PackageNotFoundError:
    # Running from a source checkout without an install.
    __version__ = "0.0.0"
