"""Initialize a project with the default config, views and assets."""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path

from .config import CONFIG_FILENAME, Config, load_config, write_default_config
from .views import REQUIRED_VIEWS

DEFAULTS_PACKAGE = "tersite.defaults"
REQUIRED_ASSETS: tuple[str, ...] = ("tersite.css",)


@dataclass(slots=True)
class ScaffoldResult:
    """Details about filesystem writes performed while initializing."""

    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)

    def record(self, path: Path, existed: bool) -> None:
        if existed:
            self.skipped.append(path)
        else:
            self.created.append(path)


def init_project(project_dir: Path) -> tuple[Config, ScaffoldResult]:
    """Create missing config, views and assets under ``project_dir``.

    Existing files are never overwritten.
    """
    result = ScaffoldResult()
    config_path = project_dir / CONFIG_FILENAME
    existed = config_path.exists()
    if not existed:
        write_default_config(config_path)
    result.record(config_path, existed)

    config = load_config(config_path)
    defaults = resources.files(DEFAULTS_PACKAGE)
    for name in REQUIRED_VIEWS:
        _install(defaults.joinpath("views").joinpath(name), config.views_dir / name, result)
    for name in REQUIRED_ASSETS:
        _install(defaults.joinpath("assets").joinpath(name), config.assets_dir / name, result)
    return config, result


def missing_views(config: Config) -> list[Path]:
    return [config.views_dir / name for name in REQUIRED_VIEWS if not (config.views_dir / name).exists()]


def _install(source: Traversable, destination: Path, result: ScaffoldResult) -> None:
    existed = destination.exists()
    if not existed:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
    result.record(destination, existed)
