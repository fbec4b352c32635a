from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .errors import ConfigError

CONFIG_FILENAME = "tersite.yml"
DEFAULT_ROOT_CRUMB = "index"


def _default_static_exts() -> list[str]:
    return ["png", "jpg", "jpeg", "gif", "webp", "pdf", "ico", "webm", "mp4"]


class SiteConfig(BaseModel):
    """Site-wide metadata handed to every view as ``site``."""

    title: str = Field(default="Your Blog Name")
    description: str = Field(default="I am writing about my experiences as a naval navel-gazer")
    url: str = Field(default="https://example.com/", description="Canonical base URL of the site.")
    root_crumb: str = Field(
        default=DEFAULT_ROOT_CRUMB,
        description="Label of the home breadcrumb; falls back to 'index' when empty.",
    )
    author_name: str = Field(default="Your Name Here")
    author_email: str = Field(default="youremailaddress@example.com")
    author_url: str = Field(default="https://example.com/about-me/")
    lang: str = Field(default="en")

    @field_validator("root_crumb", mode="before")
    def _blank_crumb(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()


class Config(BaseModel):
    content_dir: Path = Field(default=Path("."))
    output_dir: Path = Field(default=Path("_site"))
    views_dir: Path = Field(default=Path(".tersite/views"))
    assets_dir: Path = Field(default=Path(".tersite/assets"))
    ignore_keys: list[str] = Field(
        default_factory=lambda: ["draft"],
        description="Front-matter keys that exclude a page from the build.",
    )
    pinned_key: str = Field(
        default="pinned",
        description="Front-matter key that pins a page to the top of listings.",
    )
    static_exts: list[str] = Field(default_factory=_default_static_exts)
    render_drafts: bool = Field(default=False)
    feed_path: Path = Field(
        default=Path("feed.xml"),
        description="Feed destination, relative to output_dir.",
    )
    feed_limit: int = Field(default=50, ge=1, le=500)
    site: SiteConfig = Field(default_factory=SiteConfig)

    @field_validator("content_dir", "output_dir", "views_dir", "assets_dir", "feed_path", mode="before")
    def _ensure_path(cls, value: Any) -> Path:
        return Path(value)

    @field_validator("static_exts", mode="before")
    def _normalize_exts(cls, value: Any) -> list[str]:
        if value is None:
            return []
        return [str(ext).strip().lstrip(".").lower() for ext in value if str(ext).strip()]

    @field_validator("feed_path")
    def _relative_feed(cls, value: Path) -> Path:
        if value.is_absolute() or ".." in value.parts:
            raise ValueError("feed_path must be relative to the output directory.")
        return value

    @property
    def home_label(self) -> str:
        return self.site.root_crumb or DEFAULT_ROOT_CRUMB

    def is_static(self, path: Path) -> bool:
        return path.suffix.lstrip(".").lower() in self.static_exts


def load_config(path: str | Path) -> Config:
    """Load configuration and resolve relative paths based on the config location.

    The ``path`` argument may point to a file (e.g., ``/site/tersite.yml``) or a
    directory containing that file. All relative paths inside the configuration
    are interpreted relative to the directory holding the config file.
    """
    candidate = Path(path)
    data: dict[str, Any] = {}
    base_dir: Path
    if candidate.is_dir():
        # A project directory without a config file builds with defaults.
        config_file = candidate / CONFIG_FILENAME
        if config_file.exists():
            data = _read_yaml(config_file)
        base_dir = candidate.resolve()
    else:
        if not candidate.exists():
            raise FileNotFoundError(candidate)
        data = _read_yaml(candidate)
        base_dir = candidate.parent.resolve()

    try:
        cfg = Config(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {candidate}: {exc}") from exc

    def _abs(value: Path) -> Path:
        return value if value.is_absolute() else (base_dir / value).resolve()

    cfg.content_dir = _abs(cfg.content_dir)
    cfg.output_dir = _abs(cfg.output_dir)
    cfg.views_dir = _abs(cfg.views_dir)
    cfg.assets_dir = _abs(cfg.assets_dir)
    # feed_path stays relative; it is joined under output_dir when planning.
    return cfg


def write_default_config(path: Path) -> Path:
    """Write a config file holding every default value."""
    payload = Config().model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(payload, handle, sort_keys=False, allow_unicode=True)
    return path


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file error in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file {path} must define a mapping.")
    return data
