from __future__ import annotations

from pathlib import Path

import pytest

from tersite.config import CONFIG_FILENAME, Config, load_config, write_default_config
from tersite.errors import ConfigError


def _write_project_config(root: Path) -> Path:
    config_text = (
        "content_dir: content\n"
        "output_dir: public\n"
        "views_dir: theme/views\n"
        "assets_dir: theme/assets\n"
        "ignore_keys: [draft, wip]\n"
        "pinned_key: sticky\n"
        "static_exts: ['.PNG', svg]\n"
        "feed_path: feeds/atom.xml\n"
        "site:\n"
        "  title: Garden\n"
        "  url: https://garden.example.org/\n"
        "  root_crumb: home\n"
    )
    cfg_path = root / CONFIG_FILENAME
    cfg_path.write_text(config_text, encoding="utf-8")
    return cfg_path


def test_load_config_resolves_paths_relative_to_config_directory(tmp_path: Path) -> None:
    project = tmp_path / "project"
    project.mkdir()
    _write_project_config(project)

    # Pass a directory path; loader should find tersite.yml inside it.
    cfg = load_config(project)

    assert cfg.content_dir == (project / "content").resolve()
    assert cfg.output_dir == (project / "public").resolve()
    assert cfg.views_dir == (project / "theme" / "views").resolve()
    assert cfg.assets_dir == (project / "theme" / "assets").resolve()
    assert cfg.feed_path == Path("feeds/atom.xml")
    assert cfg.ignore_keys == ["draft", "wip"]
    assert cfg.pinned_key == "sticky"
    assert cfg.static_exts == ["png", "svg"]
    assert cfg.site.title == "Garden"
    assert cfg.home_label == "home"


def test_load_config_accepts_explicit_file_path(tmp_path: Path) -> None:
    project = tmp_path / "elsewhere"
    project.mkdir()
    cfg_path = _write_project_config(project)

    cfg = load_config(cfg_path)

    assert cfg.content_dir == (project / "content").resolve()


def test_directory_without_config_uses_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path)

    assert cfg.content_dir == tmp_path.resolve()
    assert cfg.output_dir == (tmp_path / "_site").resolve()
    assert cfg.ignore_keys == ["draft"]
    assert cfg.pinned_key == "pinned"
    assert cfg.render_drafts is False


def test_missing_config_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yml")


def test_invalid_yaml_raises_config_error(tmp_path: Path) -> None:
    cfg_path = tmp_path / CONFIG_FILENAME
    cfg_path.write_text("site: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_non_mapping_config_raises_config_error(tmp_path: Path) -> None:
    cfg_path = tmp_path / CONFIG_FILENAME
    cfg_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_feed_path_must_stay_inside_output(tmp_path: Path) -> None:
    cfg_path = tmp_path / CONFIG_FILENAME
    cfg_path.write_text("feed_path: ../outside.xml\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(cfg_path)


def test_blank_root_crumb_falls_back_to_index() -> None:
    cfg = Config(site={"root_crumb": ""})

    assert cfg.home_label == "index"


def test_static_extension_matching_ignores_case() -> None:
    cfg = Config(static_exts=["png"])

    assert cfg.is_static(Path("img/photo.PNG"))
    assert not cfg.is_static(Path("notes.md"))


def test_written_default_config_round_trips(tmp_path: Path) -> None:
    cfg_path = write_default_config(tmp_path / CONFIG_FILENAME)

    cfg = load_config(cfg_path)

    assert cfg.site.title == Config().site.title
    assert cfg.views_dir == (tmp_path / ".tersite" / "views").resolve()
