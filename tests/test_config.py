"""Tests for YAML configuration loading."""

from pathlib import Path

import pytest

from ob_blog.config import AppConfig, dump_config, load_config


def test_load_config_defaults_without_path():
    cfg = load_config(None)

    assert cfg.publish.marker == "OB"
    assert cfg.publish.feed_retention == 20
    assert cfg.root == Path.cwd()


def test_load_config_missing_file_roots_at_its_directory(tmp_path: Path):
    cfg = load_config(str(tmp_path / "blog.yaml"))

    assert cfg.root == tmp_path.resolve()
    assert cfg.resolve("index") == tmp_path.resolve() / "index.html"


def test_load_config_merges_sections(tmp_path: Path):
    path = tmp_path / "blog.yaml"
    path.write_text(
        "site:\n  base_url: https://me.example/\n  unknown_key: 1\n"
        "publish:\n  feed_retention: 5\n"
        "logging: null\n"
        "extra_section:\n  a: b\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.site.base_url == "https://me.example/"
    assert cfg.site.title == "My Blog"
    assert cfg.publish.feed_retention == 5
    assert cfg.logging.level == "INFO"


def test_load_config_rejects_zero_retention(tmp_path: Path):
    path = tmp_path / "blog.yaml"
    path.write_text("publish:\n  feed_retention: 0\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(path))


def test_resolve_keeps_absolute_paths(tmp_path: Path):
    cfg = AppConfig(root=tmp_path)
    cfg.paths.feed = str(tmp_path / "elsewhere" / "feed.xml")

    assert cfg.resolve("feed") == tmp_path / "elsewhere" / "feed.xml"


def test_dump_config_round_trips(tmp_path: Path):
    cfg = AppConfig(root=tmp_path)
    cfg.site.title = "Round Trip"
    path = tmp_path / "blog.yaml"
    path.write_text(dump_config(cfg), encoding="utf-8")

    assert load_config(str(path)).site.title == "Round Trip"


def test_default_config_is_not_shared():
    first = load_config(None)
    first.site.title = "Changed"

    assert load_config(None).site.title == "My Blog"
