"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SiteConfig: Public site metadata and permalink base
- PathsConfig: Locations of the entry list, drafts, pages and documents
- PublishConfig: Marker text, feed retention and Markdown settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Relative paths are resolved against the directory holding the config file,
so one config describes one blog regardless of the working directory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class SiteConfig:
    """Public site metadata.

    Attributes:
        title: Site title used in the starter documents
        description: Site description used in the starter feed
        base_url: Prefix of every permalink; an entry's address is base_url + id
        author: Default byline for new drafts
        date_format: strftime pattern for the publication timestamp
    """

    title: str = "My Blog"
    description: str = ""
    base_url: str = "https://example.com/blog/"
    author: str = ""
    date_format: str = "%Y-%m-%d %H:%M"


@dataclass
class PathsConfig:
    """File locations, relative to the config file's directory.

    Attributes:
        entries: JSON entry list
        drafts: Directory of Markdown drafts, one ``<id>.md`` per entry
        pages: Directory of published per-entry pages, one ``<id>.html`` per entry
        template: Page template every per-entry page is generated from
        index: Rolling index document
        feed: RSS feed document
        logs: Directory for the log file
    """

    entries: str = "entries.json"
    drafts: str = "drafts"
    pages: str = "pages"
    template: str = "template.html"
    index: str = "index.html"
    feed: str = "rss.xml"
    logs: str = "logs"


@dataclass
class PublishConfig:
    """Publishing behavior.

    Attributes:
        feed_retention: Maximum number of items kept in the feed
        prompt_cover_image: Whether publishing asks for a cover image URL
        marker: Text of the marker comment, e.g. "OB" for <!-- OB -->
        markdown_extensions: Extensions passed to the Markdown converter
    """

    feed_retention: int = 20
    prompt_cover_image: bool = False
    marker: str = "OB"
    markdown_extensions: list[str] = field(default_factory=lambda: ["extra", "sane_lists"])


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file inside paths.logs
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "ob.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    site: SiteConfig = field(default_factory=SiteConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root: Path = field(default_factory=Path.cwd)

    def resolve(self, name: str) -> Path:
        """Return the absolute path configured as ``paths.<name>``."""
        path = Path(getattr(self.paths, name)).expanduser()
        if path.is_absolute():
            return path
        return (self.root / path).resolve()


DEFAULT_CONFIG = AppConfig()


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults.

    A missing or empty file yields the defaults, rooted at the file's
    directory (or the working directory when no path is given).
    """
    if not path:
        return _fromdict(_asdict(DEFAULT_CONFIG), Path.cwd())

    config_path = Path(path).expanduser().resolve()
    root = config_path.parent
    if not config_path.exists():
        return _fromdict(_asdict(DEFAULT_CONFIG), root)

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return _merge_config(DEFAULT_CONFIG, raw, root)


def dump_config(cfg: AppConfig) -> str:
    """Serialize a config back to YAML (used when bootstrapping a blog)."""
    return yaml.safe_dump(_asdict(cfg), sort_keys=False, allow_unicode=True)


def _merge_config(base: AppConfig, raw: dict[str, Any], root: Path) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data or value is None:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data, root)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "site": {
            "title": cfg.site.title,
            "description": cfg.site.description,
            "base_url": cfg.site.base_url,
            "author": cfg.site.author,
            "date_format": cfg.site.date_format,
        },
        "paths": {
            "entries": cfg.paths.entries,
            "drafts": cfg.paths.drafts,
            "pages": cfg.paths.pages,
            "template": cfg.paths.template,
            "index": cfg.paths.index,
            "feed": cfg.paths.feed,
            "logs": cfg.paths.logs,
        },
        "publish": {
            "feed_retention": cfg.publish.feed_retention,
            "prompt_cover_image": cfg.publish.prompt_cover_image,
            "marker": cfg.publish.marker,
            "markdown_extensions": list(cfg.publish.markdown_extensions),
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any], root: Path) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    publish = PublishConfig(**data["publish"])
    if int(publish.feed_retention) < 1:
        raise ValueError("publish.feed_retention must be at least 1")
    publish.feed_retention = int(publish.feed_retention)

    return AppConfig(
        site=SiteConfig(**data["site"]),
        paths=PathsConfig(**data["paths"]),
        publish=publish,
        logging=LoggingConfig(**data["logging"]),
        root=root,
    )
