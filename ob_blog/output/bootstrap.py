"""
Blog directory bootstrap.

Creates the config file, the entry list, the draft and page directories
and starter documents rendered from the bundled Jinja2 templates. Each
starter document carries exactly one marker comment. Existing files are
never overwritten, so running it twice is harmless.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..config import AppConfig, dump_config
from ..store import EntryStore

CONFIG_FILENAME = "blog.yaml"


def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(Path(__file__).parent / "templates")),
        autoescape=select_autoescape(["html", "xml"]),
        keep_trailing_newline=True,
    )


def render_starter(name: str, cfg: AppConfig) -> str:
    """Render one bundled starter document ("template.html", "index.html" or "rss.xml")."""
    template = _environment().get_template(name)
    return template.render(
        site=cfg.site,
        marker=cfg.publish.marker,
        feed_name=Path(cfg.paths.feed).name,
    )


def bootstrap(cfg: AppConfig, config_name: str = CONFIG_FILENAME) -> list[Path]:
    """Create every missing file and directory of a blog rooted at ``cfg.root``.

    Returns:
        Paths that were created, in creation order
    """
    created: list[Path] = []
    cfg.root.mkdir(parents=True, exist_ok=True)

    config_path = cfg.root / config_name
    if not config_path.exists():
        config_path.write_text(dump_config(cfg), encoding="utf-8")
        created.append(config_path)

    for name in ("drafts", "pages"):
        directory = cfg.resolve(name)
        if not directory.exists():
            directory.mkdir(parents=True)
            created.append(directory)

    entries_path = cfg.resolve("entries")
    if not entries_path.exists():
        created.append(EntryStore(entries_path).save())

    starters = {"template": "template.html", "index": "index.html", "feed": "rss.xml"}
    for key, starter in starters.items():
        target = cfg.resolve(key)
        if target.exists():
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_starter(starter, cfg), encoding="utf-8")
        created.append(target)

    return created
