"""
Publishing workflow for the blog.

This module coordinates the commands that touch documents:
1. Create a draft (entry list + empty Markdown file)
2. Publish a draft (per-entry page, index, feed)
3. Delete an entry (draft file, or page + index/feed containers)
4. Unpublish an entry for re-editing (page body back into a draft)
5. Regenerate every page from the current template

Every command computes all of its new documents in memory before writing
any of them. An engine error therefore leaves the blog exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from .config import AppConfig
from .core.types import DocumentKind, Entry
from .markdown_render import render_markdown
from .markup import extract_inner, insert, markers, remove, render_fragment
from .markup.engine import PassResult
from .store import EntryStore, new_entry_id
from .utils.logging import entry_context, log_event, log_warning


class PublishError(Exception):
    """A command could not run against the current blog state."""


def draft_path(cfg: AppConfig, entry_id: str) -> Path:
    return cfg.resolve("drafts") / f"{entry_id}.md"


def page_path(cfg: AppConfig, entry_id: str) -> Path:
    return cfg.resolve("pages") / f"{entry_id}.html"


def create_draft(
    cfg: AppConfig,
    store: EntryStore,
    name: str,
    author: str | None = None,
    logger: logging.Logger | None = None,
) -> tuple[Entry, Path]:
    """Register a new unpublished entry and create its empty draft file."""
    name = name.strip()
    if not name:
        raise PublishError("An entry needs a title")

    entry = Entry(id=new_entry_id(), name=name, author=(author if author is not None else cfg.site.author).strip())
    path = draft_path(cfg, entry.id)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")

    store.add(entry)
    store.save()
    log_event(logger, "Draft created", event="draft_created", entry_id=entry.id, path=str(path))
    return entry, path


def publish_entry(
    cfg: AppConfig,
    store: EntryStore,
    entry_id: str,
    image: str | None = None,
    now: datetime | None = None,
    logger: logging.Logger | None = None,
) -> Path:
    """Publish a draft into its page, the index and the feed.

    Returns:
        Path of the generated per-entry page
    """
    entry = _require(store, entry_id, published=False)
    with entry_context(entry.id):
        return _publish(cfg, store, entry, image, now, logger)


def _publish(
    cfg: AppConfig,
    store: EntryStore,
    entry: Entry,
    image: str | None,
    now: datetime | None,
    logger: logging.Logger | None,
) -> Path:
    source = draft_path(cfg, entry.id)
    if not source.exists():
        raise PublishError(f"Draft file {source} is missing")

    content = render_markdown(source.read_text(encoding="utf-8"), cfg.publish.markdown_extensions)
    found = markers.find_comment(content, cfg.publish.marker)
    if found:
        raise PublishError(f"Draft {source} contains the reserved comment {found}")
    published = replace(
        entry,
        date=(now or datetime.now()).strftime(cfg.site.date_format),
        image=image or entry.image,
        published=True,
    )

    page = _insert(cfg, DocumentKind.TEMPLATE, _read_document(cfg.resolve("template")), published, content)
    index = _insert(cfg, DocumentKind.INDEX, _read_document(cfg.resolve("index")), published, content)
    feed = _insert(cfg, DocumentKind.FEED, _read_document(cfg.resolve("feed")), published, content)

    target = page_path(cfg, entry.id)
    _commit(
        {
            target: page.data,
            cfg.resolve("index"): index.data,
            cfg.resolve("feed"): feed.data,
        }
    )
    store.replace(published)
    store.save()
    source.unlink()

    log_event(logger, "Entry published", event="entry_published", page=str(target))
    if feed.removed:
        log_event(logger, "Feed pruned", event="feed_pruned", ids=feed.removed, retention=cfg.publish.feed_retention)
    return target


def delete_entry(
    cfg: AppConfig,
    store: EntryStore,
    entry_id: str,
    logger: logging.Logger | None = None,
) -> Entry:
    """Delete an entry: its draft if unpublished, otherwise its page and containers."""
    entry = _require(store, entry_id)

    with entry_context(entry.id):
        if entry.published:
            _commit(_remove_containers(cfg, entry.id, logger))
            page_path(cfg, entry.id).unlink(missing_ok=True)
        else:
            draft_path(cfg, entry.id).unlink(missing_ok=True)

        store.remove(entry.id)
        store.save()
        log_event(logger, "Entry deleted", event="entry_deleted", published=entry.published)
    return entry


def unpublish_entry(
    cfg: AppConfig,
    store: EntryStore,
    entry_id: str,
    logger: logging.Logger | None = None,
) -> Path:
    """Take a published entry offline and put its body back into a draft.

    The recovered body is the HTML that was spliced into the page; the
    Markdown converter passes it through unchanged on the next publish.

    Returns:
        Path of the recreated draft file
    """
    entry = _require(store, entry_id, published=True)
    page = page_path(cfg, entry.id)
    target = draft_path(cfg, entry.id)

    with entry_context(entry.id):
        body = extract_inner(_read_document(page), cfg.publish.marker)
        writes = _remove_containers(cfg, entry.id, logger)
        writes[target] = body.encode("utf-8")
        _commit(writes)
        page.unlink()

        store.replace(replace(entry, published=False, date=""))
        store.save()
        log_event(logger, "Entry unpublished", event="entry_unpublished", draft=str(target))
    return target


def regenerate_pages(
    cfg: AppConfig,
    store: EntryStore,
    logger: logging.Logger | None = None,
) -> list[Path]:
    """Rebuild every published page from the current template.

    Each page's body is recovered with ``extract_inner`` and re-inserted;
    drafts are not converted again.
    """
    template = _read_document(cfg.resolve("template"))
    writes: dict[Path, bytes] = {}

    for entry in store.published():
        page = page_path(cfg, entry.id)
        with entry_context(entry.id):
            if not page.exists():
                log_warning(logger, "Page missing, skipped", event="page_missing", path=str(page))
                continue
            body = extract_inner(_read_document(page), cfg.publish.marker)
            writes[page] = _insert(cfg, DocumentKind.TEMPLATE, template, entry, body).data

    _commit(writes)
    log_event(logger, "Pages regenerated", event="pages_regenerated", count=len(writes))
    return list(writes)


def _insert(cfg: AppConfig, kind: DocumentKind, document: str, entry: Entry, content: str) -> PassResult:
    fragment = render_fragment(kind, entry, content, cfg.site.base_url, cfg.publish.marker)
    retention = cfg.publish.feed_retention if kind is DocumentKind.FEED else None
    return insert(document, entry, fragment, kind, retention=retention, marker=cfg.publish.marker)


def _remove_containers(cfg: AppConfig, entry_id: str, logger: logging.Logger | None) -> dict[Path, bytes]:
    writes: dict[Path, bytes] = {}
    for name in ("index", "feed"):
        path = cfg.resolve(name)
        result = remove(_read_document(path), entry_id)
        if not result.removed:
            log_warning(logger, "No container for entry", event="remove_noop", document=name, entry_id=entry_id)
        writes[path] = result.data
    return writes


def _require(store: EntryStore, entry_id: str, published: bool | None = None) -> Entry:
    entry = store.get(entry_id)
    if entry is None:
        raise PublishError(f"No entry with id {entry_id}")
    if published is True and not entry.published:
        raise PublishError(f"Entry {entry_id} is not published")
    if published is False and entry.published:
        raise PublishError(f"Entry {entry_id} is already published")
    return entry


def _read_document(path: Path) -> str:
    if not path.exists():
        raise PublishError(f"Document {path} not found (run `ob init` to create the starter files)")
    return path.read_text(encoding="utf-8")


def _commit(writes: dict[Path, bytes]) -> None:
    for path, data in writes.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
