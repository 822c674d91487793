"""
Command-line interface for the OB blog publisher.

Uses Typer to provide one command per workflow step (init, new, list,
publish, delete, edit, regenerate). Global options select the config file
and override logging settings. Supports loading .env files.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import AppConfig, load_config
from .core.types import Entry
from .markup import DocumentError, MissingMarker
from .output import CONFIG_FILENAME, bootstrap
from .publisher import (
    PublishError,
    create_draft,
    delete_entry,
    publish_entry,
    regenerate_pages,
    unpublish_entry,
)
from .store import EntryStore, StoreError
from .utils.logging import setup_logging

try:
    from dotenv import load_dotenv
except Exception:  # noqa: BLE001
    load_dotenv = None

app = typer.Typer(add_completion=False, help="OB - a blog and RSS publishing tool.")
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(Path(CONFIG_FILENAME), "--config", "-c", help="Path to the blog's YAML config."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level."),
    log_file: bool | None = typer.Option(
        None, "--log-file/--no-log-file", help="Enable or disable file logging."
    ),
):
    """Manage drafts and publish them into the page, index and feed documents."""
    # Load environment variables from .env if available
    if load_dotenv is not None:
        load_dotenv()
    ctx.obj = {"config": config, "log_level": log_level, "log_file": log_file}


@app.command()
def init(
    ctx: typer.Context,
    directory: Path = typer.Argument(Path("."), help="Directory to create the blog in."),
    title: str | None = typer.Option(None, "--title", help="Site title."),
    base_url: str | None = typer.Option(None, "--base-url", help="Permalink prefix, e.g. https://me.example/blog/."),
    author: str | None = typer.Option(None, "--author", help="Default author for new drafts."),
):
    """Create the config, entry list, folders and starter documents."""
    with _handle_errors():
        cfg = load_config(str(directory / CONFIG_FILENAME))
    if title:
        cfg.site.title = title
    if base_url:
        cfg.site.base_url = base_url
    if author:
        cfg.site.author = author

    created = bootstrap(cfg)
    if not created:
        console.print(f"Blog already set up in {cfg.root}")
        return
    for path in created:
        console.print(f"Created {path}")


@app.command()
def new(
    ctx: typer.Context,
    title: str | None = typer.Option(None, "--title", "-t", help="Title of the post."),
    author: str | None = typer.Option(None, "--author", "-a", help="Byline (defaults to site.author)."),
):
    """Create a new draft."""
    cfg, logger = _load(ctx)
    with _handle_errors():
        store = EntryStore.load(cfg.resolve("entries"))
        if title is None:
            title = typer.prompt("Please enter the title of the blog post")
        entry, path = create_draft(cfg, store, title, author, logger=logger)
    console.print(f"Draft [bold]{escape(entry.name)}[/bold] created: {path}")


@app.command("list")
def list_entries(ctx: typer.Context):
    """Show every entry and whether it is published."""
    cfg, _ = _load(ctx)
    with _handle_errors():
        store = EntryStore.load(cfg.resolve("entries"))

    table = Table(title="Entries")
    table.add_column("Id", style="dim")
    table.add_column("Name")
    table.add_column("Author")
    table.add_column("Date")
    table.add_column("State")
    for entry in store.entries:
        table.add_row(
            entry.id,
            escape(entry.name),
            escape(entry.author),
            entry.date or "-",
            "[green]published[/green]" if entry.published else "[yellow]draft[/yellow]",
        )
    console.print(table)


@app.command()
def publish(
    ctx: typer.Context,
    entry_id: str | None = typer.Option(None, "--id", help="Id of the draft to publish."),
    image: str | None = typer.Option(None, "--image", help="Cover image URL."),
):
    """Publish a draft to its page, the index and the feed."""
    cfg, logger = _load(ctx)
    with _handle_errors():
        store = EntryStore.load(cfg.resolve("entries"))
        entry = _select(store.drafts(), entry_id, "publish")
        if image is None and cfg.publish.prompt_cover_image:
            image = typer.prompt("Cover image URL (leave blank for none)", default="", show_default=False)
        page = publish_entry(cfg, store, entry.id, image=image or None, logger=logger)
    console.print(f"Published [bold]{escape(entry.name)}[/bold]: {page}")


@app.command()
def delete(
    ctx: typer.Context,
    entry_id: str | None = typer.Option(None, "--id", help="Id of the entry to delete."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
):
    """Delete a draft, or take a published entry off the site for good."""
    cfg, logger = _load(ctx)
    with _handle_errors():
        store = EntryStore.load(cfg.resolve("entries"))
        entry = _select(store.entries, entry_id, "delete")
        if not yes and not typer.confirm(f"Delete '{entry.name}'?"):
            raise typer.Abort()
        delete_entry(cfg, store, entry.id, logger=logger)
    console.print(f"Deleted [bold]{escape(entry.name)}[/bold]")


@app.command()
def edit(
    ctx: typer.Context,
    entry_id: str | None = typer.Option(None, "--id", help="Id of the published entry to edit."),
):
    """Unpublish an entry and turn its page body back into a draft."""
    cfg, logger = _load(ctx)
    with _handle_errors():
        store = EntryStore.load(cfg.resolve("entries"))
        entry = _select(store.published(), entry_id, "edit")
        path = unpublish_entry(cfg, store, entry.id, logger=logger)
    console.print(f"[bold]{escape(entry.name)}[/bold] is a draft again: {path}")


@app.command()
def regenerate(ctx: typer.Context):
    """Rebuild every published page from the current template."""
    cfg, logger = _load(ctx)
    with _handle_errors():
        store = EntryStore.load(cfg.resolve("entries"))
        pages = regenerate_pages(cfg, store, logger=logger)
    console.print(f"Regenerated {len(pages)} page(s)")


def _load(ctx: typer.Context) -> tuple[AppConfig, logging.Logger]:
    options = ctx.obj or {}
    with _handle_errors():
        cfg = load_config(str(options.get("config") or CONFIG_FILENAME))

    # Override with CLI options
    if options.get("log_level"):
        cfg.logging.level = options["log_level"]
    if options.get("log_file") is not None:
        cfg.logging.file = options["log_file"]

    logger = setup_logging(cfg.logging, cfg.resolve("logs"))
    return cfg, logger


def _select(entries: list[Entry], entry_id: str | None, action: str) -> Entry:
    """Pick the entry named by ``entry_id``, or let the user choose from a numbered list."""
    if entry_id is not None:
        for entry in entries:
            if entry.id == entry_id:
                return entry
        raise PublishError(f"No entry with id {entry_id} can be used to {action}")

    if not entries:
        raise PublishError(f"There are no entries to {action}")

    console.print(f"Please enter the number of the entry you wish to {action}:")
    for number, entry in enumerate(entries, start=1):
        console.print(f"{number}. {escape(entry.name)}")
    while True:
        choice = typer.prompt("Entry", type=int)
        if 1 <= choice <= len(entries):
            return entries[choice - 1]
        console.print(f"[red]Choose a number between 1 and {len(entries)}[/red]")


@contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except MissingMarker as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}. Check the template, index and feed paths in the config.")
        raise typer.Exit(code=1) from exc
    except (DocumentError, StoreError, PublishError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


if __name__ == "__main__":
    app()
