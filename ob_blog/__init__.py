"""
OB - a blog and RSS publishing tool.

This package turns Markdown drafts into published posts by splicing
rendered fragments into three documents: a per-entry page generated from a
template, a rolling index, and an RSS feed. Documents are rewritten by a
streaming token pass around a single ``<!-- OB -->`` marker comment.

Main entry point is the CLI via the `ob` command.

Example:
    $ ob init myblog --base-url https://me.example/blog/
    $ ob -c myblog/blog.yaml new --title "Hello"
    $ ob -c myblog/blog.yaml publish
"""

__all__ = ["__version__", "Entry", "DocumentKind", "EntryStore", "load_config"]
__version__ = "0.1.0"

from .config import load_config
from .core.types import DocumentKind, Entry
from .store import EntryStore
