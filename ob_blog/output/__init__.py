"""Starter documents and blog directory bootstrap."""

from .bootstrap import CONFIG_FILENAME, bootstrap, render_starter

__all__ = [
    "CONFIG_FILENAME",
    "bootstrap",
    "render_starter",
]
