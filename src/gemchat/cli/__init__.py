"""Command line interface for gemchat."""

from .app import app, main

__all__ = ["app", "main"]
