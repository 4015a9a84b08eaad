"""Command line interface for the lookup engine."""

from .app import app

__all__ = ["app"]
