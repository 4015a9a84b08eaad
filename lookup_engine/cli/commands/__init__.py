"""CLI commands for the lookup engine."""

from . import config_cmd, inspect

__all__ = ["config_cmd", "inspect"]
