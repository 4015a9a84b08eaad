"""Core CLI app definition and global state."""

import logging
from typing import Annotated

import typer
from rich.console import Console

app = typer.Typer(
    name="lookup",
    help="Explore the live structure of Python objects.",
    no_args_is_help=True,
)

console = Console()

# Global state for JSON mode (set by callback)
_json_mode = False


def get_json_mode() -> bool:
    """Get current JSON mode state."""
    return _json_mode


def _version_callback(value: bool) -> None:
    if value:
        from .. import __version__

        print(f"lookup-engine {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output machine-readable JSON instead of human-friendly text",
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine activity to stderr"),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
):
    """Lookup: decompose Python objects into fields, properties, methods and elements.

    Use --json for machine-readable output suitable for scripting.
    """
    global _json_mode
    _json_mode = json_output

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


# Import commands to register them with the app
from .commands import (  # noqa: E402, F401
    config_cmd,
    inspect,
)
