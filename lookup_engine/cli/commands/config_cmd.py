"""Config command for viewing and managing default decomposition flags."""

import typer

from ..app import app, console, get_json_mode
from ...config import CONFIG_FILE, ENV_VARS, get_config, parse_bool, reset_config

VALID_KEYS = set(ENV_VARS)


@app.command("config")
def config_command(
    action: str = typer.Argument(
        ...,
        help="Action: show, set, reset",
    ),
    key: str | None = typer.Argument(
        None,
        help="Config key (e.g. include_private_members)",
    ),
    value: str | None = typer.Argument(
        None,
        help="Value to set (true/false)",
    ),
):
    """View or modify the default decomposition flags.

    Examples:
        lookup config show
        lookup config set include_private_members true
        lookup config reset
    """
    if action == "show":
        _show_config()
    elif action == "set":
        if not key or value is None:
            console.print("[red]Usage:[/red] lookup config set <key> <value>")
            console.print()
            console.print("Available keys:")
            for k in sorted(VALID_KEYS):
                console.print(f"  {k}")
            raise typer.Exit(1)
        _set_config(key, value)
    elif action == "reset":
        _reset_config()
    else:
        console.print(f"[red]Unknown action:[/red] {action}")
        console.print("Valid actions: show, set, reset")
        raise typer.Exit(1)


def _show_config():
    """Display current resolved configuration."""
    config = get_config()

    if get_json_mode():
        console.print_json(data=config.to_dict())
        return

    console.print()
    console.print("[bold]Lookup Engine Configuration[/bold]")
    console.print("─" * 40)
    console.print()
    console.print("[bold cyan]Decomposition[/bold cyan]")
    for name, enabled in config.to_dict().items():
        console.print(f"  {name:<24} = {enabled}  [dim]({ENV_VARS[name]})[/dim]")

    console.print()
    if CONFIG_FILE.exists():
        console.print(f"Config file: {CONFIG_FILE}")
    else:
        console.print(f"Config file: [dim]not created yet[/dim] ({CONFIG_FILE})")
    console.print()


def _set_config(key: str, value: str):
    """Set a config value and save."""
    if key not in VALID_KEYS:
        console.print(f"[red]Unknown key:[/red] {key}")
        console.print()
        console.print("Available keys:")
        for k in sorted(VALID_KEYS):
            console.print(f"  {k}")
        raise typer.Exit(1)

    try:
        enabled = parse_bool(value)
    except ValueError:
        console.print(f"[red]Invalid boolean value:[/red] {value}")
        raise typer.Exit(1)

    config = get_config()
    setattr(config, key, enabled)
    config.save()
    reset_config()  # Clear cached singleton so next get_config() reloads

    console.print(f"[green]✓[/green] Set {key} = {enabled}")
    console.print(f"  Saved to {CONFIG_FILE}")


def _reset_config():
    """Reset config to defaults."""
    if CONFIG_FILE.exists():
        CONFIG_FILE.unlink()
        reset_config()
        console.print("[green]✓[/green] Config reset to defaults")
        console.print(f"  Removed {CONFIG_FILE}")
    else:
        console.print("Config already at defaults (no config file exists)")
