"""Inspect command: decompose an importable object and print its members."""

import importlib
from typing import Any

import typer
from rich.table import Table

from ...config import get_config
from ...core.models import DecomposedObject, MemberAttributes
from ...engine import LookupComposer
from ..app import app, console, get_json_mode

_KIND_LABELS = {
    MemberAttributes.FIELD: "field",
    MemberAttributes.PROPERTY: "property",
    MemberAttributes.METHOD: "method",
    MemberAttributes.EVENT: "event",
    MemberAttributes.EXTENSION: "extension",
}


def resolve_target(target: str) -> Any:
    """Import ``module`` or ``module:attr.path`` and return the object.

    Raises:
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute path does not resolve.
    """
    module_name, _, attr_path = target.partition(":")
    obj: Any = importlib.import_module(module_name)
    for part in filter(None, attr_path.split(".")):
        obj = getattr(obj, part)
    return obj


def format_kind(attributes: MemberAttributes) -> str:
    label = _KIND_LABELS.get(attributes.kind, "")
    modifiers = [
        flag.name.lower().replace("_", "-")
        for flag in (
            MemberAttributes.STATIC,
            MemberAttributes.PRIVATE,
            MemberAttributes.READ_ONLY,
            MemberAttributes.ASYNC,
        )
        if attributes & flag
    ]
    return " ".join([*modifiers, label]).strip()


def render_decomposition(result: DecomposedObject) -> Table:
    title = result.name
    if result.name != result.type_name:
        title = f"{result.name} ({result.type_full_name})"

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Member")
    table.add_column("Value", overflow="fold")
    table.add_column("Type", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Declared by", style="dim")
    table.add_column("Depth", justify="right")
    table.add_column("Time (ms)", justify="right")
    table.add_column("Allocated", justify="right")

    for member in result.members:
        value = member.value
        table.add_row(
            member.name,
            value.name,
            value.type_name,
            format_kind(member.member_attributes),
            member.declaring_type_name,
            str(member.depth),
            f"{member.computation_time:.3f}",
            f"{member.allocated_bytes:,}",
        )
    return table


@app.command("inspect")
def inspect_command(
    target: str = typer.Argument(
        ..., help="Object to inspect: 'module' or 'module:attr.path'"
    ),
    static: bool = typer.Option(
        False, "--static", help="Decompose the class itself: static members only"
    ),
    include_root: bool | None = typer.Option(
        None, "--root/--no-root", help="Include members declared by object"
    ),
    include_static: bool | None = typer.Option(
        None, "--static-members/--no-static-members", help="Include class-level members"
    ),
    include_private: bool | None = typer.Option(
        None, "--private/--no-private", help="Include names starting with an underscore"
    ),
    include_unsupported: bool | None = typer.Option(
        None,
        "--unsupported/--no-unsupported",
        help="Show methods that were not called (void or parametric)",
    ),
    redirect: bool | None = typer.Option(
        None, "--redirect/--no-redirect", help="Follow descriptor redirections"
    ),
):
    """Decompose an object one level deep.

    Flags default to the configured values (see `lookup config show`).

    Examples:
        lookup inspect collections:OrderedDict --static
        lookup inspect json.decoder:JSONDecoder --private --unsupported
        lookup --json inspect decimal:Context
    """
    try:
        obj = resolve_target(target)
    except (ImportError, AttributeError) as exc:
        console.print(f"[red]Cannot resolve target[/red] {target}: {exc}")
        raise typer.Exit(1)

    overrides = {
        "include_root": include_root,
        "include_static_members": include_static,
        "include_private_members": include_private,
        "include_unsupported": include_unsupported,
        "enable_redirection": redirect,
    }
    options = get_config().to_options(
        **{key: value for key, value in overrides.items() if value is not None}
    )
    composer = LookupComposer(options)

    if static:
        if not isinstance(obj, type):
            console.print(f"[red]--static expects a class, got[/red] {type(obj).__name__}")
            raise typer.Exit(1)
        result = composer.decompose_static(obj)
    else:
        result = composer.decompose(obj)

    if get_json_mode():
        console.print_json(result.model_dump_json())
        return

    console.print(render_decomposition(result))
    if result.description:
        console.print(f"[dim]{result.description}[/dim]")
