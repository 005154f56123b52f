"""
enumbind command line.

Commands:
  generate  Write a skeleton enumeration module and locale stubs
  show      Print the members of an enumeration class
"""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.table import Table

from enumbind.config import Settings, configure
from enumbind.enumeration import Enumeration
from enumbind.errors import EnumBindError
from enumbind.i18n import ENUMERATIONS_NAMESPACE
from enumbind.strings import humanize, is_identifier, pascal_case, snake_case

console = Console()

app = typer.Typer(help="Declarative enumerations for model attributes", no_args_is_help=True)

MODULE_TEMPLATE = '''\
"""{title} enumeration."""

from enumbind import Enumeration


class {class_name}(Enumeration):
    pass


{class_name}.associate_values(
{values})
'''


def version_callback(value: bool) -> None:
    if value:
        from enumbind import __version__

        typer.echo(f"enumbind {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """enumbind CLI main callback for global options."""
    pass


def render_module(class_name: str, keys: list[str], integer: bool) -> str:
    """Render the Python source of a skeleton enumeration."""
    if integer:
        values = "".join(f"    {key}={index},\n" for index, key in enumerate(keys, start=1))
    else:
        values = "".join(f'    {key}="{key}",\n' for key in keys)
    return MODULE_TEMPLATE.format(
        title=humanize(snake_case(class_name)), class_name=class_name, values=values
    )


def merge_locale_stub(path: Path, locale: str, enum_name: str, keys: list[str]) -> None:
    """Add humanized labels for *keys* to a locale file, keeping existing translations."""
    data = {}
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}

    labels = (
        data.setdefault(locale, {})
        .setdefault(ENUMERATIONS_NAMESPACE, {})
        .setdefault(enum_name, {})
    )
    for key in keys:
        labels.setdefault(key, humanize(key))

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        yaml.safe_dump(data, sort_keys=False, allow_unicode=True, default_flow_style=False),
        encoding="utf-8",
    )


@app.command("generate")
def generate_command(
    name: str = typer.Argument(..., help="Enumeration class name, e.g. CivilStatus"),
    keys: list[str] = typer.Argument(..., help="Member keys, e.g. married single"),
    locales: list[str] = typer.Option(
        ["en"], "--locale", "-l", help="Locale to write a stub for (repeatable)"
    ),
    output: Path = typer.Option(
        Path("."), "--output", "-o", help="Directory to write into (default: current)"
    ),
    integer: bool = typer.Option(
        False, "--integer", "-i", help="Use integer codes instead of the keys themselves"
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing module"),
) -> None:
    """Generate a skeleton enumeration module and locale file stubs."""
    class_name = pascal_case(snake_case(name))
    module_name = snake_case(class_name)

    invalid = [key for key in keys if not is_identifier(key)]
    if not is_identifier(class_name) or invalid:
        typer.echo(f"Invalid name(s): {', '.join(invalid or [name])}", err=True)
        raise typer.Exit(code=1)
    if len(set(keys)) != len(keys):
        typer.echo("Keys must be unique", err=True)
        raise typer.Exit(code=1)

    module_path = output / f"{module_name}.py"
    if module_path.exists() and not force:
        typer.echo(f"Module already exists: {module_path}")
        typer.echo("Use --force to overwrite.")
        raise typer.Exit(code=1)

    output.mkdir(parents=True, exist_ok=True)
    module_path.write_text(render_module(class_name, keys, integer), encoding="utf-8")
    typer.echo(f"✓ Created enumeration: {module_path}")

    for locale in locales:
        locale_path = output / "locales" / f"{locale}.yml"
        try:
            merge_locale_stub(locale_path, locale, module_name, keys)
        except (yaml.YAMLError, AttributeError) as e:
            typer.echo(f"Error updating {locale_path}: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"✓ Updated locale file: {locale_path}")


def load_enumeration(target: str) -> type[Enumeration]:
    """
    Import an enumeration given as ``module:ClassName``.

    Raises:
        typer.BadParameter: If the target is malformed or not an Enumeration
    """
    module_name, _, class_name = target.partition(":")
    if not module_name or not class_name:
        raise typer.BadParameter("Expected MODULE:CLASS")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import {module_name}: {e}") from e

    enumeration = getattr(module, class_name, None)
    if not (isinstance(enumeration, type) and issubclass(enumeration, Enumeration)):
        raise typer.BadParameter(f"{target} is not an Enumeration")
    return enumeration


@app.command("show")
def show_command(
    target: str = typer.Argument(..., help="Enumeration as MODULE:CLASS"),
    locale: str | None = typer.Option(None, "--locale", "-l", help="Locale for labels"),
    locale_paths: list[Path] = typer.Option(
        [], "--locale-path", "-p", help="Locale file or directory to load (repeatable)"
    ),
) -> None:
    """Show the members of an enumeration."""
    try:
        enumeration = load_enumeration(target)
        if locale or locale_paths:
            configure(
                Settings(
                    locale=locale or "en",
                    locale_paths=list(locale_paths),
                )
            )
    except EnumBindError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"{enumeration.__name__} ({enumeration.enum_name()})")
    table.add_column("Key", style="cyan")
    table.add_column("Constant")
    table.add_column("Code", style="green")
    table.add_column("Label")
    for entry in enumeration.entries():
        table.add_row(
            entry.key, entry.key.upper(), repr(entry.value), enumeration.translate(entry.value)
        )
    console.print(table)


def main() -> None:
    # Let `show` import modules from the working directory
    sys.path.insert(0, os.getcwd())
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
