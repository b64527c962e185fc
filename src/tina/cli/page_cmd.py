"""Page CLI commands: validate and inspect."""

import importlib
from pathlib import Path

import click

from tina.errors import DeclarationError
from tina.metadata.loader import load_declaration
from tina.metadata.validator import validate_page_dir, validate_page_file
from tina.page.builder import PageBuilder


def _import_modules(modules: tuple[str, ...]) -> None:
    """Import modules that register page functions in the catalog."""
    for name in modules:
        try:
            importlib.import_module(name)
        except ImportError as e:
            click.echo(click.style(f"Cannot import '{name}': {e}", fg="red"), err=True)
            raise SystemExit(1)


_import_option = click.option(
    "--import",
    "modules",
    multiple=True,
    metavar="MODULE",
    help="Module to import before loading (registers page functions). Repeatable.",
)


@click.group()
def page():
    """Page declaration commands."""
    pass


@page.command()
@click.argument("target", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@_import_option
def validate(target: Path, strict: bool, modules: tuple[str, ...]):
    """Validate a page YAML file, or every page file in a directory."""
    _import_modules(modules)

    if target.is_dir():
        issues = validate_page_dir(target, strict=strict)
    else:
        issues = validate_page_file(target)
        if strict:
            for issue in issues:
                if issue.severity == "warning":
                    issue.severity = "error"

    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    click.echo(click.style("All pages are valid.", fg="green", bold=True))


@page.command()
@click.argument("target", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@_import_option
def inspect(target: Path, modules: tuple[str, ...]):
    """Show the events, hook order, and methods of a page YAML file."""
    _import_modules(modules)

    try:
        descriptor = PageBuilder().build(load_declaration(target))
    except DeclarationError as e:
        click.echo(click.style(f"Invalid page: {e}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(f"Page {target.name}")

    click.echo(f"\nEvents ({len(descriptor.hooks)}):")
    for chain in descriptor.hooks:
        order = []
        if chain.before is not None:
            order.append(f"before{chain.event}")
        if chain.on is not None:
            order.append(f"on{chain.event}")
        click.echo(f"  {chain.host_name}: {' -> '.join(order)}")

    methods = descriptor.methods.names()
    click.echo(f"\nMethods ({len(methods)}): {', '.join(methods) or '-'}")
    click.echo(f"Compute: {'yes' if descriptor.state.has_compute else 'no'}")
    click.echo(f"Data keys: {', '.join(str(k) for k in descriptor['data']) or '-'}")
    if descriptor.extra:
        click.echo(f"Pass-through fields: {', '.join(str(k) for k in descriptor.extra)}")
