"""CLI entry point for combopath.

Invoked as::

    combopath [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m combopath.cli.main

Commands
--------
version     Show version information
normalize   Normalize slashes in a path
resolve     Resolve a path token against a mod list
rewrite     Rewrite combination paths in a vehicle XML file
"""
from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from combopath.config import Settings
    from combopath.host.models import InMemoryModRegistry

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("combopath")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


def _load_or_exit(mods_path: str | None, config_path: str | None) -> tuple["InMemoryModRegistry", "Settings"]:
    """Load the mod list and settings, exiting on error."""
    from combopath.config import ConfigError, Settings, load_mod_registry, load_settings
    from combopath.host.models import InMemoryModRegistry

    try:
        registry = load_mod_registry(mods_path) if mods_path else InMemoryModRegistry()
        settings = load_settings(config_path) if config_path else Settings()
    except ConfigError as exc:
        err_console.print(f"[red]Config error:[/red] {escape(str(exc))}")
        sys.exit(1)
    return registry, settings


_mods_option = click.option(
    "--mods", "-m", "mods_path", type=click.Path(exists=True, dir_okay=False), default=None,
    help="YAML file mapping mod names to install directories.",
)
_config_option = click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), default=None,
    help="YAML settings file.",
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="combopath")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Resolve cross-mod $moddir<Name>$/ combination paths."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from combopath import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]combopath[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# normalize command
# ---------------------------------------------------------------------------


@cli.command(name="normalize")
@click.argument("path")
@click.option("--sanitize", "use_sanitize", is_flag=True, default=False,
              help="Also strip stray '$' from malformed tokens.")
def normalize_command(path: str, use_sanitize: bool) -> None:
    """Normalize slashes in PATH."""
    from combopath.paths import normalize, sanitize

    click.echo(sanitize(path) if use_sanitize else normalize(path))


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("token")
@_mods_option
@_config_option
@click.option(
    "--mode",
    type=click.Choice(["strict", "loose", "combination"], case_sensitive=False),
    default="combination",
    help="Resolution mode (default: combination, i.e. strict, loose, then sanitize).",
)
def resolve_command(token: str, mods_path: str | None, config_path: str | None, mode: str) -> None:
    """Resolve TOKEN against the mod list.

    Exits with status 1 when a strict or loose token cannot be resolved.

    Examples:

    \b
        combopath resolve '$moddirFS25_tony10900TTRX$/tony10900TTR.xml' --mods mods.yaml
        combopath resolve 'moddirFoo$/x.xml' --mods mods.yaml --mode loose
    """
    from combopath.resolver import TokenResolver

    registry, settings = _load_or_exit(mods_path, config_path)
    resolver = TokenResolver(registry, settings)

    if mode == "strict":
        result = resolver.resolve_strict(token)
    elif mode == "loose":
        result = resolver.resolve_loose(token)
    else:
        result = resolver.resolve_combination_path(token)

    if result is None:
        err_console.print(f"[yellow]Unresolved:[/yellow] {escape(token)}")
        sys.exit(1)
    click.echo(result)


# ---------------------------------------------------------------------------
# rewrite command
# ---------------------------------------------------------------------------


@cli.command(name="rewrite")
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@_mods_option
@_config_option
@click.option("--mod-dir", default=None, help="Directory of the mod that owns FILE.")
@click.option("--in-place", is_flag=True, default=False, help="Write the result back to FILE.")
def rewrite_command(
    file: str,
    mods_path: str | None,
    config_path: str | None,
    mod_dir: str | None,
    in_place: bool,
) -> None:
    """Rewrite $moddir<Name>$/ combination paths in a vehicle XML FILE.

    Without --in-place, prints the rewritten document to stdout.
    """
    import xml.etree.ElementTree as ET

    from combopath.host import ElementTreeXmlFile
    from combopath.resolver import TokenResolver
    from combopath.vehicle import rewrite_vehicle_combinations

    registry, settings = _load_or_exit(mods_path, config_path)
    try:
        xml_file = ElementTreeXmlFile.load(file)
    except ET.ParseError as exc:
        err_console.print(f"[red]Error:[/red] Cannot parse {escape(file)}: {escape(str(exc))}")
        sys.exit(1)

    result = rewrite_vehicle_combinations(xml_file, TokenResolver(registry, settings), mod_dir)

    if result.rewritten:
        table = Table(title=f"Rewritten: {escape(file)}", show_lines=True)
        table.add_column("Key")
        table.add_column("Before")
        table.add_column("After", style="green")
        for key, (old, new) in result.rewritten.items():
            table.add_row(escape(key), escape(old), escape(new))
        err_console.print(table)
    for diagnostic in result.diagnostics:
        err_console.print(f"[yellow]{escape(str(diagnostic))}[/yellow]")
    err_console.print(
        f"[bold]Summary:[/bold] {result.visited} combination(s), "
        f"{len(result.rewritten)} rewritten, {sum(d.is_warning for d in result.diagnostics)} warning(s)"
    )

    if in_place:
        if result.changed:
            xml_file.save()
    else:
        click.echo(xml_file.to_string())


if __name__ == "__main__":
    cli()
