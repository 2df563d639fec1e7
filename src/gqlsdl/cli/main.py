"""CLI entry point for gqlsdl.

Invoked as::

    gqlsdl [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m gqlsdl.cli.main

Commands
--------
parse       Dump the parsed document structure to JSON or YAML
fmt         Re-render an SDL file
graph       Show the type reference graph
prune       Drop entities whose comments lack a keep pattern
version     Show version information
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from gqlsdl.model.nodes import Document

console = Console()
err_console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _read_source(path: str) -> str:
    """Read an SDL source file, exiting on error."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] File not found: {escape(path)}")
        sys.exit(1)
    except OSError as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


def _parse_or_exit(source: str, path: str) -> "Document":
    """Parse SDL source, printing the error and exiting on failure."""
    from gqlsdl.parser import SdlSyntaxError, parse

    try:
        return parse(source)
    except SdlSyntaxError as exc:
        err_console.print(f"[red]Syntax error[/red] in {escape(path)}: {escape(str(exc))}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="gqlsdl")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Schema definition language toolkit: parser, reference graph, formatter, pruner."""
    _configure_logging(verbose)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from gqlsdl import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]gqlsdl[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="Output format",
)
def parse_command(file: str, output_format: str) -> None:
    """Dump the parsed structure of an SDL file.

    FILE is the path to the .graphql file to parse.
    """
    from gqlsdl.model.serializer import DocumentSerializer

    source = _read_source(file)
    document = _parse_or_exit(source, file)

    serializer = DocumentSerializer()
    if output_format.lower() == "yaml":
        click.echo(serializer.to_yaml(document), nl=False)
    else:
        click.echo(serializer.to_json(document, indent=2))


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False))
@click.option("--indent", "indent_size", type=int, default=2, show_default=True, help="Indentation width")
@click.option("--indent-char", default=" ", help="Indentation character")
@click.option("--check", is_flag=True, default=False, help="Check if file is already formatted")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
def fmt_command(file: str, indent_size: int, indent_char: str, check: bool, in_place: bool) -> None:
    """Re-render an SDL file.

    FILE is the path to the .graphql file to format.

    Without --check or --in-place, prints the rendered output to stdout.
    """
    from gqlsdl.formatter import FormatOptions, format_document

    try:
        options = FormatOptions(indent_size=indent_size, indent_char=indent_char)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    source = _read_source(file)
    document = _parse_or_exit(source, file)
    formatted = format_document(document, options)

    if check:
        if formatted == source:
            console.print(f"[green]OK[/green] {file} — already formatted")
            sys.exit(0)
        else:
            console.print(f"[yellow]NEEDS FORMATTING[/yellow] {file}")
            sys.exit(1)
    elif in_place:
        Path(file).write_text(formatted, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {file}")
    else:
        console.print(Syntax(formatted, "graphql", line_numbers=True))


# ---------------------------------------------------------------------------
# graph command
# ---------------------------------------------------------------------------


@cli.command(name="graph")
@click.argument("file", type=click.Path(exists=False))
@click.option("--all", "show_all", is_flag=True, default=False, help="Include scalars, directives and schemas")
def graph_command(file: str, show_all: bool) -> None:
    """Show which declarations each type or input references.

    FILE is the path to the .graphql file to analyse.
    """
    from gqlsdl.graph import node_id
    from gqlsdl.model.nodes import Enum, Struct

    source = _read_source(file)
    document = _parse_or_exit(source, file)
    graph = document.graph()

    table = Table(title=f"References: {file}", show_lines=True)
    table.add_column("Kind", style="bold", min_width=8)
    table.add_column("Name")
    table.add_column("Id", style="dim")
    table.add_column("References")

    edges = 0
    for node, targets in graph.items():
        if not show_all and not isinstance(node, (Struct, Enum)):
            continue
        edges += len(targets)
        table.add_row(
            node.kind.name.lower(),
            node.alpha_name,
            node_id(node),
            ", ".join(t.alpha_name for t in targets) or "[dim]-[/dim]",
        )

    console.print(table)
    console.print(f"\n[bold]{edges}[/bold] reference(s) total")


# ---------------------------------------------------------------------------
# prune command
# ---------------------------------------------------------------------------


@cli.command(name="prune")
@click.argument("file", type=click.Path(exists=False))
@click.option("--keep", "keep_patterns", multiple=True, required=True, help="Keep pattern (repeatable)")
@click.option("--second", "second_patterns", multiple=True, help="Second keep pattern (repeatable)")
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def prune_command(
    file: str,
    keep_patterns: tuple[str, ...],
    second_patterns: tuple[str, ...],
    output: str | None,
) -> None:
    """Drop declarations and members whose comments lack a keep pattern.

    FILE is the path to the .graphql file to prune.
    """
    from gqlsdl.formatter import format_document
    from gqlsdl.pruning import KeepRules, prune

    try:
        rules = KeepRules(keep_patterns, second_patterns)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    source = _read_source(file)
    document = _parse_or_exit(source, file)
    report = prune(document, rules)
    pruned = format_document(document)

    if output:
        Path(output).write_text(pruned, encoding="utf-8")
        err_console.print(f"[green]Pruned[/green] {report.total} entit(ies), saved to {output}")
    else:
        click.echo(pruned, nl=False)


if __name__ == "__main__":
    cli()
