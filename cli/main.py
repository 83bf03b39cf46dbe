"""
Versify - Main CLI Application

Command-line interface for translating verse references between
versifications.
"""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import Config, get_config
from core.errors import VersificationError
from observability import LogContext, get_logger, setup_observability
from versification import (
    DirectoryMappingSource,
    Versification,
    VersificationConverter,
    VersificationMapping,
    VersificationRegistry,
    reference_from_string,
)

# Initialize app
app = typer.Typer(
    name="versify",
    help="Versify - translate verse references between versifications",
    add_completion=False,
)

console = Console()
logger = get_logger("versify.cli")


def _print_error(error: VersificationError) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    for suggestion in error.suggestions:
        console.print(f"[yellow]{escape(suggestion)}[/yellow]")


def _load_config() -> Config:
    """Read the configuration, exiting with status 1 when it is invalid."""
    try:
        return get_config()
    except VersificationError as e:
        _print_error(e)
        raise typer.Exit(1)


def _setup(config: Config, verbose: bool) -> None:
    setup_observability(
        service_name=config.observability.service_name,
        log_level="DEBUG" if verbose else config.logging.level,
        json_logs=config.logging.json_format,
        tracing_enabled=config.observability.tracing_enabled,
        console_spans=config.observability.console_export,
        environment=config.env.value,
    )


def build_registry(schemes_dir: Path) -> VersificationRegistry:
    registry = VersificationRegistry()
    registry.load_directory(schemes_dir)
    return registry


def build_source(config: Config, mappings_dir: Optional[Path] = None) -> DirectoryMappingSource:
    return DirectoryMappingSource(
        mappings_dir or config.versification.mappings_dir,
        encoding=config.versification.encoding,
    )


def build_converter(
    config: Config,
    registry: VersificationRegistry,
    source: DirectoryMappingSource,
) -> VersificationConverter:
    """Create one mapping per configured pair, sharing one source."""
    converter = VersificationConverter()
    for left, right in config.versification.mapping_pairs:
        converter.add(VersificationMapping(left, right, source, registry=registry))
    return converter


def pair_mapping(
    first: Versification,
    second: Versification,
    source: DirectoryMappingSource,
) -> VersificationMapping:
    """Mapping for a pair, oriented by the table file that exists."""
    mapping = VersificationMapping(first, second, source)
    if not source.has_table(mapping.properties_file_name):
        reverse = VersificationMapping(second, first, source)
        if source.has_table(reverse.properties_file_name):
            return reverse
    return mapping


@app.command()
def translate(
    reference: str = typer.Argument(..., help="Verse reference (e.g. Gen.3.16 or 'Ps 51:1')"),
    from_name: str = typer.Option(..., "--from", "-f", help="Versification of the reference"),
    to_name: str = typer.Option(..., "--to", "-t", help="Versification to translate into"),
    schemes_dir: Optional[Path] = typer.Option(None, "--schemes", help="Directory of versification JSON files"),
    mappings_dir: Optional[Path] = typer.Option(None, "--mappings", help="Directory of mapping properties files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """Translate a verse reference into another versification."""
    config = _load_config()
    _setup(config, verbose)

    with LogContext(command="translate"):
        try:
            registry = build_registry(schemes_dir or config.versification.schemes_dir)
            source_scheme = registry.get(from_name)
            target_scheme = registry.get(to_name)

            source = build_source(config, mappings_dir)
            converter = build_converter(config, registry, source)
            if not converter.can_convert(source_scheme, target_scheme):
                # Not configured through VERSIFY_MAPPINGS; use whichever table the pair has
                converter.add(pair_mapping(source_scheme, target_scheme, source))

            verse = reference_from_string(source_scheme, reference)
            mapped = converter.convert(verse, target_scheme)
            logger.debug("Reference translated", source=verse.osis_ref, target=mapped.osis_ref)
        except VersificationError as e:
            _print_error(e)
            raise typer.Exit(1)

    console.print(f"{verse.osis_ref} ({source_scheme.name}) -> [bold green]{mapped.osis_ref}[/bold green] ({mapped.versification.name})")


@app.command()
def schemes(
    schemes_dir: Optional[Path] = typer.Option(None, "--schemes", help="Directory of versification JSON files"),
):
    """List the available versifications."""
    config = _load_config()
    _setup(config, verbose=False)

    try:
        registry = build_registry(schemes_dir or config.versification.schemes_dir)
    except VersificationError as e:
        _print_error(e)
        raise typer.Exit(1)

    if not len(registry):
        console.print("[yellow]No versifications found[/yellow]")
        raise typer.Exit(1)

    table = Table(title="Versifications")
    table.add_column("Name", style="cyan")
    table.add_column("Books", justify="right")
    for name in registry.names():
        table.add_row(name, str(len(registry.get(name).books)))
    console.print(table)


@app.command()
def check(
    left: str = typer.Argument(..., help="Left versification (names the mapping file)"),
    right: str = typer.Argument(..., help="Right versification"),
    schemes_dir: Optional[Path] = typer.Option(None, "--schemes", help="Directory of versification JSON files"),
    mappings_dir: Optional[Path] = typer.Option(None, "--mappings", help="Directory of mapping properties files"),
):
    """Load a mapping table and report how many entries were usable."""
    config = _load_config()
    _setup(config, verbose=False)

    try:
        registry = build_registry(schemes_dir or config.versification.schemes_dir)
        source = build_source(config, mappings_dir)
        mapping = VersificationMapping(left, right, source, registry=registry)
        stats = mapping.load()
    except VersificationError as e:
        _print_error(e)
        raise typer.Exit(1)

    style = "green" if stats.skipped == 0 else "yellow"
    console.print(Panel.fit(
        f"[bold]{mapping.properties_file_name}[/bold]\n"
        f"Loaded: {stats.loaded}\n"
        f"Skipped: {stats.skipped}",
        title=str(mapping),
        border_style=style,
    ))


@app.command(name="config")
def show_config():
    """Show the effective configuration and any problems with it."""
    config = _load_config()
    console.print_json(data=config.to_dict())
    problems = config.validate()
    for problem in problems:
        console.print(f"[yellow]! {escape(problem)}[/yellow]")
    if problems:
        raise typer.Exit(1)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
