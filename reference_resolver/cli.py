"""
CLI for reference-resolver.

Provides the `reference-resolver` command for checking how references
resolve against a given set of directories.
"""

import json
import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import load_resolution_config
from .exceptions import ConfigurationError
from .models import ReferenceRequest
from .models import ResolutionConfig
from .models import ResolutionEnvironment
from .platform import HostPlatform
from .search_paths import build_search_paths
from .selection import discover_resolver_providers
from .selection import get_default_resolver

console = Console()


def print_warning(code: str, text: str) -> None:
    """Warning sink writing to stderr."""
    click.secho(f"warning {code}: {text}", fg="yellow", err=True)


def print_error(code: str, text: str) -> None:
    """Error sink writing to stderr."""
    click.secho(f"error {code}: {text}", fg="red", err=True)


def resolution_options(fn: Callable) -> Callable:
    """Options shared by every command that builds a ResolutionConfig."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="YAML config file (default: $REFERENCE_RESOLVER_CONFIG)",
        ),
        click.option(
            "--mode",
            type=click.Choice([env.value for env in ResolutionEnvironment]),
            help="Resolution environment",
        ),
        click.option("--framework-version", help='Target framework moniker, e.g. "v4.5.1"'),
        click.option("--framework-dir", "-f", multiple=True, help="Target framework directory (repeatable)"),
        click.option("--include-dir", "-I", multiple=True, help="Explicit include directory (repeatable)"),
        click.option("--core-dir", help="Core library directory"),
        click.option("--implicit-dir", help="Implicit include directory"),
        click.option("--output-dir", help="Output directory"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return fn


def load_config(options: dict[str, Any]) -> ResolutionConfig:
    """Build a ResolutionConfig from CLI options layered over the config file."""
    try:
        return load_resolution_config(
            options.get("config_path"),
            environment=options.get("mode"),
            target_framework_version=options.get("framework_version"),
            target_framework_directories=options.get("framework_dir") or None,
            explicit_include_directories=options.get("include_dir") or None,
            core_library_directory=options.get("core_dir"),
            implicit_include_directory=options.get("implicit_dir"),
            output_directory=options.get("output_dir"),
            log_warning=print_warning,
            log_error=print_error,
        )
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.version_option(version=__version__, prog_name="reference-resolver")
@click.option("--verbose", "-v", is_flag=True, help="Show resolution trace on stderr")
def cli(verbose: bool) -> None:
    """Reference Resolver - locate library files for symbolic references."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@cli.command()
@click.argument("references", nargs=-1, required=True)
@resolution_options
@click.option("--json", "as_json", is_flag=True, help="Emit results as JSON")
@click.option(
    "--external/--no-external",
    default=False,
    help="Allow an installed external resolver to be used",
)
@click.option("--resolver-version", help='Preferred external resolver version (default: "12")')
def resolve(
    references: tuple[str, ...],
    as_json: bool,
    external: bool,
    resolver_version: str | None,
    **options: Any,
) -> None:
    """Resolve REFERENCES to file paths.

    Each REFERENCE is a path, a file name or a strong-name descriptor.

    Examples:

        reference-resolver resolve Foo.dll -I ./lib

        reference-resolver resolve "FSharp.Core, Version=4.4.0.0" --json
    """
    config = load_config(options)
    resolver = get_default_resolver(external, resolver_version)

    # Baggage carries the input index so results map back to their reference
    requests = [ReferenceRequest.of(text, baggage=str(index)) for index, text in enumerate(references)]
    results = resolver.resolve(config, requests)
    resolved = {int(result.baggage): result for result in results}

    if as_json:
        payload = [
            {
                "reference": references[index],
                "path": result.path,
                "resolved_by": getattr(result, "resolved_by", ""),
            }
            for index, result in resolved.items()
        ]
        click.echo(json.dumps(payload, indent=2))
    else:
        for index, result in resolved.items():
            click.echo(f"{references[index]} -> {result.path}")

    unresolved = [text for index, text in enumerate(references) if index not in resolved]
    for text in unresolved:
        click.secho(f"unresolved: {text}", fg="red", err=True)

    sys.exit(1 if unresolved else 0)


@cli.command(name="search-paths")
@resolution_options
def search_paths(**options: Any) -> None:
    """List candidate directories in search order."""
    config = load_config(options)
    for directory in build_search_paths(config, HostPlatform()):
        click.echo(directory)


@cli.command()
def info() -> None:
    """Show framework information for this host."""
    resolver = get_default_resolver()
    root = resolver.reference_assemblies_root_directory or "(none on this host)"
    click.echo(f"Highest installed framework: {resolver.highest_installed_framework_version()}")
    click.echo(f"Reference assemblies root:   {root}")


@cli.command()
@click.option("--check", is_flag=True, help="Try to create each resolver")
def providers(check: bool) -> None:
    """List installed external resolver providers."""
    found = discover_resolver_providers()
    if not found:
        console.print("[dim]No external resolver providers installed[/dim]")
        return

    table = Table(title="Resolver Providers (via entry points)", show_header=True, header_style="bold cyan")
    table.add_column("Version", style="green")
    table.add_column("Source", style="magenta")
    if check:
        table.add_column("Available", justify="center")

    for provider in found:
        row = [provider.version, provider.source]
        if check:
            row.append("[green]yes[/green]" if provider.try_create() is not None else "[red]no[/red]")
        table.add_row(*row)

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
