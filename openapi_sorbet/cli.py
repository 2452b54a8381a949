"""
Command-line interface for openapi-sorbet.

Loads an OpenAPI document, resolves its component schemas and writes one
Sorbet-typed Ruby file per resolved type.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .codegen import (
    ConfigError,
    GenerationResult,
    GeneratorError,
    RegistryError,
    generate_from_document,
    list_all_language_info,
    load_config,
    write_result,
)
from .codegen.core.generator import COMMAND_NAME, get_version
from .codegen.registry import get_registry
from .logging_config import configure_logging, get_logger
from .utils import DocumentLoadError, load_document

logger = get_logger(__name__)

# Initialize rich console
console = Console()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``openapi-sorbet`` command."""
    parser = argparse.ArgumentParser(
        prog=COMMAND_NAME,
        description="Generate Sorbet-typed Ruby classes from OpenAPI component schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  openapi-sorbet --path openapi.yaml --module Acme::Api --out lib
  openapi-sorbet --url https://example.com/openapi.json --dry-run
  openapi-sorbet --list-languages
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("--path", metavar="FILE", help="OpenAPI document (YAML or JSON)")
    input_group.add_argument("--url", help="URL to fetch the OpenAPI document from")

    parser.add_argument(
        "--module",
        default="",
        metavar="A::B",
        help="Module path wrapping every generated class (default: none)",
    )
    parser.add_argument(
        "--out",
        default=None,
        metavar="DIR",
        help="Output directory (default: out)",
    )
    parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    parser.add_argument(
        "--language",
        "-l",
        default="sorbet",
        help="Target language (default: sorbet)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Render everything but only list the files that would be written",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging and show generation metadata",
    )

    # Informational commands
    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_version()}",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """
    Entry point for the ``openapi-sorbet`` command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        if args.list_languages:
            return _list_languages()

        if not (args.path or args.url):
            raise CLIError("Input source required (--path or --url)")

        _validate_language(args.language)
        document = load_document(file_path=args.path, url=args.url)
        config = _build_config(args)

        result = generate_from_document(document, args.language, config)
        return _output(result, args)

    except (CLIError, DocumentLoadError, ConfigError, GeneratorError, RegistryError) as e:
        logger.debug("Aborting: %s", e, exc_info=True)
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    if not language_info:
        console.print("[yellow]⚠️ No code generators available[/yellow]")
        return 0

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )

    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(f"🔧 {lang_name}", info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()

    console.print(
        Panel(
            f"[bold]Usage:[/bold] {COMMAND_NAME} --path [dim]openapi.yaml[/dim] "
            "--language [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )

    return 0


def _validate_language(language: str):
    """Raise if no generator is registered for the language."""
    registry = get_registry()
    if not registry.is_supported(language):
        raise CLIError(
            f"Unsupported language '{language}'. "
            f"Supported languages: {', '.join(registry.list_languages())}"
        )


def _build_config(args: argparse.Namespace):
    """Merge defaults, the optional config file and CLI overrides."""
    primary = get_registry().resolve_language(args.language)

    overrides = {}
    if args.module:
        overrides["module"] = args.module
    if args.out is not None:
        overrides["output_dir"] = args.out

    return load_config(primary, custom_config=overrides, config_file=args.config)


def _output(result: GenerationResult, args: argparse.Namespace) -> int:
    """Write (or list) generated files and report with rich formatting."""
    if args.dry_run:
        console.print(
            f"[cyan]Dry run:[/cyan] {len(result.files)} file(s) would be written"
        )
        for path in result.paths():
            console.print(f"  [dim]•[/dim] {path}")
    else:
        written = write_result(result)
        console.print(
            f"[green]✓[/green] Wrote {len(written)} file(s) to "
            f"[cyan]{result.output_path}[/cyan]"
        )

    # Show metadata if verbose
    if args.verbose and result.metadata:
        metadata_table = Table(
            title="📊 Generation Metadata",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )

        metadata_table.add_column("Property", style="bold")
        metadata_table.add_column("Value", style="green")

        for key, value in result.metadata.items():
            metadata_table.add_row(key.replace("_", " ").title(), str(value))

        console.print()
        console.print(metadata_table)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return 0
