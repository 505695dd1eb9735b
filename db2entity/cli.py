"""
Command-line interface for entity generation.

Connects to a database, generates one entity class per table and writes
the sources to an output directory.
"""

import argparse
import os
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .codegen import (
    ConfigError,
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    RegistryError,
    get_generator,
    list_all_language_info,
    load_config,
)
from .codegen.core.config import get_config_manager
from .driver import generate_from_database
from .logging_config import get_logger, setup_logging
from .schema_reader import SchemaReadError
from .utils import write_file

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``db2entity`` command."""
    parser = argparse.ArgumentParser(
        prog="db2entity",
        description="Generate ORM entity classes from a database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  db2entity postgresql://localhost/shop -u app -p secret --package com.shop.model
  db2entity jdbc:mysql://db/shop --package com.shop.model -o src/main/generated --package-dirs
  db2entity sqlite:///shop.db --dry-run
  db2entity --list-languages
        """.strip(),
    )

    parser.add_argument(
        "url",
        nargs="?",
        default=os.getenv("DATABASE_URL"),
        help="Database URL (SQLAlchemy or jdbc: form, default: $DATABASE_URL)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    conn_group = parser.add_argument_group("connection")
    conn_group.add_argument("--username", "-u", help="Database user name")
    conn_group.add_argument(
        "--password",
        "-p",
        default=os.getenv("DATABASE_PASSWORD"),
        help="Database password (default: $DATABASE_PASSWORD)",
    )
    conn_group.add_argument("--schema", help="Database schema to read (default: engine default)")

    gen_group = parser.add_argument_group("generation")
    gen_group.add_argument(
        "--language", "-l", default="java", help="Target language (default: java)"
    )
    gen_group.add_argument("--package", dest="package_name", help="Package for generated classes")
    gen_group.add_argument("--output-dir", "-o", help="Directory for generated sources")
    gen_group.add_argument("--config", metavar="FILE", help="JSON configuration file")
    gen_group.add_argument(
        "--include",
        action="append",
        metavar="PATTERN",
        help="Only generate tables matching this glob (repeatable)",
    )
    gen_group.add_argument(
        "--exclude",
        action="append",
        metavar="PATTERN",
        help="Skip tables matching this glob (repeatable)",
    )
    gen_group.add_argument(
        "--package-dirs",
        action="store_true",
        help="Write files into package subdirectories",
    )
    gen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )
    gen_group.add_argument(
        "--strict",
        action="store_true",
        help="Fail on inconsistent schema metadata instead of warning",
    )
    gen_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Print generated sources instead of writing them",
    )
    gen_group.add_argument(
        "--save-config",
        metavar="FILE",
        help="Write the effective configuration to a JSON file and exit",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Debug logging and generation metadata",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``db2entity`` console script."""
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)
    return handle_generate_command(args)


def handle_generate_command(args: argparse.Namespace) -> int:
    """
    Handle entity generation from parsed CLI arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        if args.list_languages:
            return _list_languages()

        config = _build_config(args)

        if args.save_config:
            get_config_manager().save_config(config, args.save_config)
            console.print(
                f"[green]✓[/green] Configuration saved to [cyan]{args.save_config}[/cyan]"
            )
            return 0

        if not args.url:
            raise CLIError("Database URL required (argument or $DATABASE_URL)")

        # Fail fast on unknown languages before connecting
        get_generator(args.language, config)

        result = _generate(args, config)
        _show_result(result, args)
        return 0

    except (CLIError, ConfigError, RegistryError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.debug("Aborted", exc_info=True)
        return 1
    except (GeneratorError, SchemaReadError, SQLAlchemyError) as e:
        console.print(f"[red]✗ Code generation failed:[/red] {e}")
        if e.__cause__ is not None:
            console.print(f"[dim]Details: {e.__cause__}[/dim]")
        logger.error("Generation aborted: %s", e)
        return 1


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from CLI arguments."""
    overrides = {}

    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.schema:
        overrides["schema"] = args.schema
    if args.include:
        overrides["include_tables"] = args.include
    if args.exclude:
        overrides["exclude_tables"] = args.exclude
    if args.package_dirs:
        overrides["package_dirs"] = True
    if args.no_comments:
        overrides["add_comments"] = False
    if args.strict:
        overrides["strict"] = True

    config = load_config(args.language, custom_config=overrides, config_file=args.config)

    for warning in get_config_manager().validate_config(config, args.language):
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    return config


def _generate(args: argparse.Namespace, config: GeneratorConfig) -> GenerationResult:
    """Run generation with a progress spinner."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]Reading schema...", total=None)

        def on_table(table_name: str):
            progress.update(task, description=f"[green]Generating {table_name}...")

        return generate_from_database(
            args.url,
            language=args.language,
            config=config,
            username=args.username,
            password=args.password,
            writer=None if args.dry_run else write_file,
            on_table=on_table,
        )


def _show_result(result: GenerationResult, args: argparse.Namespace):
    """Print generated sources or the write summary, then warnings."""
    if args.dry_run:
        for generated in result.files:
            console.print(
                Panel(
                    Syntax(generated.content, result.metadata["language"], theme="monokai"),
                    title=f"📄 {generated.relative_path}",
                    border_style="green",
                )
            )
    else:
        console.print(
            f"[green]✓[/green] Generated {len(result.files)} files for "
            f"{result.metadata['table_count']} tables in "
            f"[cyan]{result.metadata['output_dir']}[/cyan]"
        )

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


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

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
    return 0
