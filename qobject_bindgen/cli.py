"""
Command line interface for qobject-bindgen.

Reads a bridge description produced by the parser front end and writes
(or prints) the generated C++ header and source.
"""

import argparse
import sys
from typing import Any, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from . import __version__
from .codegen import (
    GenerationResult,
    GeneratorConfig,
    ParsedModel,
    generate_code,
    get_registry,
    load_config,
)
from .codegen.core.config import ConfigError, get_config_manager
from .codegen.core.generator import GeneratorError
from .codegen.cpp import CppWriter
from .logging_config import configure_logging, get_logger
from .utils import BridgeLoadError, load_bridge, load_bridge_stream

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the ``qobject-bindgen`` command."""
    parser = argparse.ArgumentParser(
        prog="qobject-bindgen",
        description="Generate C++ QObject classes from a bridge description",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  qobject-bindgen bridge.json --output-dir generated
  qobject-bindgen --stdin --print < bridge.json
  qobject-bindgen bridge.json --entry-points
  qobject-bindgen --list-features
        """.strip(),
    )

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Bridge description (JSON)")
    input_group.add_argument("--url", help="URL to fetch the bridge description from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the bridge description from standard input"
    )

    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--output-dir", "-o", help="Directory for the generated header and source"
    )
    parser.add_argument(
        "--print",
        dest="print_output",
        action="store_true",
        help="Print the generated code (default when no output directory is given)",
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add the generated-file comment",
    )
    parser.add_argument(
        "--entry-points",
        action="store_true",
        help="Show the constructor entry points the business logic must provide",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-features",
        action="store_true",
        help="List the registered feature generators and exit",
    )
    info_group.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata and info logs"
    )
    log_group.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )

    return parser


def _list_features() -> int:
    """List registered feature generators."""
    registry = get_registry()
    defaults = GeneratorConfig().features

    table = Table(title="📋 Feature Generators", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Feature", style="bold green", no_wrap=True)
    table.add_column("Description")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")
    table.add_column("Default", style="cyan")

    for feature in registry.list_features():
        info = registry.get_feature_info(feature)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(
            f"🔧 {feature}",
            info["description"],
            info["class"],
            aliases,
            "yes" if feature in defaults else "no",
        )

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Select features:[/bold] set [cyan]features[/cyan] in a --config file "
            "to choose and order them",
            title="💡 Configuration",
            border_style="blue",
        )
    )
    return 0


def _get_input_data(args: argparse.Namespace) -> tuple[str, Any]:
    """Load the bridge description from the selected source."""
    try:
        if args.file:
            return load_bridge(args.file)
        elif args.url:
            return load_bridge(url=args.url)
        elif args.stdin:
            return load_bridge_stream()
        else:
            raise CLIError("Input source required (file, --url, or --stdin)")
    except (BridgeLoadError, FileNotFoundError) as e:
        raise CLIError(f"Failed to load input: {e}") from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Build configuration from the config file and CLI arguments."""
    overrides = {}

    if args.output_dir:
        overrides["output_dir"] = args.output_dir

    if args.no_comments:
        overrides["add_comments"] = False

    try:
        config = load_config(custom_config=overrides, config_file=args.config)
    except ConfigError as e:
        raise CLIError(f"Configuration error: {e}") from e

    for warning in get_config_manager().validate_config(config):
        console.print(f"[yellow]⚠️  Config:[/yellow] {warning}")

    return config


def _print_entry_points(result: GenerationResult) -> None:
    """Show the business-logic functions each generated object calls."""
    for qobject in result.blocks.qobjects:
        table = Table(
            title=f"🔗 Entry points of {qobject.descriptor.cxx_qualified}",
            box=box.SIMPLE,
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Entry point", style="bold")
        table.add_column("Signature", style="green")
        table.add_column("Called from", style="dim")

        for entry_point in qobject.entry_points:
            table.add_row(entry_point.name, entry_point.signature, entry_point.called_from)

        console.print()
        console.print(table)


def _print_code(title: str, code: str) -> None:
    border = "═" * 30
    console.print(f"[green]{border} 📄 {title} {border}[/green]\n")
    console.print(Syntax(code, "cpp", theme="monokai"))
    console.print()


def _generate_and_output(data: Any, source: str, config: GeneratorConfig,
                         args: argparse.Namespace) -> int:
    """Generate code and handle output with rich formatting."""
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("[cyan]Reading bridge description...", total=None)
        try:
            model = ParsedModel.from_dict(data, source)
        except GeneratorError as e:
            raise CLIError(f"Invalid bridge description: {e}") from e
        progress.remove_task(task)

        task = progress.add_task("[green]Generating C++...", total=None)
        result = generate_code(model, config)
        progress.remove_task(task)

    if not result.success:
        console.print(f"[red]✗ {result.error_message}[/red]")
        return 1

    if config.output_dir:
        try:
            written = CppWriter(config).write_files(result.blocks, config.output_dir)
        except OSError as e:
            raise CLIError(f"Failed to write output: {e}") from e
        for path in written:
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")

    if args.print_output or not config.output_dir:
        _print_code(result.metadata["header_file"], result.header)
        _print_code(result.metadata["source_file"], result.source)

    if args.entry_points:
        _print_entry_points(result)

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

    # Show warnings with rich formatting
    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {warning}")
        console.print()

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point of the ``qobject-bindgen`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    level = args.log_level or ("INFO" if args.verbose else "WARNING")
    configure_logging(level)

    try:
        if args.list_features:
            return _list_features()

        config = _build_config(args)
        source, data = _get_input_data(args)
        logger.info("Generating from %s", source)
        return _generate_and_output(data, source, config, args)

    except CLIError as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
