#!/usr/bin/env python3
"""
Command-line interface for LogParse.
"""

import os
import glob
import logging
from pathlib import Path
from typing import Iterable, List

import click
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config.settings import ParseConfig, ParseOptions
from .exceptions import ConfigurationError
from .processing.batch import BatchSummary, run_batch
from .processing.file_processor import ProcessResult, ResultStatus

# Set up rich console for pretty output
console = Console()

logger = logging.getLogger(__name__)

EXIT_ERROR = 3
EXIT_CONFIG_ERROR = 4

WILDCARD_CHARS = ("*", "?", "[")


def setup_logging(verbose: bool = False):
    """Configure logging through rich; LOGPARSE_LOG_LEVEL overrides the default level."""
    level_name = os.getenv("LOGPARSE_LOG_LEVEL", "WARNING").upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logging.getLogger().setLevel(level)


def expand_files(patterns: Iterable[str]) -> List[Path]:
    """
    Expand wildcard arguments, keeping order.

    A pattern that matches nothing is kept as given so it is reported as a failure.
    """
    files = []
    for pattern in patterns:
        if any(char in pattern for char in WILDCARD_CHARS):
            matches = sorted(glob.glob(os.path.expanduser(pattern)))
            if matches:
                files.extend(Path(match) for match in matches)
                continue
        files.append(Path(pattern))
    return files


def _flag(ctx: click.Context, name: str, value: bool, default: bool) -> bool:
    # Flags not given on the command line fall back to the configuration file
    if ctx.get_parameter_source(name) is ParameterSource.DEFAULT:
        return default
    return value


@click.command(name="logparse")
@click.version_option(__version__, prog_name="logparse")
@click.option(
    "--dryrun/--process", "-d/-P", "dry_run", default=False,
    help="Process without creating output files",
)
@click.option(
    "--replace/--no-replace", "-r/-S", "replace", default=False,
    help="Replace existing text files",
)
@click.option(
    "--emotes/--no-emotes", "-e/-E", "include_emotes", default=False,
    help="Include emotes in the output",
)
@click.option("--group", "-g", default=None, help="Group to filter for (default from config)")
@click.option(
    "--output-dir", "-o", type=click.Path(file_okay=False), default=None,
    help="Directory for transcripts (default: beside each log)",
)
@click.option("--config", "-c", "config_path", type=click.Path(), default=None, help="Configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--stacktrace/--no-stacktrace", default=False, help="Show stacktrace on errors")
@click.argument("files", nargs=-1)
@click.pass_context
def cli(ctx, dry_run, replace, include_emotes, group, output_dir, config_path, verbose, stacktrace, files):
    """
    Extract chat transcripts from ACT log files.

    Each FILE is filtered and written to a file of the same name with the
    extension changed to .txt. FILES may contain wildcards.
    """
    setup_logging(verbose)

    if not files:
        raise click.UsageError("No log files given")

    try:
        config = ParseConfig.read(config_path)
        config.validate()
        config.log_configuration()

        options = config.as_options()
        options = options.copy(
            dry_run=_flag(ctx, "dry_run", dry_run, options.dry_run),
            force_replace=_flag(ctx, "replace", replace, options.force_replace),
            include_emotes=_flag(ctx, "include_emotes", include_emotes, options.include_emotes),
            group=config.resolve_group(group) if group else options.group,
            output_dir=Path(output_dir) if output_dir else options.output_dir,
            files=expand_files(files),
        )
        console.print(f"[dim]options = {escape(str(options))}[/dim]")

        summary = run_batch(options, progress_callback=print_result)

    except ConfigurationError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        ctx.exit(EXIT_CONFIG_ERROR)
    except Exception as e:
        if stacktrace:
            console.print_exception()
        else:
            logger.error(f"Unexpected error: {e}")
        ctx.exit(EXIT_ERROR)

    display_summary(summary, options)
    ctx.exit(summary.exit_code)


def print_result(result: ProcessResult):
    """Print one line of feedback for a processed file."""
    name = escape(result.path.name)
    output = escape(str(result.output_path))

    if result.status is ResultStatus.SUCCESS:
        if result.dry_run:
            console.print(f"[cyan]•[/cyan] {name}: {result.kept} lines (dry run)")
        else:
            console.print(f"[green]✓[/green] {name} → {output} ({result.kept} lines)")
    elif result.status is ResultStatus.CONFLICT:
        console.print(f"[yellow]⚠[/yellow] {name}: {output} exists, skipped")
    else:
        console.print(f"[red]✗[/red] {name}: {escape(result.error or '')}")

    if result.skipped:
        console.print(f"  [dim]{result.skipped} malformed lines skipped[/dim]")


def display_summary(summary: BatchSummary, options: ParseOptions):
    """Display the batch summary table."""
    stats_table = Table(title="Summary", show_header=False)
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Value", style="white")

    stats_table.add_row("Group", escape(options.group.label))
    stats_table.add_row("Files", str(len(summary)))
    stats_table.add_row("Succeeded", str(summary.succeeded))
    stats_table.add_row("Conflicts", str(summary.conflicts))
    stats_table.add_row("Failed", str(summary.failures))
    stats_table.add_row("Lines Kept", f"{summary.lines_kept:,}")

    console.print(stats_table)


def main():
    """Entry point for the logparse command."""
    cli()


if __name__ == "__main__":
    main()
