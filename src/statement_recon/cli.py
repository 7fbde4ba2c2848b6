"""
Command-line interface for the bank statement reconciliation tool.
"""

from pathlib import Path
from typing import Optional
import sys

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .config import load_config, generate_default_config
from .models.transaction import ReconciliationSummary, ExpectedAmount
from .parsers.amount import format_amount
from .parsers.expected_parser import ExpectedAmountParser
from .parsers.statement_parser import StatementParser
from .parsers.workbook_reader import read_workbook_grid
from .session import ReconciliationSession, ReconciliationWorkflow
from .utils.exceptions import ReconciliationError, SourceReadError
from .utils.logging_config import configure_logging

console = Console()

PREVIEW_ROWS = 20


@click.group()
@click.version_option(version=__version__)
def main():
    """Bank statement verification against expected amounts."""
    pass


@main.command()
@click.argument(
    "statements", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path)
)
@click.option(
    "-w",
    "--workbook",
    type=click.Path(exists=True, path_type=Path),
    help="Workbook (.xlsx) holding the expected amounts",
)
@click.option("-a", "--amounts", help="Expected amounts, comma separated")
@click.option(
    "--amounts-file",
    type=click.Path(exists=True, path_type=Path),
    help="Text file with expected amounts, comma or newline separated",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (YAML)",
)
@click.option("-o", "--output", type=click.Path(path_type=Path), help="Report file path")
@click.option(
    "--tolerance",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Override amount tolerance",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option("--dry-run", is_flag=True, help="Show results without writing the report")
def reconcile(
    statements: tuple[Path, ...],
    workbook: Optional[Path],
    amounts: Optional[str],
    amounts_file: Optional[Path],
    config: Optional[Path],
    output: Optional[Path],
    tolerance: Optional[float],
    verbose: bool,
    dry_run: bool,
):
    """
    Check expected amounts against bank statement exports.

    STATEMENTS: One or more semicolon-delimited statement exports
    """
    try:
        recon_config = load_config(config)
        configure_logging(recon_config.logging, verbose)
        if tolerance is not None:
            recon_config.matching.tolerance = tolerance

        workflow = ReconciliationWorkflow(recon_config)
        session = ReconciliationSession()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Reading statement exports...", total=None)
            sources = [
                (path.name, workflow.statement_parser.read_text(path))
                for path in statements
            ]
            session = workflow.load_statements(session, sources)
            progress.update(task, completed=True)

            task = progress.add_task("Collecting expected amounts...", total=None)
            expected_text = _resolve_expected_text(
                workflow.expected_parser, amounts, amounts_file, workbook
            )
            progress.update(task, completed=True)

            task = progress.add_task("Comparing values...", total=None)
            session = workflow.reconcile(session, expected_text)
            progress.update(task, completed=True)

        for name, count in session.sources:
            console.print(f"{name}: {count} movements")

        _display_summary(session.summary)
        _display_unmatched(session.result.unmatched)

        if dry_run:
            console.print("\n[yellow]Dry run - no report generated[/yellow]")
            return

        report = workflow.render_report(session)
        if output is None:
            output = Path(workflow.report_generator.report_filename())
        report_path = workflow.report_generator.write_report(report, output)

        console.print(f"\n[green]Report generated: {report_path}[/green]")

    except ReconciliationError as e:
        console.print(f"[red]Error: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)


@main.command("parse-statement")
@click.argument("statement_file", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def parse_statement(statement_file: Path, config: Optional[Path]):
    """
    Parse a statement export and display its movements.

    STATEMENT_FILE: Path to the semicolon-delimited export
    """
    try:
        recon_config = load_config(config)
        configure_logging(recon_config.logging)
        records = StatementParser(recon_config).parse_file(statement_file)
    except ReconciliationError as e:
        console.print(f"[red]Error parsing file: {e}[/red]")
        sys.exit(1)

    symbol = recon_config.output.report.currency_symbol
    table = Table(title=f"Movements: {statement_file.name}")
    table.add_column("#", justify="right")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Amount", justify="right")

    for i, txn in enumerate(records[:PREVIEW_ROWS], start=1):
        table.add_row(
            str(i),
            txn.date,
            txn.description[:50] + "..." if len(txn.description) > 50 else txn.description,
            f"{format_amount(txn.amount)}{symbol}",
        )

    console.print(table)

    if len(records) > PREVIEW_ROWS:
        console.print(f"\n... and {len(records) - PREVIEW_ROWS} more movements")

    console.print(f"\nTotal movements: {len(records)}")


@main.command("extract-amounts")
@click.argument("workbook", type=click.Path(exists=True, path_type=Path))
@click.option("-c", "--config", type=click.Path(exists=True, path_type=Path))
def extract_amounts(workbook: Path, config: Optional[Path]):
    """
    Print the amounts found in a workbook as an editable list.

    WORKBOOK: Path to the .xlsx file
    """
    try:
        recon_config = load_config(config)
        configure_logging(recon_config.logging)
        parser = ExpectedAmountParser(recon_config)
        values = parser.extract_from_grid(read_workbook_grid(workbook))
    except ReconciliationError as e:
        console.print(f"[red]Error reading workbook: {e}[/red]")
        sys.exit(1)

    if not values:
        console.print("[yellow]No numeric values found in the workbook[/yellow]")
        sys.exit(1)

    click.echo(parser.format_prefill(values))


@main.command("init-config")
@click.option(
    "-o", "--output", type=click.Path(path_type=Path), default=Path("config.yaml")
)
def init_config(output: Path):
    """Generate a sample configuration file."""
    generate_default_config(output)
    console.print(f"[green]Configuration file generated: {output}[/green]")


def _resolve_expected_text(
    parser: ExpectedAmountParser,
    amounts: Optional[str],
    amounts_file: Optional[Path],
    workbook: Optional[Path],
) -> str:
    """
    Pick the expected amounts text: typed list, then file, then workbook.

    Returns:
        The text block to reconcile (may be empty)
    """
    if amounts:
        return amounts

    if amounts_file:
        try:
            return amounts_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(f"Failed to read {amounts_file}: {e}") from e

    if workbook:
        values = parser.extract_from_grid(read_workbook_grid(workbook))
        if not values:
            console.print("[yellow]No numeric values found in the workbook[/yellow]")
        return parser.format_prefill(values)

    return ""


def _display_summary(summary: ReconciliationSummary) -> None:
    """Display reconciliation summary in console."""
    table = Table(title="Reconciliation Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Statement Movements", str(summary.total_records))
    table.add_row("Expected Amounts", str(summary.expected_count))
    table.add_row("Found", str(summary.matched_count))
    table.add_row("Not Found", str(summary.unmatched_count))
    table.add_row("Match Rate", f"{summary.match_rate:.1f}%")

    console.print(table)


def _display_unmatched(unmatched: list[ExpectedAmount]) -> None:
    """List expected amounts that had no movement."""
    if not unmatched:
        return

    console.print("\n[red]Amounts not found:[/red]")
    for i, val in enumerate(unmatched, start=1):
        console.print(f"  {i}. {format_amount(val.amount)} ('{val.raw_text}')", markup=False)


if __name__ == "__main__":
    main()
