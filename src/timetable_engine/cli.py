"""CLI entry point for the timetable engine."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .catalog import CatalogLoader
from .exceptions import TimetableError
from .exporters import get_exporter, load_timetable_json
from .scheduler import (
    DEFAULT_HARD_CONSTRAINTS,
    DEFAULT_SOFT_CONSTRAINTS,
    compute_statistics,
    create_scheduler,
    generate_time_slots,
    generate_timetable_excel,
)
from .scheduler.constraints import HardConstraints

app = typer.Typer(
    name="timetable-engine",
    help="Generate class timetables from institution and catalog data",
    add_completion=False,
)
console = Console()

DEFAULT_OUTPUT = Path("output/timetable")


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_catalog(data_dir: Path) -> CatalogLoader:
    try:
        return CatalogLoader(data_dir)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def generate(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with institution.json, subjects.json, faculty.json, rooms.json, batches.json"),
    ],
    batch: Annotated[
        Optional[str],
        typer.Option("-b", "--batch", help="Only schedule the batch with this id"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file or directory path (default: output/timetable)"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    grid: Annotated[
        Optional[Path],
        typer.Option("--grid", help="Also write a weekly grid workbook (.xlsx)"),
    ] = None,
    strategy: Annotated[
        str,
        typer.Option("--strategy", help="Scheduling strategy"),
    ] = "greedy",
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Generate a timetable for the catalog in DATA_DIR."""
    _configure_logging(verbose)
    loader = _load_catalog(data_dir)

    catalog = loader.catalog
    if batch:
        try:
            catalog = loader.select_batch(batch)
        except TimetableError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)

    if not catalog.batches:
        console.print("[bold yellow]Warning:[/bold yellow] No batches found in catalog")
        raise typer.Exit(1)

    try:
        scheduler = create_scheduler(
            loader.institution,
            catalog,
            strategy=strategy,
            hard_constraints=loader.hard_constraints,
            soft_constraints=loader.soft_constraints,
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold]Timetable Generation for:[/bold] {data_dir}")
    console.print(f"  Batches: {len(catalog.batches)}")
    console.print(f"  Subjects: {len(catalog.subjects)}")

    with console.status("[bold green]Generating timetable..."):
        timetable = scheduler.generate(loader.settings)

    statistics = compute_statistics(timetable)
    console.print(f"\n[bold]{timetable.name}[/bold]")
    console.print(f"  Score: {timetable.score}%")
    console.print(f"  Entries: {statistics.total_entries}")
    console.print(f"  Conflicts observed: {statistics.total_conflicts}")
    console.print(f"  Unscheduled sessions: {statistics.total_unscheduled}")

    if statistics.by_day:
        console.print("\n[bold]Distribution by day:[/bold]")
        for day, count in statistics.by_day.items():
            console.print(f"  {day}: {count}")

    if verbose and timetable.unscheduled:
        console.print(
            f"\n[bold yellow]Unscheduled sessions ({len(timetable.unscheduled)}):[/bold yellow]"
        )
        for item in timetable.unscheduled[:10]:
            console.print(f"  [yellow]- {item.batch_id} / {item.subject_id}: {item.details}[/yellow]")
        if len(timetable.unscheduled) > 10:
            console.print(f"  [yellow]... and {len(timetable.unscheduled) - 10} more[/yellow]")

    output = output or DEFAULT_OUTPUT
    if format == OutputFormat.csv:
        output_path = output if output.is_dir() else output.parent / output.stem
    else:
        suffix = ".xlsx" if format == OutputFormat.excel else ".json"
        output_path = output if output.suffix else output.with_suffix(suffix)

    with console.status(f"[bold green]Exporting to {output_path}..."):
        get_exporter(format.value).export(timetable, output_path)
    console.print(f"\n[bold green]✓[/bold green] Timetable exported to: {output_path}")

    if grid:
        grid_path = grid if grid.suffix == ".xlsx" else grid.with_suffix(".xlsx")
        generate_timetable_excel(timetable, loader.institution, grid_path)
        console.print(f"[bold green]✓[/bold green] Grid workbook written to: {grid_path}")


@app.command()
def slots(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with institution.json"),
    ],
) -> None:
    """Show the weekly time grid of the institution."""
    loader = _load_catalog(data_dir)
    time_slots = generate_time_slots(loader.institution)

    if not time_slots:
        console.print("[bold yellow]Warning:[/bold yellow] Institution calendar has no time slots")
        raise typer.Exit(1)

    table = Table(title=f"Time Slots ({len(time_slots)})")
    table.add_column("Day", style="cyan")
    table.add_column("Period", style="green")
    table.add_column("Time", style="magenta")
    for slot in time_slots:
        table.add_row(slot.day, str(slot.period), slot.time_range)
    console.print(table)


@app.command()
def constraints() -> None:
    """List the default hard and soft constraints."""
    enforced = set(HardConstraints.rule_ids())

    hard_table = Table(title="Hard Constraints")
    hard_table.add_column("ID", style="cyan")
    hard_table.add_column("Name", style="green")
    hard_table.add_column("Enforced", style="yellow")
    for constraint in DEFAULT_HARD_CONSTRAINTS:
        hard_table.add_row(
            constraint["id"],
            constraint["name"],
            "yes" if constraint["id"] in enforced else "no",
        )
    console.print(hard_table)

    soft_table = Table(title="Soft Constraints (not used by the greedy scheduler)")
    soft_table.add_column("ID", style="cyan")
    soft_table.add_column("Name", style="green")
    soft_table.add_column("Weight", style="magenta")
    for constraint in DEFAULT_SOFT_CONSTRAINTS:
        soft_table.add_row(constraint["id"], constraint["name"], str(constraint["weight"]))
    console.print(soft_table)


@app.command()
def inspect(
    input_file: Annotated[
        Path,
        typer.Argument(help="Timetable JSON file written by the generate command"),
    ],
) -> None:
    """Show statistics for an exported timetable."""
    if not input_file.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {input_file}")
        raise typer.Exit(1)

    try:
        timetable = load_timetable_json(input_file)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    statistics = compute_statistics(timetable)

    console.print(f"\n[bold]{timetable.name}[/bold] ({timetable.status.value})")
    console.print(f"  Generated at: {timetable.generated_at}")

    overview_table = Table(title="Overview", show_header=False)
    overview_table.add_column("Metric", style="cyan")
    overview_table.add_column("Value", style="green")
    overview_table.add_row("Score", f"{timetable.score}%")
    overview_table.add_row("Entries", str(statistics.total_entries))
    overview_table.add_row("Conflicts", str(statistics.total_conflicts))
    overview_table.add_row("Unscheduled", str(statistics.total_unscheduled))
    console.print(overview_table)

    if statistics.by_batch:
        batch_table = Table(title="Entries by Batch")
        batch_table.add_column("Batch", style="cyan")
        batch_table.add_column("Count", style="green")
        for name, count in statistics.by_batch.items():
            batch_table.add_row(name, str(count))
        console.print(batch_table)

    if statistics.conflicts_by_type:
        conflict_table = Table(title="Conflicts by Type")
        conflict_table.add_column("Type", style="cyan")
        conflict_table.add_column("Count", style="red")
        for conflict_type, count in statistics.conflicts_by_type.items():
            conflict_table.add_row(conflict_type, str(count))
        console.print(conflict_table)


if __name__ == "__main__":
    app()
