"""bacmap CLI.

Commands:
- normalize: Normalize a single point name
- normalize-file: Normalize every point in a CSV export and summarize
- similarity: Score two strings with the template/auto-mapper scorer
- pair: Suggest equipment pairings between two CSV inventories
"""

from __future__ import annotations

import csv
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bacmap.canonical.normalizer import PointNormalizer
from bacmap.core.logging import configure_logging
from bacmap.dictionaries.lookup import DictionaryConfigError
from bacmap.matching.auto_mapper import EquipmentAutoMapper
from bacmap.matching.similarity import similarity as similarity_score
from bacmap.models import Equipment, NormalizationContext, RawPoint

app = typer.Typer(
    name="bacmap",
    help="bacmap - BACnet point normalization and equipment mapping",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
):
    """Configure logging before any command runs."""
    configure_logging(level=log_level)


def _normalizer() -> PointNormalizer:
    try:
        return PointNormalizer()
    except DictionaryConfigError as e:
        console.print(f"[bold red]✗ Acronym overlay invalid:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _read_csv(path: Path) -> list[dict[str, str]]:
    if not path.exists():
        console.print(f"[bold red]✗ File not found:[/bold red] {path}")
        raise typer.Exit(1)
    with path.open(encoding="utf-8", newline="") as f:
        return [
            {k.strip().lower(): (v or "").strip() for k, v in row.items() if k}
            for row in csv.DictReader(f)
        ]


def _read_equipment(path: Path) -> list[Equipment]:
    return [
        Equipment(id=row["id"], name=row.get("name", ""), type=row.get("type", ""))
        for row in _read_csv(path)
        if row.get("id")
    ]


@app.command()
def normalize(
    name: str = typer.Argument(..., help="Raw point name, e.g. ZN-T_SP"),
    equipment_type: str | None = typer.Option(None, "--equipment-type", "-e", help="Equipment type hint"),
    vendor: str | None = typer.Option(None, "--vendor", "-v", help="Vendor hint"),
    units: str | None = typer.Option(None, "--units", "-u", help="Units hint, e.g. °F"),
    description: str | None = typer.Option(None, "--description", "-d", help="Point description"),
):
    """Normalize a single point name."""
    point = RawPoint(original_name=name, original_description=description, units=units)
    context = NormalizationContext(equipment_type=equipment_type, vendor=vendor, units=units)
    result = _normalizer().normalize(point, context)

    table = Table(title=f"Normalized: {name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Normalized name", result.normalized_name)
    table.add_row("Expanded description", result.expanded_description)
    table.add_row("Function", result.point_function.value)
    table.add_row("Category", result.category.value)
    table.add_row("Tags", ", ".join(sorted(result.haystack_tags)))
    table.add_row("Confidence", f"{result.confidence:.2f} ({result.confidence_level.value})")
    table.add_row("Method", result.normalization_method)
    table.add_row("Needs review", "yes" if result.requires_manual_review else "no")
    console.print(table)


@app.command(name="normalize-file")
def normalize_file(
    path: Path = typer.Argument(..., help="CSV with name, description, object_type, object_instance, units"),
    equipment_type: str | None = typer.Option(None, "--equipment-type", "-e", help="Equipment type hint"),
    vendor: str | None = typer.Option(None, "--vendor", "-v", help="Vendor hint"),
):
    """Normalize every point in a CSV export and print a batch summary."""
    rows = _read_csv(path)
    points = []
    for line, row in enumerate(rows, start=2):
        try:
            instance = row.get("object_instance")
            points.append(
                RawPoint(
                    original_name=row.get("name", ""),
                    original_description=row.get("description") or None,
                    object_type=row.get("object_type") or None,
                    object_instance=int(instance) if instance else None,
                    units=row.get("units") or None,
                )
            )
        except ValueError as e:
            console.print(f"  [yellow]⚠[/yellow] Skipping line {line}: {escape(str(e))}")

    context = NormalizationContext(equipment_type=equipment_type, vendor=vendor)
    summary = _normalizer().normalize_batch(points, context)

    table = Table(title=f"Points in {path.name}")
    table.add_column("Original", style="cyan")
    table.add_column("Normalized")
    table.add_column("Function")
    table.add_column("Confidence", justify="right")
    table.add_column("Review", style="yellow")
    for point in summary.points:
        table.add_row(
            point.original_name,
            point.normalized_name,
            point.point_function.value,
            f"{point.confidence:.2f}",
            "✗" if point.requires_manual_review else "",
        )
    console.print(table)

    console.print(f"\n[bold]Total:[/bold] {summary.total_points} points")
    console.print(
        f"  high={summary.high_confidence_count} medium={summary.medium_confidence_count} "
        f"low={summary.low_confidence_count} unknown={summary.unknown_confidence_count}"
    )
    console.print(f"  average confidence: {summary.average_confidence:.2f}")
    if summary.requires_review_count:
        console.print(f"[yellow]⚠[/yellow] {summary.requires_review_count} points need manual review")

    if summary.unresolved_tokens:
        gaps = Table(title="Tokens missing from the acronym dictionary")
        gaps.add_column("Token", style="cyan")
        gaps.add_column("Count", justify="right")
        gaps.add_column("Example points")
        for gap in summary.unresolved_tokens:
            gaps.add_row(gap.token, str(gap.frequency), ", ".join(gap.example_points))
        console.print(gaps)


@app.command()
def similarity(
    a: str = typer.Argument(..., help="Template / needle value"),
    b: str = typer.Argument(..., help="Candidate value"),
):
    """Score two strings with the containment / shared-character scorer."""
    console.print(f"{similarity_score(a, b):.4f}")


@app.command()
def pair(
    sources: Path = typer.Argument(..., help="Device-side equipment CSV (id, name, type)"),
    targets: Path = typer.Argument(..., help="Commissioning equipment CSV (id, name, type)"),
):
    """Suggest equipment pairings between two inventories."""
    source_rows = _read_equipment(sources)
    target_rows = _read_equipment(targets)

    result = EquipmentAutoMapper().auto_map(source_rows, target_rows)
    names = {e.id: e.name for e in target_rows}
    source_names = {e.id: e.name for e in source_rows}

    table = Table(title="Equipment Pairings")
    table.add_column("Source", style="cyan")
    table.add_column("Target", style="green")
    table.add_column("Type")
    table.add_column("Confidence", justify="right")
    for p in (*result.exact_pairs, *result.suggested_pairs):
        table.add_row(
            source_names[p.source_id],
            names[p.target_id],
            p.mapping_type.value,
            f"{p.confidence:.2f}",
        )
    console.print(table)

    console.print(
        f"\n[bold green]✓[/bold green] {len(result.exact_pairs)} exact, "
        f"{len(result.suggested_pairs)} suggested"
    )
    if result.unmatched_source_ids:
        unmatched = ", ".join(source_names[i] for i in result.unmatched_source_ids)
        console.print(f"[yellow]⚠[/yellow] Unmatched: {unmatched}")


if __name__ == "__main__":
    app()
