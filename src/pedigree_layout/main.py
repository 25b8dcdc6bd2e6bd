"""
Command line entry point.

1) Load a pedigree dataset (JSON individual list or GEDCOM file).
2) Validate it; every problem is reported at once.
3) Lay it out: generations, partnerships, coordinates.
4) Print the positions, write them as JSON, or export the pinned layout graph.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pedigree_layout.config import load_options
from pedigree_layout.errors import PedigreeError
from pedigree_layout.layout import PedigreeLayout, compute_layout
from pedigree_layout.models import LayoutOptions
from pedigree_layout.parsing import load_dataset
from pedigree_layout.validation import validate_individuals

app = typer.Typer(
    name="pedigree-layout",
    help="Lay out medical pedigree diagrams from individual records",
    add_completion=False,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_layout(dataset: Path, config: Optional[Path]) -> PedigreeLayout:
    options = load_options(config) if config else LayoutOptions()
    individuals = load_dataset(dataset)
    console.print(f"Loaded {len(individuals)} individuals from {dataset}")
    return compute_layout(individuals, options)


def _fail(error: PedigreeError) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    raise typer.Exit(code=1)


def positions_table(layout: PedigreeLayout) -> Table:
    table = Table(title="Pedigree Layout")
    table.add_column("Generation", justify="right")
    table.add_column("Individual", style="bold")
    table.add_column("Sex")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")

    for gen, row in layout.rows().items():
        for pos in row:
            table.add_row(str(gen), pos.name, pos.individual.sex, f"{pos.x:.1f}", f"{pos.y:.1f}")
    return table


@app.command("layout")
def layout_command(
    dataset: Path = typer.Argument(..., exists=True, readable=True),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with layout options"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write layout JSON to file instead of a table"),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Compute the layout of a pedigree and show or save it.
    """
    configure_logging(verbose)
    try:
        layout = _load_layout(dataset, config)
    except PedigreeError as e:
        _fail(e)

    if out is None:
        console.print(positions_table(layout))
        for partnership in layout.partnerships:
            if layout.is_consanguineous(partnership):
                a, b = partnership.partners
                console.print(f"Consanguineous partnership: {a} + {b}")
        return

    payload = json.dumps(layout.to_dict(), indent=2 if pretty else None, ensure_ascii=False)
    out.write_text(payload, encoding="utf-8")
    console.print(f"Layout saved to {out}")


@app.command("validate")
def validate_command(
    dataset: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Check parent references, parent sexes, duplicates, and cycles.
    """
    configure_logging(verbose)
    try:
        individuals = load_dataset(dataset)
    except PedigreeError as e:
        _fail(e)

    errors = validate_individuals(individuals)
    if not errors:
        console.print(f"No validation issues found in {len(individuals)} individuals")
        return

    console.print(f"Found {len(errors)} validation errors:")
    for error in errors:
        console.print(f"  - {error}")
    raise typer.Exit(code=1)


@app.command("export")
def export_command(
    dataset: Path = typer.Argument(..., exists=True, readable=True),
    out: Path = typer.Option(..., "--out", "-o", help="Output file (.dot, .gv, .png, .svg or .pdf)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML file with layout options"),
    preview: bool = typer.Option(False, "--preview", help="Draw a matplotlib preview instead of a Graphviz file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    Export the positioned pedigree as a pinned Graphviz graph or a preview image.
    """
    from pedigree_layout.plotting import plot_layout, write_dot

    configure_logging(verbose)
    try:
        layout = _load_layout(dataset, config)
    except PedigreeError as e:
        _fail(e)

    if preview:
        plot_layout(layout, out)
    else:
        try:
            write_dot(layout, out)
        except ValueError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
    console.print(f"Saved to {out}")


def main():
    app()


if __name__ == "__main__":
    main()
