"""CLI command for inspecting the document index."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from docrag.cli.common import build_engine, configure_logging, console


def index(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Directory of documents to index"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Build the index and report ingestion statistics."""
    configure_logging(verbose)
    engine = build_engine(data_dir, require_content=False)
    stats = engine.stats

    table = Table(title="DocRAG Index")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Documents loaded", str(stats.documents_loaded))
    table.add_row("Documents skipped (empty)", str(stats.documents_skipped))
    table.add_row("Chunks", str(stats.chunks_total))
    table.add_row("Chunks indexed", str(stats.chunks_indexed))
    table.add_row("Chunks excluded", str(stats.chunks_excluded))
    table.add_row("Embedding dimension", str(stats.dimension or "-"))

    console.print(table)
    if not engine.is_ready:
        console.print("[yellow]Index is empty: queries will be rejected.[/yellow]")
