"""Shared helpers for CLI commands."""

import logging
from pathlib import Path

import typer
from rich.console import Console

from config.settings import get_settings
from docrag.engine import RAGEngine
from docrag.errors import IndexBuildError

console = Console()


def configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO)
    else:
        logging.basicConfig(level=logging.WARNING)


def build_engine(data_dir: Path | None, require_content: bool = True) -> RAGEngine:
    """Build the engine from the data directory, exiting on failure."""
    settings = get_settings()
    if data_dir is not None:
        settings.docrag_data_dir = str(data_dir)

    engine = RAGEngine.from_settings(settings)
    try:
        with console.status("[bold green]Indexing documents..."):
            engine.build_from_directory(settings.data_path)
    except IndexBuildError as e:
        console.print(f"[bold red]Failed to initialize RAG system:[/bold red] {e}")
        raise typer.Exit(1)

    if require_content and not engine.is_ready:
        console.print(
            f"[bold red]No documents to search in {settings.data_path}.[/bold red]\n"
            "Add .txt or .pdf files to the data directory and try again."
        )
        raise typer.Exit(1)
    return engine
