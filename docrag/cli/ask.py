"""CLI commands for asking questions about the document collection."""

from pathlib import Path
from typing import Annotated

import typer
from rich.panel import Panel

from docrag.cli.common import build_engine, configure_logging, console

EXIT_WORDS = {"exit", "quit", ":q"}


def ask(
    question: Annotated[
        str,
        typer.Argument(help="Your question about the documents"),
    ],
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Directory of documents to index"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Answer a single question from the documents."""
    configure_logging(verbose)
    engine = build_engine(data_dir)

    with console.status("[bold green]Thinking..."):
        answer = engine.query(question)

    console.print()
    console.print(Panel(answer, title="DocRAG", border_style="green", padding=(1, 2)))


def chat(
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Directory of documents to index"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
):
    """Index once, then answer questions interactively."""
    configure_logging(verbose)
    engine = build_engine(data_dir)
    console.print("[dim]Type a question, or 'exit' to quit.[/dim]")

    while True:
        try:
            question = console.input("[bold]> [/bold]").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break
        if question.lower() in EXIT_WORDS:
            break
        if not question:
            continue
        with console.status("[bold green]Thinking..."):
            answer = engine.query(question)
        console.print(Panel(answer, border_style="green", padding=(0, 1)))
