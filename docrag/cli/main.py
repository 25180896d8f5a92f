"""DocRAG CLI entry point."""

import typer

from docrag.cli.ask import ask, chat
from docrag.cli.index import index

app = typer.Typer(
    name="docrag",
    help="Ask questions about a local document collection, answered by a local LLM.",
)

app.command(name="ask")(ask)
app.command(name="chat")(chat)
app.command(name="index")(index)


if __name__ == "__main__":
    app()
