#!/usr/bin/env python3
"""
CLI interface for the card statement parser.
"""
import json
import logging
import typer
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import load_settings
from .core.loader import extract_text
from .core.runner import StatementParser
from .core.sections import split_by_card
from .errors import StatementError

app = typer.Typer(help="Card Statement Parser")
console = Console()


def _read_statement(path: Path, text: bool) -> str:
    """Return the statement text, extracting it from the PDF unless ``text`` is set."""
    if not path.exists():
        console.print(f"[red]Error: file not found: {path}[/red]")
        raise typer.Exit(1)
    if text:
        return path.read_text(encoding="utf-8")
    return extract_text(path)


@app.command()
def parse(
    path: Path = typer.Argument(..., help="Path to statement PDF (or text file with --text)"),
    output: Optional[Path] = typer.Option(None, "--out", "-o", help="Output JSON file path"),
    text: bool = typer.Option(False, "--text", help="Input is already plain text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Parse a statement into JSON transactions."""
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            task = progress.add_task("Reading statement...", total=None)
            statement = _read_statement(path, text)

            progress.update(task, description="Extracting transactions...")
            result = StatementParser(verbose=verbose).parse(statement)

        rendered = result.model_dump_json(indent=2)
        if output:
            output.write_text(rendered + "\n", encoding="utf-8")
            console.print(
                f"[green]✓ Parsed {len(result.transactions)} transactions! "
                f"Output written to: {output}[/green]"
            )
        else:
            console.print_json(rendered)

    except StatementError as e:
        console.print(f"[red]Error parsing statement: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def sections(
    path: Path = typer.Argument(..., help="Path to statement PDF (or text file with --text)"),
    text: bool = typer.Option(False, "--text", help="Input is already plain text")
):
    """Show the card sections found in a statement."""
    try:
        statement = _read_statement(path, text)
    except StatementError as e:
        console.print(f"[red]Error reading statement: {e}[/red]")
        raise typer.Exit(1)

    card_data = split_by_card(statement)
    if not card_data:
        console.print("[yellow]No card numbers found[/yellow]")
        return

    table = Table(title="Card sections")
    table.add_column("Card")
    table.add_column("Lines", justify="right")
    for card_key, lines in card_data.items():
        table.add_row(card_key, str(len(lines)))
    console.print(table)


@app.command()
def ingest(
    path: Path = typer.Argument(..., help="Path to statement PDF (or text file with --text)"),
    text: bool = typer.Option(False, "--text", help="Input is already plain text"),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy database URL"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output")
):
    """Parse a statement and store its transactions in the database."""
    from .storage.sql import SqlTransactionRepository

    settings = load_settings(config)
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)

    repository = SqlTransactionRepository(database_url or settings.database_url)
    try:
        repository.create_schema()
        statement = _read_statement(path, text)
        result = StatementParser(repository).ingest_text(statement)
    except StatementError as e:
        console.print(f"[red]Error ingesting statement: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Stored {len(result.transactions)} transactions[/green]")
    console.print(json.dumps([t.id for t in result.transactions]))


@app.command()
def serve(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file")
):
    """Run the HTTP upload service."""
    import uvicorn
    from backend.main import create_app

    settings = load_settings(config)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    app()
