"""CLI entry point for docstore."""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

import typer
from rich.table import Table

from docstore import __version__
from docstore.cli_services import (
    EXIT_ERROR,
    EXIT_INVALID_ARG,
    EXIT_SUCCESS,
    CLIContext,
    _escape_rich,
    configure_logging,
    console,
    error_console,
    get_cli_store,
)
from docstore.config import get_config
from docstore.exceptions import ConfigError
from docstore.models import Document, SearchRequest

app = typer.Typer(
    name="docstore",
    help="Search documents loaded into an in-memory store",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _parse_timestamp(value: str | None, option: str) -> datetime | None:
    """Parse an ISO-8601 timestamp option, exiting on malformed input."""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        error_console.print(
            f"[red]Error:[/red] {option} must be an ISO-8601 timestamp, got {_escape_rich(value)}"
        )
        raise typer.Exit(code=EXIT_INVALID_ARG)


def _document_to_json(document: Document) -> dict:
    return document.model_dump(mode="json")


def _print_documents_table(documents: list[Document]) -> None:
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", overflow="fold")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Created")
    for doc in documents:
        author = (doc.author.name or doc.author.id) if doc.author else None
        table.add_row(
            _escape_rich(doc.id or ""),
            _escape_rich(doc.title or ""),
            _escape_rich(author or ""),
            doc.created.isoformat() if doc.created else "",
        )
    console.print(table)


def _run_search(ctx: typer.Context, request: SearchRequest, as_json: bool) -> None:
    """Shared implementation for search-style commands."""
    with get_cli_store(ctx) as (svc, store):
        try:
            results = store.search(request)
        except (AttributeError, TypeError) as e:
            error_console.print(
                f"[red]Error during search ({type(e).__name__}):[/red] {_escape_rich(str(e))}"
            )
            if isinstance(e, AttributeError):
                error_console.print("[dim]A stored document may be missing a searched field.[/dim]")
            raise typer.Exit(code=EXIT_ERROR)

    if as_json:
        # Use built-in print to avoid Rich markup interpretation
        print(json.dumps([_document_to_json(doc) for doc in results], indent=2))
        return

    if not results:
        console.print("[yellow]No documents found[/yellow]")
        return

    console.print(f"[bold]{len(results)} matching document(s)[/bold]")
    _print_documents_table(results)


def _run_stats(ctx: typer.Context) -> None:
    """Shared implementation for stats-style commands."""
    with get_cli_store(ctx) as (svc, store):
        documents = store.all()
        source_file = svc.get_config().source_file

    author_ids = {doc.author.id for doc in documents if doc.author and doc.author.id}

    console.print("[bold]Document Store Statistics[/bold]")
    console.print(f"  Documents: {len(documents)}")
    console.print(f"  Authors: {len(author_ids)}")
    source_str = _escape_rich(str(source_file)) if source_file else "(none)"
    console.print(f"  Source file: {source_str}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    source: str | None = typer.Option(
        None,
        "--source",
        "-s",
        help="JSON or JSONL file of documents to load. "
        "Set DOCSTORE_SOURCE_FILE env var to avoid passing this option.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        help="Show version information",
        is_flag=True,
    ),
):
    """docstore - In-memory document search.

    Loads documents from a seed file and queries them by title prefix,
    content, author and creation time.
    """
    if version:
        console.print(f"docstore version {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)

    source_file: Path | None = None
    if source:
        if "\0" in source:
            error_console.print(
                "[red]Error: Invalid --source path (contains null byte):[/red] "
                f"{_escape_rich(source)}"
            )
            raise typer.Exit(code=EXIT_ERROR)
        source_file = Path(source).expanduser()

    try:
        config = get_config(source_file=source_file)
    except ConfigError as e:
        error_console.print(f"[red]Error: Invalid configuration:[/red] {_escape_rich(str(e))}")
        raise typer.Exit(code=EXIT_ERROR)
    configure_logging(config, verbose=verbose)

    ctx.obj = CLIContext(source_file=source_file)

    if ctx.invoked_subcommand is None:
        console.print("[bold]docstore[/bold] - In-memory document search")
        console.print("Use --help for usage information")
        raise typer.Exit(code=EXIT_SUCCESS)


@app.command()
def search(
    ctx: typer.Context,
    title_prefix: list[str] = typer.Option(
        None,
        "--title-prefix",
        "-t",
        help="Match titles starting with this prefix (can be specified multiple times)",
    ),
    contains: list[str] = typer.Option(
        None,
        "--contains",
        "-c",
        help="Match content containing this text (can be specified multiple times)",
    ),
    author: list[str] = typer.Option(
        None,
        "--author",
        "-a",
        help="Match documents by this author id (can be specified multiple times)",
    ),
    created_from: str | None = typer.Option(
        None,
        "--from",
        help="Earliest creation time, inclusive (ISO-8601)",
    ),
    created_to: str | None = typer.Option(
        None,
        "--to",
        help="Latest creation time, inclusive (ISO-8601)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print matching documents as JSON",
    ),
) -> None:
    """Search documents. Criteria combine with AND, repeated values with OR."""
    request = SearchRequest(
        title_prefixes=title_prefix or None,
        contains_contents=contains or None,
        author_ids=author or None,
        created_from=_parse_timestamp(created_from, "--from"),
        created_to=_parse_timestamp(created_to, "--to"),
    )
    _run_search(ctx, request, as_json=as_json)


@app.command()
def get(
    ctx: typer.Context,
    doc_id: str = typer.Argument(..., help="Document id"),
) -> None:
    """Show a single document as JSON."""
    with get_cli_store(ctx) as (svc, store):
        document = store.find_by_id(doc_id)

    if document is None:
        error_console.print(f"[red]Error: Document not found:[/red] {_escape_rich(doc_id)}")
        raise typer.Exit(code=EXIT_ERROR)

    print(json.dumps(_document_to_json(document), indent=2))


@app.command()
def stats(ctx: typer.Context) -> None:
    """Show document and author counts for the loaded store."""
    _run_stats(ctx)


@app.command()
def export(
    ctx: typer.Context,
    output: str = typer.Option(
        "-",
        "--output",
        "-o",
        help="Output file path (default: stdout). Use .jsonl extension for JSONL format.",
    ),
    format: str | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Export format: json or jsonl (default: json, or auto-detect from extension)",
    ),
) -> None:
    """Export every loaded document to JSON or JSONL."""
    if output == "-" and not format:
        format = "json"
    elif not format:
        format = "jsonl" if output.endswith(".jsonl") else "json"

    if format not in ("json", "jsonl"):
        error_console.print(
            f"[red]Error: Invalid format '{_escape_rich(format)}'. Use 'json' or 'jsonl'.[/red]"
        )
        raise typer.Exit(code=EXIT_INVALID_ARG)

    with get_cli_store(ctx) as (svc, store):
        documents = [_document_to_json(doc) for doc in store.all()]

    if format == "jsonl":
        output_data = "\n".join(json.dumps(doc) for doc in documents)
    else:
        output_data = json.dumps(documents, indent=2)

    if output == "-":
        print(output_data)
    else:
        try:
            Path(output).write_text(output_data, encoding="utf-8")
            console.print(
                f"[green]Exported {len(documents)} documents to {_escape_rich(output)}[/green]"
            )
        except OSError as e:
            error_console.print(f"[red]Error writing to file:[/red] {_escape_rich(str(e))}")
            raise typer.Exit(code=EXIT_ERROR)


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
