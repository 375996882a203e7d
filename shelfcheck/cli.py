import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.traceback import install

from .collection import books_by_isbn, load_collection
from .config import ensure_config_exists, get_config_path, load_config, update_config
from .decorators import handle_collection_errors
from .models import BookRecord, MatchType, SimilarityResult
from .similarity import SimilarityEngine, SimilarityReport, match_type_label, similarity_level

# Initialize Rich Traceback for better error messages
install(show_locals=False)

# Initialize Rich Console
console = Console()

# Log through Rich on stderr so JSON output on stdout stays clean
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)]
)
logger = logging.getLogger(__name__)

app = typer.Typer(help="Warn before adding a book you already own.")

MATCH_TYPE_STYLES = {
    MatchType.EXACT_ISBN: "bold red",
    MatchType.SIMILAR_TITLE_AUTHOR: "dark_orange",
    MatchType.SIMILAR_TITLE: "blue",
    MatchType.SAME_AUTHOR_SERIES: "magenta",
    MatchType.EDITION_VARIANT: "yellow",
}

OUTPUT_FORMATS = ("table", "json")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose mode"),
):
    """
    shelfcheck - duplicate detection for a personal book catalog.

    Compare a candidate book against your collection and see which stored
    books look like it, and why.
    """
    if verbose or load_config().cli.verbose:
        logging.getLogger("shelfcheck").setLevel(logging.DEBUG)


@app.command()
def about():
    """Display information about shelfcheck."""
    console.print("[bold cyan]shelfcheck - Book Duplicate Detection[/bold cyan]")
    console.print("")
    console.print("Scores a candidate book against a collection using:")
    console.print("  • ISBN-10 / ISBN-13 equivalence")
    console.print("  • Title word overlap with edition detection")
    console.print("  • Author and publisher name matching")
    console.print("")
    console.print("[bold]Commands:[/bold]")
    console.print("  shelfcheck check <title> <author> <collection>")
    console.print("  shelfcheck isbn <isbn> <collection>")
    console.print("  shelfcheck duplicates <collection>")
    console.print("  shelfcheck config")


def _check_format(output_format: str) -> None:
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"Unknown format '{output_format}'. Use one of: {', '.join(OUTPUT_FORMATS)}")


def _results_table(results: List[SimilarityResult], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Score", justify="right")
    table.add_column("Level")
    table.add_column("Match")
    table.add_column("Title", style="cyan")
    table.add_column("Author")
    table.add_column("Reasons")

    for result in results:
        style = MATCH_TYPE_STYLES.get(result.match_type, "")
        table.add_row(
            f"{result.score:.2f}",
            similarity_level(result.score),
            f"[{style}]{match_type_label(result.match_type)}[/{style}]" if style else match_type_label(result.match_type),
            result.record.title,
            result.record.author,
            "; ".join(result.reasons),
        )
    return table


@app.command()
@handle_collection_errors
def check(
    title: str = typer.Argument(..., help="Title of the book you want to add"),
    author: str = typer.Argument(..., help="Author of the book you want to add"),
    collection: Path = typer.Argument(..., help="Collection file (.json, .yaml)"),
    isbn: Optional[str] = typer.Option(None, "--isbn", "-i", help="ISBN-10 or ISBN-13"),
    publisher: Optional[str] = typer.Option(None, "--publisher", "-p", help="Publisher name"),
    where: Optional[str] = typer.Option(None, "--where", "-w", help="JMESPath filter, e.g. \"[?status=='owned']\""),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum results to show"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: table or json"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 2 when the book is already owned"),
):
    """
    Check a candidate book against a collection before adding it.
    """
    config = load_config()
    output_format = output_format or config.cli.output_format
    _check_format(output_format)

    records = load_collection(collection, where=where)
    query = BookRecord(title=title, author=author, isbn=isbn, publisher=publisher)
    engine = SimilarityEngine.from_config(config)
    results = engine.find_similar(query, records, top_k=limit if limit is not None else config.cli.limit)
    report = SimilarityReport.from_results(results)

    if output_format == "json":
        typer.echo(json.dumps(report.to_dict(), indent=2))
    elif not results:
        console.print(f"[green]No similar books found[/green] among {len(records)} books.")
    else:
        console.print(_results_table(results, f"Similar to: {title}"))
        if report.should_block:
            console.print("[bold red]Already in your collection.[/bold red]")
        else:
            console.print(f"[yellow]Found {len(results)} similar book(s).[/yellow]")

    if strict and report.should_block:
        raise typer.Exit(code=2)


@app.command("isbn")
@handle_collection_errors
def isbn_lookup(
    isbn: str = typer.Argument(..., help="ISBN-10 or ISBN-13 to look up"),
    collection: Path = typer.Argument(..., help="Collection file (.json, .yaml)"),
):
    """
    List stored books with the given ISBN, in either format.
    """
    records = load_collection(collection)
    matches = books_by_isbn(isbn, records)

    if not matches:
        console.print(f"No books with ISBN {isbn} in collection.")
        return

    table = Table(title=f"Books with ISBN {isbn}")
    table.add_column("ID")
    table.add_column("Title", style="cyan")
    table.add_column("Author")
    table.add_column("ISBN")
    for record in matches:
        table.add_row(record.id or "-", record.title, record.author, record.isbn or "")
    console.print(table)


@app.command()
@handle_collection_errors
def duplicates(
    collection: Path = typer.Argument(..., help="Collection file (.json, .yaml)"),
    min_score: Optional[float] = typer.Option(None, "--min-score", "-s", help="Report pairs scoring above this"),
    output_format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: table or json"),
):
    """
    Find likely duplicates already inside a collection.
    """
    config = load_config()
    output_format = output_format or config.cli.output_format
    _check_format(output_format)

    engine = SimilarityEngine.from_config(config)
    if min_score is not None:
        engine.min_score = min_score

    records = load_collection(collection)
    pairs = engine.find_duplicates(records)

    if output_format == "json":
        payload = [
            dict(result.to_dict(), book=record.to_dict())
            for record, result in pairs
        ]
        typer.echo(json.dumps(payload, indent=2))
        return

    if not pairs:
        console.print(f"[green]No duplicates found[/green] among {len(records)} books.")
        return

    table = Table(title="Possible duplicates")
    table.add_column("Score", justify="right")
    table.add_column("Match")
    table.add_column("Book", style="cyan")
    table.add_column("Looks like", style="cyan")
    for record, result in pairs:
        table.add_row(
            f"{result.score:.2f}",
            match_type_label(result.match_type),
            record.title,
            result.record.title,
        )
    console.print(table)


@app.command("config")
@handle_collection_errors
def config_command(
    init: bool = typer.Option(False, "--init", help="Create config file with defaults"),
    min_score: Optional[float] = typer.Option(None, "--min-score", help="Set the reporting threshold"),
    limit: Optional[int] = typer.Option(None, "--limit", help="Set the default result limit"),
    output_format: Optional[str] = typer.Option(None, "--format", help="Set the default output format"),
):
    """
    Show or update configuration.
    """
    if init:
        path = ensure_config_exists()
        console.print(f"Configuration file: {path}")

    if output_format is not None:
        _check_format(output_format)

    if min_score is not None or limit is not None or output_format is not None:
        config = update_config(min_score=min_score, cli_limit=limit, cli_output_format=output_format)
        console.print(f"[green]Configuration saved to {get_config_path()}[/green]")
    else:
        config = load_config()

    typer.echo(json.dumps(config.to_dict(), indent=2))


if __name__ == "__main__":
    app()
