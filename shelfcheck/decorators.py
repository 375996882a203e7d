"""Decorators for shelfcheck CLI commands."""

import functools
import logging
from typing import Callable, Any
import typer
from rich.console import Console

logger = logging.getLogger(__name__)
console = Console()

SUPPORTED_FORMATS = ".json, .yaml or .yml"


def _report(message: str, tip: str = "") -> None:
    console.print(f"[bold red]Error:[/bold red] {message}")
    if tip:
        console.print(f"[yellow]Tip: {tip}[/yellow]")


def handle_collection_errors(func: Callable) -> Callable:
    """
    Turn collection and input problems into a one-line error and exit code.

    - Missing collection file: exit 1, with the accepted file formats
    - Unreadable collection file: exit 1
    - Bad collection contents, ``--where`` expression or option value: exit 1
    - Ctrl-C: exit 130
    - Anything else is logged with its traceback and exits 1

    ``typer.Exit`` raised by the command itself (``check --strict``) passes
    through untouched.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        try:
            return func(*args, **kwargs)
        except typer.Exit:
            raise
        except FileNotFoundError as e:
            _report(
                f"Collection not found: {e.filename}" if e.filename else str(e),
                f"collections are {SUPPORTED_FORMATS} files holding a list of books",
            )
            raise typer.Exit(code=1)
        except PermissionError as e:
            _report(f"Cannot read collection {e.filename or ''}".rstrip())
            raise typer.Exit(code=1)
        except ValueError as e:
            logger.debug(f"{func.__name__} rejected its input: {e}")
            _report(str(e))
            raise typer.Exit(code=1)
        except KeyboardInterrupt:
            console.print("\n[yellow]Check cancelled[/yellow]")
            raise typer.Exit(code=130)
        except Exception as e:
            logger.error(f"Unexpected error in {func.__name__}: {e}", exc_info=True)
            console.print(f"[bold red]Unexpected error:[/bold red] {e}")
            raise typer.Exit(code=1)

    return wrapper
