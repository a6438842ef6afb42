"""Typer-based console interface for ``statement_ledger``.

Commands
--------
- ``convert INPUT``: statement PDF (or already-extracted ``.txt``) -> ledger
  text on stdout or ``--output``.
- ``extract INPUT``: dump the text pdftotext produces, for layout debugging.

Environment variables are loaded from a local ``.env`` (without overriding
already-set variables) before configuration is built. Any fatal condition
prints a one-line diagnostic on stderr and exits with status 1; ledger text
already written stays in place.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated, TextIO

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape

from .config import RULE_SETS, LedgerConfig
from .errors import ExtractionError, LayoutOverflow, StatementError
from .logging_setup import configure_logging

console = Console(stderr=True)

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Convert Funding Societies statements into plain-text ledger postings.",
)


def _fail(kind: str, err: BaseException) -> typer.Exit:
    console.print(f"[red]Error:[/red] {kind}: {escape(str(err))}")
    return typer.Exit(1)


@contextmanager
def _open_sink(output: Path | None) -> Iterator[TextIO]:
    if output is None:
        yield sys.stdout
        sys.stdout.flush()
        return
    with open(output, "w", encoding="utf-8", newline="\n") as f:
        yield f


def _is_text_input(path: Path, force_text: bool) -> bool:
    return force_text or path.suffix.lower() == ".txt"


INPUT_ARGUMENT = typer.Argument(
    help="Statement PDF, or a .txt file with already-extracted text",
    dir_okay=False,
    file_okay=True,
    exists=False,  # reported by the handlers with a friendlier message
)


@app.command("convert")
def convert_cmd(
    input_path: Annotated[Path, INPUT_ARGUMENT],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the ledger here instead of stdout.")
    ] = None,
    text: Annotated[
        bool, typer.Option("--text", help="Treat INPUT as extracted text regardless of suffix.")
    ] = False,
    jobs: Annotated[int, typer.Option(min=1, help="Pages extracted in parallel.")] = 4,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Do not read or write the extracted-text cache.")
    ] = False,
    rules_version: Annotated[
        str | None,
        typer.Option(help=f"Posting rule set ({', '.join(sorted(RULE_SETS))})."),
    ] = None,
    show_balance: Annotated[
        bool | None,
        typer.Option("--show-balance/--no-show-balance", help="Annotate the asset line with the balance."),
    ] = None,
) -> None:
    """Convert a statement into ledger transactions."""

    from .api import write_ledger
    from .source import extract_text, read_text_file

    try:
        config = LedgerConfig.from_env(rules_version=rules_version, show_balance=show_balance)
    except ValueError as e:
        raise _fail("invalid configuration", e) from e

    try:
        if _is_text_input(input_path, text):
            statement = read_text_file(input_path)
        else:
            statement = extract_text(input_path, jobs=jobs, use_cache=not no_cache)
    except FileNotFoundError as e:
        raise _fail("file not found", e) from e
    except PermissionError as e:
        raise _fail("permission denied", e) from e
    except UnicodeDecodeError as e:
        raise _fail(f"'{input_path}' is not UTF-8 text", e) from e
    except ExtractionError as e:
        raise _fail("text extraction failed", e) from e
    except OSError as e:
        raise _fail("cannot read input", e) from e

    try:
        with _open_sink(output) as sink:
            write_ledger(statement, sink, config)
    except StatementError as e:
        raise _fail(type(e).__name__, e) from e
    except LayoutOverflow as e:
        raise _fail("layout", e) from e
    except OSError as e:
        raise _fail("cannot write output", e) from e


@app.command("extract")
def extract_cmd(
    input_path: Annotated[Path, INPUT_ARGUMENT],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write the text here instead of stdout.")
    ] = None,
    jobs: Annotated[int, typer.Option(min=1, help="Pages extracted in parallel.")] = 4,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Do not read or write the extracted-text cache.")
    ] = False,
) -> None:
    """Print the text extracted from a statement PDF."""

    from .source import extract_text

    try:
        statement = extract_text(input_path, jobs=jobs, use_cache=not no_cache)
        with _open_sink(output) as sink:
            sink.write(statement)
    except FileNotFoundError as e:
        raise _fail("file not found", e) from e
    except ExtractionError as e:
        raise _fail("text extraction failed", e) from e
    except OSError as e:
        raise _fail("cannot write output", e) from e


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG, INFO, ...). Falls back to STATEMENT_LEDGER_LOG_LEVEL.",
        ),
    ] = None,
) -> None:
    """Load ``.env`` from the working directory and configure logging once."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level, stream=sys.stderr)
    except ValueError as e:
        raise _fail("invalid configuration", e) from e


if __name__ == "__main__":  # pragma: no cover
    app()
