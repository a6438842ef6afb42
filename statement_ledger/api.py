"""Public orchestration API for ``statement_ledger``.

The pipeline runs strictly forward and lazily::

    text -> locate_table -> normalize -> iter_rows -> group_rows
         -> classify_title -> generate_postings -> format_transaction

Only the current transaction group is held in memory. Every block written to
the sink is a complete transaction; a fatal error stops the run after the last
good block (which stays in the sink as a diagnostic trail) and propagates to
the caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from os import PathLike
from typing import TextIO, TypeAlias

from .classifier import classify_title
from .config import LedgerConfig
from .extractor import iter_rows
from .formatter import format_transaction
from .grouper import group_rows
from .locator import locate_table
from .logging_setup import debug_enabled, get_logger
from .models import Narration, Posting, TransactionGroup
from .normalizer import normalize
from .postings import generate_postings

Transaction: TypeAlias = tuple[TransactionGroup, Narration, list[Posting]]

_logger = get_logger("statement_ledger.api")


def iter_transactions(
    text: str | Iterable[str], config: LedgerConfig | None = None
) -> Iterator[Transaction]:
    """Yield ``(group, narration, postings)`` for every transaction in ``text``."""

    config = config or LedgerConfig()
    region = locate_table(text, commodity=config.commodity)
    stream = normalize(region)
    for group in group_rows(iter_rows(stream)):
        narration = classify_title(
            group.title, row_comment=group.comment, institution=config.institution
        )
        yield group, narration, generate_postings(group, narration, config)


def render_ledger(
    text: str | Iterable[str], config: LedgerConfig | None = None
) -> Iterator[str]:
    """Yield one formatted text block per transaction."""

    config = config or LedgerConfig()
    for group, narration, postings in iter_transactions(text, config):
        yield format_transaction(
            group.date, narration, postings, config, balance=group.balance
        )


def write_ledger(
    text: str | Iterable[str], sink: TextIO, config: LedgerConfig | None = None
) -> int:
    """Write the ledger for ``text`` to ``sink``; return the number of transactions.

    With DEBUG logging enabled the sink is flushed after every transaction so
    partial output survives a fatal error.
    """

    flush_each = debug_enabled()
    count = 0
    for block in render_ledger(text, config):
        sink.write(block)
        count += 1
        if flush_each:
            sink.flush()
    _logger.info("wrote %d transaction(s)", count)
    return count


def convert_pdf(
    pdf_path: str | PathLike[str],
    sink: TextIO,
    config: LedgerConfig | None = None,
    *,
    jobs: int = 4,
    use_cache: bool = True,
) -> int:
    """Extract ``pdf_path`` with pdftotext and write its ledger to ``sink``."""

    from .source import extract_text

    text = extract_text(pdf_path, jobs=jobs, use_cache=use_cache)
    return write_ledger(text, sink, config)


__all__ = ["Transaction", "convert_pdf", "iter_transactions", "render_ledger", "write_ledger"]
