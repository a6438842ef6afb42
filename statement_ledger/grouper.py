"""Merge consecutive rows that belong to one logical transaction.

A repayment is reported as several rows (principal, interest, fees) sharing
the same date and title. Rows are buffered while their ``(date, title)`` key
matches the open group byte-for-byte; the first mismatching row flushes the
group and opens a new one. Only adjacency counts: the same key appearing again
later starts a separate group.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .logging_setup import get_logger
from .models import Row, TransactionGroup

_logger = get_logger("statement_ledger.grouper")


def _close(rows: list[Row]) -> TransactionGroup:
    first = rows[0]
    return TransactionGroup(
        date=first.date,
        title=first.title,
        comment=first.comment,
        rows=tuple(rows),
    )


def group_rows(rows: Iterable[Row]) -> Iterator[TransactionGroup]:
    """Yield :class:`TransactionGroup` objects in input order.

    Lazy: a group is yielded as soon as the next row's key differs (or the
    input ends), so errors raised further up the row stream surface after all
    complete groups before them.
    """

    pending: list[Row] = []
    for row in rows:
        if pending and row.key != pending[0].key:
            group = _close(pending)
            _logger.debug("group %s %r rows=%d", group.date, group.title, len(group.rows))
            yield group
            pending = []
        pending.append(row)
    if pending:
        group = _close(pending)
        _logger.debug("group %s %r rows=%d", group.date, group.title, len(group.rows))
        yield group


__all__ = ["group_rows"]
