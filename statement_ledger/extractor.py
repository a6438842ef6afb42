"""Row extraction from the normalized table stream.

The normalized stream is one long line of rows in canonical order::

    <YYYY-MM-DD> <title>[ || <comment>] (<debit>) <credit> <balance>

Rows are matched one at a time, anchored at a read cursor that only moves
forward. The stream is never re-split on whitespace because titles and
comments contain spaces; the lazy title group stops at the first position
where three amounts follow.

Amounts match ``\\d[\\d,]*\\.\\d{2}`` and may be wrapped in parentheses (the
statement prints the debit column that way). Parentheses are stripped; the
column a value came from carries its polarity.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from .errors import TrailingUnparsedText
from .logging_setup import get_logger
from .models import Row

DATE = r"\d{4}-\d{2}-\d{2}"
AMOUNT = r"\d[\d,]*\.\d{2}"
# Optional surrounding parentheses, balanced
AMOUNT_TOKEN = rf"(?:\({AMOUNT}\)|{AMOUNT})"

# A title or comment never runs into the next row's date
_NO_ROW_START = rf"(?:(?!\s{DATE}\s).)"

ROW_RE = re.compile(
    rf"(?P<date>{DATE})\s+"
    rf"(?P<title>\S{_NO_ROW_START}*?)"
    rf"(?:\s+\|\|\s+(?P<comment>{_NO_ROW_START}*?))?"
    rf"\s+(?P<debit>{AMOUNT_TOKEN})"
    rf"\s+(?P<credit>{AMOUNT_TOKEN})"
    rf"\s+(?P<balance>{AMOUNT_TOKEN})"
    r"(?=\s|$)"
)

_logger = get_logger("statement_ledger.extractor")


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _strip_parens(token: str) -> str:
    if token.startswith("(") and token.endswith(")"):
        return token[1:-1]
    return token


def iter_rows(stream: str) -> Iterator[Row]:
    """Yield :class:`Row` records from ``stream`` in order.

    Raises :class:`~statement_ledger.errors.TrailingUnparsedText` when text
    remains at the cursor that does not form a row, after yielding every row
    matched before it.
    """

    pos = _skip_ws(stream, 0)
    count = 0
    while pos < len(stream):
        m = ROW_RE.match(stream, pos)
        if m is None:
            raise TrailingUnparsedText(stream[pos:], offset=pos, rows_parsed=count)
        row = Row(
            date=m["date"],
            title=m["title"].strip(),
            comment=(m["comment"] or "").strip(),
            debit=_strip_parens(m["debit"]),
            credit=_strip_parens(m["credit"]),
            balance=_strip_parens(m["balance"]),
            text=m.group(0),
        )
        count += 1
        _logger.debug("row %d: %s %r comment=%r", count, row.date, row.title, row.comment)
        yield row
        pos = _skip_ws(stream, m.end())


def extract_rows(stream: str) -> list[Row]:
    """Eager variant of :func:`iter_rows`."""

    return list(iter_rows(stream))


__all__ = ["AMOUNT", "AMOUNT_TOKEN", "DATE", "ROW_RE", "extract_rows", "iter_rows"]
