"""Locate the transaction table inside extracted statement text.

The table starts right after the ``Balance (RM)`` column header and ends at the
``Important!`` notice banner that follows the listing. Depending on the
statement layout version the header is rendered either on one line
(``Balance (RM)``) or split across two (``Balance`` / ``(RM)``); both are
accepted. The commodity inside the parentheses comes from configuration.

Anything before the header (account summary, addresses) and after the banner
(disclaimers, page footers) is discarded.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import lru_cache

from .errors import BoundaryNotFound
from .logging_setup import get_logger

END_MARKER = "Important!"

_logger = get_logger("statement_ledger.locator")


@lru_cache(maxsize=8)
def _start_pattern(commodity: str) -> re.Pattern[str]:
    # One token ("Balance (RM)") or split across two lines ("Balance\n(RM)")
    return re.compile(
        r"Balance[ \t]*(?P<split>\r?\n[ \t]*)?\(" + re.escape(commodity) + r"\)[ \t]*(?:\r?\n|$)"
    )


def as_text(source: str | Iterable[str]) -> str:
    """Return ``source`` as one string; line sequences are joined with ``\\n``."""

    if isinstance(source, str):
        return source
    return "\n".join(line.rstrip("\r\n") for line in source)


def locate_table(source: str | Iterable[str], *, commodity: str = "RM") -> str:
    """Return the text between the table header and the ``Important!`` banner.

    Raises :class:`~statement_ledger.errors.BoundaryNotFound` when the header
    is missing, when the banner is missing, or when the only banner precedes
    the header. An empty region is valid and simply yields no rows.
    """

    text = as_text(source)

    m = _start_pattern(commodity).search(text)
    if m is None:
        raise BoundaryNotFound("start", f"no 'Balance ({commodity})' column header")
    start = m.end()

    end = text.rfind(END_MARKER)
    if end == -1:
        raise BoundaryNotFound("end", f"no {END_MARKER!r} banner")
    if end < start:
        raise BoundaryNotFound("end", f"{END_MARKER!r} banner precedes the table header")

    region = text[start:end]
    _logger.debug(
        "table located layout=%s start=%d end=%d chars=%d",
        "split" if m.group("split") else "single",
        start,
        end,
        len(region),
    )
    return region


__all__ = ["END_MARKER", "as_text", "locate_table"]
