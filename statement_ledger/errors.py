"""Exception taxonomy for statement parsing and posting generation.

Every condition here is fatal for the statement being converted. Nothing is
recovered silently: a wrong guess in financial categorization is worse than a
loud failure, so callers surface these to the user and exit non-zero.

- ``StatementError``: base class for input-driven failures (bad statement text).
- ``LayoutOverflow``: configuration/programming error in the formatter; kept
  outside the ``StatementError`` hierarchy on purpose.
- ``ExtractionError``: the external text source (pdftotext) failed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .models import Row


def _preview(text: str, limit: int = 120) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[: limit - 1] + "…"


class StatementError(ValueError):
    """Base class for failures caused by the statement text itself."""


class BoundaryNotFound(StatementError):
    """The transaction table start or end marker is missing."""

    def __init__(self, marker: str, detail: str | None = None) -> None:
        self.marker = marker
        msg = f"cannot locate table {marker} marker"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class TrailingUnparsedText(StatementError):
    """Non-whitespace text remains after the last row that could be matched."""

    def __init__(self, remaining: str, *, offset: int, rows_parsed: int) -> None:
        self.remaining = remaining
        self.offset = offset
        self.rows_parsed = rows_parsed
        super().__init__(
            f"unparsed text after {rows_parsed} row(s) at offset {offset}: "
            f"{_preview(remaining)!r}"
        )


class UnrecognizedPosting(StatementError):
    """A row's (comment, debit, credit) combination has no classification rule."""

    def __init__(self, row: Row, reason: str | None = None) -> None:
        self.row = row
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"unrecognized posting{detail}: {row.date} {row.title!r} "
            f"comment={row.comment!r} debit={row.debit} credit={row.credit} "
            f"source={_preview(row.text)!r}"
        )


class UnsupportedAdjustment(StatementError):
    """An adjustment row carries a debit amount; only credits are supported."""

    def __init__(self, row: Row) -> None:
        self.row = row
        super().__init__(
            f"adjustment with non-zero debit is not supported: {row.date} "
            f"{row.title!r} debit={row.debit} credit={row.credit}"
        )


class LayoutOverflow(ValueError):
    """A posting line does not fit the configured line width."""

    def __init__(self, *, account: str, amount: str, line_width: int, pad: int) -> None:
        self.account = account
        self.amount = amount
        self.line_width = line_width
        self.pad = pad
        super().__init__(
            f"posting for {account!r} amount {amount!r} overflows line width "
            f"{line_width} by {-pad} column(s); widen line_width or shorten the account name"
        )


class ExtractionError(RuntimeError):
    """The external PDF-to-text step failed or is unavailable."""


__all__ = [
    "BoundaryNotFound",
    "ExtractionError",
    "LayoutOverflow",
    "StatementError",
    "TrailingUnparsedText",
    "UnrecognizedPosting",
    "UnsupportedAdjustment",
]
