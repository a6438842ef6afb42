"""Data models for ``statement_ledger``.

Amounts are carried as the decimal strings printed on the statement (exactly
two fractional digits, optional thousands separators). They are never
converted to ``float``; the only operations performed on them are zero tests
and pass-through formatting.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Amount helpers
# ---------------------------------------------------------------------------


def is_zero(amount: str) -> bool:
    """Return ``True`` when ``amount`` (e.g. ``"0.00"`` or ``"1,000.00"``) is zero."""

    try:
        return Decimal(amount.replace(",", "")) == 0
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount: {amount!r}") from exc


# ---------------------------------------------------------------------------
# Parsed rows and groups
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Row:
    """One physical table row as matched in the normalized stream.

    ``debit`` is the (parenthesized) money-out column, ``credit`` the money-in
    column. ``text`` is the verbatim slice of the stream the row was matched
    from and exists only for diagnostics.
    """

    date: str
    title: str
    comment: str
    debit: str
    credit: str
    balance: str
    text: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.date, self.title)


@dataclass(frozen=True, slots=True)
class TransactionGroup:
    """Consecutive rows sharing ``(date, title)`` verbatim.

    ``comment`` is the first row's comment; each row keeps its own.
    """

    date: str
    title: str
    comment: str
    rows: tuple[Row, ...]

    @property
    def balance(self) -> str:
        # Balance after the last posting of the transaction
        return self.rows[-1].balance


class TitleShape(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    INVESTMENT = "investment"
    REPAYMENT = "repayment"
    ADJUSTMENT = "adjustment"
    PLAIN = "plain"


@dataclass(frozen=True, slots=True)
class Narration:
    """Header text derived from a transaction title."""

    narration: str
    comment: str
    shape: TitleShape


class AccountRole(Enum):
    ASSET = "asset"
    FUNDS = "funds"
    BANK = "bank"
    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True, slots=True)
class Posting:
    """A single ledger posting; ``sign`` is ``"-"`` or ``""``."""

    account: str
    sign: str
    amount: str
    comment: str = ""


# ---------------------------------------------------------------------------
# DTOs for the extracted-text cache
# ---------------------------------------------------------------------------


class TextCacheFile(BaseModel):
    """Top-level schema for a cached extraction JSON file."""

    model_config = ConfigDict(strict=True, extra="forbid")

    schema_version: int
    document_id: str
    settings_hash: str
    pages: list[str]


__all__ = [
    "AccountRole",
    "Narration",
    "Posting",
    "Row",
    "TextCacheFile",
    "TitleShape",
    "TransactionGroup",
    "is_zero",
]
