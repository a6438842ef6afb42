"""Turn each row of a transaction group into a ledger posting.

Title shapes with fixed semantics are handled first (investment, deposit,
withdrawal, adjustment). Every other row is dispatched on its own comment
through the versioned rule table in :mod:`statement_ledger.config`; new
comment categories are additions to that table, not new branches here.

Polarity for table-dispatched rows: credit-only rows post with a ``-`` sign
and the credit amount, debit-only rows ("reverts") post unsigned with the
debit amount. A row with both sides zero or both non-zero, or with a comment
missing from the table, raises :class:`UnrecognizedPosting`. The generator
never guesses a category.
"""

from __future__ import annotations

from .classifier import ADJUSTMENT_LABEL, DEPOSIT_TITLE, WITHDRAWAL_PREFIX
from .config import LedgerConfig
from .errors import UnrecognizedPosting, UnsupportedAdjustment
from .models import AccountRole, Narration, Posting, Row, TitleShape, TransactionGroup, is_zero


def _dispatch(row: Row, config: LedgerConfig) -> Posting:
    rule = config.rules.get(row.comment)
    if rule is None:
        raise UnrecognizedPosting(row, f"no rule for comment {row.comment!r}")

    debit_zero = is_zero(row.debit)
    credit_zero = is_zero(row.credit)
    if debit_zero and not credit_zero:
        role, sign, amount = rule.credit_role, "-", row.credit
    elif credit_zero and not debit_zero:
        role, sign, amount = rule.debit_role, "", row.debit
    else:
        which = "both zero" if debit_zero else "both non-zero"
        raise UnrecognizedPosting(row, f"debit and credit are {which}")

    if role is None:
        side = "credit" if sign else "debit"
        raise UnrecognizedPosting(
            row, f"{side} side not supported for {row.comment!r} under {config.rules_version!r} rules"
        )
    return Posting(account=config.account(role), sign=sign, amount=amount, comment=row.comment)


def posting_for_row(row: Row, narration: Narration, config: LedgerConfig) -> Posting:
    """Return the :class:`Posting` for one ``row`` of a group classified as ``narration``."""

    shape = narration.shape
    if shape is TitleShape.INVESTMENT and is_zero(row.credit):
        return Posting(
            account=config.account(AccountRole.FUNDS),
            sign="",
            amount=row.debit,
            comment=narration.comment,
        )
    if shape is TitleShape.DEPOSIT:
        return Posting(
            account=config.account(AccountRole.BANK),
            sign="-",
            amount=row.credit,
            comment=row.comment or DEPOSIT_TITLE,
        )
    if shape is TitleShape.WITHDRAWAL:
        return Posting(
            account=config.account(AccountRole.BANK),
            sign="",
            amount=row.debit,
            comment=row.comment or WITHDRAWAL_PREFIX,
        )
    if shape is TitleShape.ADJUSTMENT:
        if not is_zero(row.debit):
            raise UnsupportedAdjustment(row)
        return Posting(
            account=config.account(AccountRole.FUNDS),
            sign="-",
            amount=row.credit,
            comment=ADJUSTMENT_LABEL,
        )
    return _dispatch(row, config)


def generate_postings(
    group: TransactionGroup, narration: Narration, config: LedgerConfig
) -> list[Posting]:
    """Return one posting per row of ``group``, in row order.

    All rows are classified before anything is returned, so a failing row
    never leaves a half-built transaction behind.
    """

    return [posting_for_row(row, narration, config) for row in group.rows]


__all__ = ["generate_postings", "posting_for_row"]
