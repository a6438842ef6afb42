"""Render transactions as plain-text ledger entries.

Each transaction becomes::

    2024-01-10 * XXXX-00000000  ; 1 of 1 repayment
    <indent>assets:fundingsocieties
    <indent>assets:funds:fundingsocieties       -100.00 RM  ; Principal
    <blank line>

Posting amounts are right-aligned: the gap after the account name is
``line_width - indent_width - len(account) - len(sign) - len(amount) - 1``
spaces, so ``sign + amount`` and the single space before the commodity always
end at column ``line_width``. A negative gap is a configuration error
(:class:`~statement_ledger.errors.LayoutOverflow`), never truncated.
"""

from __future__ import annotations

from collections.abc import Sequence

from .config import LedgerConfig
from .errors import LayoutOverflow
from .models import AccountRole, Narration, Posting

COMMENT_SEP = "  ; "


def _with_comment(line: str, comment: str) -> str:
    return f"{line}{COMMENT_SEP}{comment}" if comment else line


def format_header(date: str, narration: Narration) -> str:
    return _with_comment(f"{date} * {narration.narration}", narration.comment)


def format_asset_line(config: LedgerConfig, balance: str | None = None) -> str:
    line = f"{config.indent}{config.account(AccountRole.ASSET)}"
    if balance is None:
        return line
    return _with_comment(line, f"balance: {balance} {config.commodity}")


def posting_pad(posting: Posting, config: LedgerConfig) -> int:
    return (
        config.line_width
        - config.indent_width
        - len(posting.account)
        - len(posting.sign)
        - len(posting.amount)
        - 1
    )


def format_posting(posting: Posting, config: LedgerConfig) -> str:
    pad = posting_pad(posting, config)
    if pad < 0:
        raise LayoutOverflow(
            account=posting.account,
            amount=posting.sign + posting.amount,
            line_width=config.line_width,
            pad=pad,
        )
    line = (
        f"{config.indent}{posting.account}{' ' * pad}"
        f"{posting.sign}{posting.amount} {config.commodity}"
    )
    return _with_comment(line, posting.comment)


def format_transaction(
    date: str,
    narration: Narration,
    postings: Sequence[Posting],
    config: LedgerConfig,
    *,
    balance: str | None = None,
) -> str:
    """Return the full text block for one transaction, ending with a blank line.

    Every line is rendered before the block is returned, so a layout error
    never produces a partial transaction.
    """

    lines = [
        format_header(date, narration),
        format_asset_line(config, balance if config.show_balance else None),
    ]
    lines.extend(format_posting(p, config) for p in postings)
    return "\n".join(lines) + "\n\n"


__all__ = [
    "COMMENT_SEP",
    "format_asset_line",
    "format_header",
    "format_posting",
    "format_transaction",
    "posting_pad",
]
