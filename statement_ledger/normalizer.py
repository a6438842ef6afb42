"""Repair line-wrapping damage in the table region and flatten it to one stream.

Statement renderers change layout between document-format versions, so
instead of one brittle pattern the region goes through a small, ordered list
of line rewrite rules (``REWRITE_RULES``). Each rule takes and returns a list
of stripped, non-blank lines and is independently testable:

``join_wrapped_lines``
    A description wrapped by the renderer is merged back: a line that follows
    an unfinished description and does not itself look like an amount (or the
    start of a new row) is appended to it with a single space.

``reorder_split_rows``
    Some layouts emit one row as five chunks in a different order::

        <description>
        (<debit>)
        <credit>
        <balance>
        [<comment>] <YYYY-MM-DD>

    The rule rewrites the window back to the canonical single-line order
    ``<date> <description>[ || <comment>] (<debit>) <credit> <balance>``.

Finally all lines are joined with single spaces, producing the stream read by
:func:`statement_ledger.extractor.iter_rows`.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import TypeAlias

from .extractor import AMOUNT_TOKEN, DATE
from .logging_setup import get_logger

RewriteRule: TypeAlias = Callable[[list[str]], list[str]]

_AMOUNT_LINE_RE = re.compile(rf"^{AMOUNT_TOKEN}$")
_ENDS_WITH_AMOUNT_RE = re.compile(rf"(?:^|\s){AMOUNT_TOKEN}$")
_LEADING_DATE_RE = re.compile(rf"^{DATE}(?:\s|$)")
_TRAILING_DATE_RE = re.compile(rf"^(?:(?P<comment>.*?)\s+)?(?P<date>{DATE})$")

_logger = get_logger("statement_ledger.normalizer")


def _is_amount(line: str) -> bool:
    return _AMOUNT_LINE_RE.match(line) is not None


def _is_open_description(line: str) -> bool:
    # Still waiting for its amounts (single-line rows) or its date (split rows)
    return not (
        _is_amount(line)
        or _ENDS_WITH_AMOUNT_RE.search(line)
        or _TRAILING_DATE_RE.match(line)
    )


def _is_continuation(line: str) -> bool:
    return not (_is_amount(line) or _LEADING_DATE_RE.match(line))


def join_wrapped_lines(lines: list[str]) -> list[str]:
    out: list[str] = []
    for line in lines:
        if out and _is_open_description(out[-1]) and _is_continuation(line):
            out[-1] = f"{out[-1]} {line}"
        else:
            out.append(line)
    return out


def _split_row(window: Sequence[str]) -> str | None:
    """Return the canonical single-line form of a five-chunk row, else ``None``."""

    desc, debit, credit, balance, trailer = window
    if _is_amount(desc) or _LEADING_DATE_RE.match(desc):
        return None
    if not (_is_amount(debit) and _is_amount(credit) and _is_amount(balance)):
        return None
    m = _TRAILING_DATE_RE.match(trailer)
    if m is None:
        return None

    head = f"{m['date']} {desc}"
    comment = (m["comment"] or "").strip()
    if comment:
        head = f"{head} {comment}" if desc.endswith("||") else f"{head} || {comment}"
    return f"{head} {debit} {credit} {balance}"


def reorder_split_rows(lines: list[str]) -> list[str]:
    out: list[str] = []
    i = 0
    while i < len(lines):
        rewritten = _split_row(lines[i : i + 5]) if i + 5 <= len(lines) else None
        if rewritten is None:
            out.append(lines[i])
            i += 1
            continue
        out.append(rewritten)
        i += 5
    return out


REWRITE_RULES: tuple[RewriteRule, ...] = (join_wrapped_lines, reorder_split_rows)


def normalize_lines(region: str, rules: Sequence[RewriteRule] = REWRITE_RULES) -> list[str]:
    """Apply ``rules`` in order to the stripped, non-blank lines of ``region``."""

    lines = [ln.strip() for ln in region.splitlines()]
    lines = [ln for ln in lines if ln]
    for rule in rules:
        before = len(lines)
        lines = rule(lines)
        if len(lines) != before:
            _logger.debug("rewrite %s: %d -> %d lines", rule.__name__, before, len(lines))
    return lines


def normalize(region: str, rules: Sequence[RewriteRule] = REWRITE_RULES) -> str:
    """Return ``region`` repaired and collapsed into a single-line stream."""

    return " ".join(normalize_lines(region, rules))


__all__ = [
    "REWRITE_RULES",
    "RewriteRule",
    "join_wrapped_lines",
    "normalize",
    "normalize_lines",
    "reorder_split_rows",
]
