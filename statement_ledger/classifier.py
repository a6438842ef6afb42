"""Derive a transaction's narration and header comment from its title.

Titles come in a handful of documented shapes. ``TITLE_RULES`` is an ordered
table; the first rule whose predicate accepts the title wins:

==============================================  =========================  ==============================
Title shape                                     Narration                  Comment
==============================================  =========================  ==============================
``Deposit``                                     institution label          the row's own comment
``Withdrawal...``                               institution label          the title
``...invested ... into <NOTE>``                 text after last ``into ``  text before first ``": "``
``<NOTE> (N of M repayment)``                   ``<NOTE>``, no ``Revert``  ``N of M repayment``
``Adjustment for investment to ...``            the title                  ``Adjustment``
anything else                                   title, no ``Revert``       (empty)
==============================================  =========================  ==============================
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .models import Narration, TitleShape

DEPOSIT_TITLE = "Deposit"
WITHDRAWAL_PREFIX = "Withdrawal"
INVESTED_TOKEN = "invested"
ADJUSTMENT_PREFIX = "Adjustment for investment to "
ADJUSTMENT_LABEL = "Adjustment"
REVERT_PREFIX = "Revert "

_REPAYMENT_SUFFIX_RE = re.compile(r" \((?P<suffix>\d+ of \d+ repayment)\)$")


def _strip_revert(title: str) -> str:
    return title.removeprefix(REVERT_PREFIX)


@dataclass(frozen=True, slots=True)
class _TitleRule:
    shape: TitleShape
    matches: Callable[[str], bool]
    derive: Callable[[str, str, str], tuple[str, str]]  # (title, row_comment, institution)


def _investment(title: str, _comment: str, _institution: str) -> tuple[str, str]:
    narration = title.rsplit("into ", 1)[-1]
    head, sep, _ = title.partition(": ")
    return narration, head if sep else ""


def _repayment(title: str, _comment: str, _institution: str) -> tuple[str, str]:
    m = _REPAYMENT_SUFFIX_RE.search(title)
    assert m is not None  # guarded by the rule predicate
    return _strip_revert(title[: m.start()]), m["suffix"]


TITLE_RULES: tuple[_TitleRule, ...] = (
    _TitleRule(
        TitleShape.DEPOSIT,
        lambda t: t == DEPOSIT_TITLE,
        lambda t, c, inst: (inst, c),
    ),
    _TitleRule(
        TitleShape.WITHDRAWAL,
        lambda t: t.startswith(WITHDRAWAL_PREFIX),
        lambda t, c, inst: (inst, t),
    ),
    _TitleRule(
        TitleShape.INVESTMENT,
        lambda t: INVESTED_TOKEN in t,
        _investment,
    ),
    _TitleRule(
        TitleShape.REPAYMENT,
        lambda t: _REPAYMENT_SUFFIX_RE.search(t) is not None,
        _repayment,
    ),
    _TitleRule(
        TitleShape.ADJUSTMENT,
        lambda t: t.startswith(ADJUSTMENT_PREFIX),
        lambda t, c, inst: (t, ADJUSTMENT_LABEL),
    ),
)


def classify_title(title: str, *, row_comment: str = "", institution: str) -> Narration:
    """Return the :class:`Narration` for ``title`` (first matching rule wins)."""

    for rule in TITLE_RULES:
        if rule.matches(title):
            narration, comment = rule.derive(title, row_comment, institution)
            return Narration(narration=narration, comment=comment, shape=rule.shape)
    return Narration(narration=_strip_revert(title), comment="", shape=TitleShape.PLAIN)


__all__ = [
    "ADJUSTMENT_LABEL",
    "ADJUSTMENT_PREFIX",
    "DEPOSIT_TITLE",
    "TITLE_RULES",
    "WITHDRAWAL_PREFIX",
    "classify_title",
]
