from __future__ import annotations

import textwrap

from statement_ledger.normalizer import (
    join_wrapped_lines,
    normalize,
    normalize_lines,
    reorder_split_rows,
)
from tests.helpers.statements import ROWS, SPLIT_ROWS


def test_join_wrapped_description() -> None:
    lines = [
        "2024-01-03 Auto Investment: invested 500 into",
        "ABCD-12345678 (500.00) 0.00 750.00",
        "2024-01-04 Deposit (0.00) 1.00 751.00",
    ]
    assert join_wrapped_lines(lines) == [
        "2024-01-03 Auto Investment: invested 500 into ABCD-12345678 (500.00) 0.00 750.00",
        "2024-01-04 Deposit (0.00) 1.00 751.00",
    ]


def test_join_leaves_complete_rows_alone() -> None:
    lines = [
        "2024-01-02 Deposit (0.00) 250.00 1,250.00",
        "2024-01-03 Deposit (0.00) 1.00 1,251.00",
    ]
    assert join_wrapped_lines(lines) == lines


def test_join_does_not_absorb_amount_lines() -> None:
    lines = ["Deposit", "(0.00)", "250.00", "1,250.00", "2024-01-02"]
    assert join_wrapped_lines(lines) == lines


def test_reorder_split_row_with_comment() -> None:
    lines = [
        "XXXX-00000000 (1 of 1 repayment) ||",
        "(0.00)",
        "100.00",
        "900.00",
        "Principal 2024-01-10",
    ]
    assert reorder_split_rows(lines) == [
        "2024-01-10 XXXX-00000000 (1 of 1 repayment) || Principal (0.00) 100.00 900.00"
    ]


def test_reorder_split_row_without_comment() -> None:
    lines = ["Deposit", "(0.00)", "250.00", "1,250.00", "2024-01-02"]
    assert reorder_split_rows(lines) == ["2024-01-02 Deposit (0.00) 250.00 1,250.00"]


def test_reorder_adds_separator_when_description_lacks_it() -> None:
    lines = ["XXXX-1 (2 of 6 repayment)", "(0.00)", "5.00", "10.00", "Interest 2024-02-01"]
    assert reorder_split_rows(lines) == [
        "2024-02-01 XXXX-1 (2 of 6 repayment) || Interest (0.00) 5.00 10.00"
    ]


def test_reorder_ignores_canonical_rows() -> None:
    lines = ROWS.splitlines()
    assert reorder_split_rows(lines) == lines


def test_normalize_lines_drops_blank_lines_and_strips() -> None:
    region = "\n  2024-01-02 Deposit (0.00) 250.00 1,250.00  \n\n"
    assert normalize_lines(region) == ["2024-01-02 Deposit (0.00) 250.00 1,250.00"]


def test_split_layout_normalizes_to_canonical_stream() -> None:
    assert normalize(SPLIT_ROWS) == normalize(ROWS)


def test_normalize_collapses_to_single_line() -> None:
    region = textwrap.dedent(
        """\
        2024-01-02 Deposit (0.00) 250.00 1,250.00
        2024-01-03 Deposit (0.00) 1.00 1,251.00
        """
    )
    stream = normalize(region)
    assert "\n" not in stream
    assert stream == (
        "2024-01-02 Deposit (0.00) 250.00 1,250.00 2024-01-03 Deposit (0.00) 1.00 1,251.00"
    )


def test_custom_rule_sequence() -> None:
    lines = ["Deposit", "(0.00)", "250.00", "1,250.00", "2024-01-02"]
    assert normalize("\n".join(lines), rules=()) == " ".join(lines)
