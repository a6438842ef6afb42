from __future__ import annotations

import pytest

from statement_ledger.errors import TrailingUnparsedText
from statement_ledger.extractor import extract_rows, iter_rows
from statement_ledger.models import Row
from statement_ledger.normalizer import normalize
from tests.helpers.statements import ROWS


def test_row_with_comment_and_irregular_spacing() -> None:
    stream = "2024-01-10  XXXX-00000000 (1 of 1 repayment) || Principal  (0.00)  100.00  900.00"
    (row,) = list(iter_rows(stream))
    assert row == Row(
        date="2024-01-10",
        title="XXXX-00000000 (1 of 1 repayment)",
        comment="Principal",
        debit="0.00",
        credit="100.00",
        balance="900.00",
        text=stream,
    )


def test_row_without_comment() -> None:
    (row,) = list(iter_rows("2024-01-02 Deposit (0.00) 250.00 1,250.00"))
    assert row.title == "Deposit"
    assert row.comment == ""
    assert (row.debit, row.credit, row.balance) == ("0.00", "250.00", "1,250.00")


def test_parentheses_are_stripped_from_every_column() -> None:
    (row,) = list(iter_rows("2024-01-02 Fee (1.00) (0.00) (5.00)"))
    assert (row.debit, row.credit, row.balance) == ("1.00", "0.00", "5.00")


def test_titles_with_spaces_and_digits() -> None:
    (row,) = list(
        iter_rows("2024-01-03 Auto Investment: invested 500 into ABCD-12345678 (500.00) 0.00 750.00")
    )
    assert row.title == "Auto Investment: invested 500 into ABCD-12345678"
    assert row.debit == "500.00"


def test_rows_in_order() -> None:
    rows = extract_rows(normalize(ROWS))
    assert [r.date for r in rows] == [
        "2024-01-02",
        "2024-01-03",
        "2024-01-10",
        "2024-01-10",
        "2024-01-10",
        "2024-01-15",
    ]
    assert [r.comment for r in rows[2:5]] == ["Principal", "Interest", "Service Fee"]


def test_empty_stream_yields_nothing() -> None:
    assert extract_rows("") == []
    assert extract_rows("   ") == []


def test_trailing_text_is_an_error_after_good_rows() -> None:
    stream = "2024-01-02 Deposit (0.00) 250.00 1,250.00 Page 1 of 2"
    seen: list[Row] = []
    with pytest.raises(TrailingUnparsedText) as ei:
        for row in iter_rows(stream):
            seen.append(row)
    assert [r.title for r in seen] == ["Deposit"]
    assert ei.value.rows_parsed == 1
    assert ei.value.remaining == "Page 1 of 2"
    assert ei.value.offset == stream.index("Page")


def test_row_missing_an_amount_does_not_swallow_the_next_row() -> None:
    stream = (
        "2024-01-02 Deposit (0.00) 250.00 "
        "2024-01-03 Deposit (0.00) 1.00 251.00"
    )
    with pytest.raises(TrailingUnparsedText) as ei:
        extract_rows(stream)
    assert ei.value.rows_parsed == 0
    assert ei.value.offset == 0
