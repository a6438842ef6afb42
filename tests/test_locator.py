from __future__ import annotations

import pytest

from statement_ledger.errors import BoundaryNotFound
from statement_ledger.locator import as_text, locate_table
from tests.helpers.statements import STATEMENT


def test_single_line_header() -> None:
    text = "Summary\nDate Description Balance (RM)\n2024-01-02 Deposit (0.00) 1.00 1.00\nImportant!\n"
    assert locate_table(text) == "2024-01-02 Deposit (0.00) 1.00 1.00\n"


def test_split_header() -> None:
    region = locate_table(STATEMENT)
    assert region.startswith("2024-01-02 Deposit")
    assert region.rstrip().endswith("561.25")
    assert "Investor ID" not in region
    assert "Please review" not in region


def test_header_commodity_follows_config() -> None:
    text = "Balance (SGD)\n2024-01-02 Deposit (0.00) 1.00 1.00\nImportant!"
    assert locate_table(text, commodity="SGD").startswith("2024-01-02")
    with pytest.raises(BoundaryNotFound):
        locate_table(text)


def test_uses_last_end_marker() -> None:
    text = "Balance (RM)\nrow one\nImportant! note\nrow two\nImportant!\nfooter"
    assert locate_table(text) == "row one\nImportant! note\nrow two\n"


def test_missing_start_marker() -> None:
    with pytest.raises(BoundaryNotFound) as ei:
        locate_table("2024-01-02 Deposit (0.00) 1.00 1.00\nImportant!\n")
    assert ei.value.marker == "start"


def test_missing_end_marker() -> None:
    with pytest.raises(BoundaryNotFound) as ei:
        locate_table("Balance (RM)\n2024-01-02 Deposit (0.00) 1.00 1.00\n")
    assert ei.value.marker == "end"


def test_end_marker_before_start_marker() -> None:
    with pytest.raises(BoundaryNotFound) as ei:
        locate_table("Important!\nBalance (RM)\n2024-01-02 Deposit (0.00) 1.00 1.00\n")
    assert ei.value.marker == "end"


def test_empty_region_is_valid() -> None:
    assert locate_table("Balance\n(RM)\nImportant!\n").strip() == ""


def test_accepts_line_sequence() -> None:
    lines = ["Balance\n", "(RM)\n", "2024-01-02 Deposit (0.00) 1.00 1.00\n", "Important!\n"]
    assert as_text(lines) == "Balance\n(RM)\n2024-01-02 Deposit (0.00) 1.00 1.00\nImportant!"
    assert locate_table(lines) == "2024-01-02 Deposit (0.00) 1.00 1.00\n"
