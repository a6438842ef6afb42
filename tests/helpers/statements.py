"""Statement text fixtures shaped like ``pdftotext -raw`` output."""

from __future__ import annotations

import textwrap

PREAMBLE = textwrap.dedent(
    """\
    Funding Societies Malaysia
    Statement of Account
    Investor ID: 0012345
    Period: 2024-01-01 to 2024-01-31
    Date Description Debit (RM) Credit (RM) Balance
    (RM)
    """
)

EPILOGUE = textwrap.dedent(
    """\
    Important!
    Please review this statement and notify us of any discrepancy
    within 14 days. Page 1 of 1
    """
)

ROWS = textwrap.dedent(
    """\
    2024-01-02 Deposit (0.00) 250.00 1,250.00
    2024-01-03 Auto Investment: invested 500 into ABCD-12345678 (500.00) 0.00 750.00
    2024-01-10 XXXX-00000000 (1 of 1 repayment) || Principal (0.00) 100.00 850.00
    2024-01-10 XXXX-00000000 (1 of 1 repayment) || Interest (0.00) 12.50 862.50
    2024-01-10 XXXX-00000000 (1 of 1 repayment) || Service Fee (1.25) 0.00 861.25
    2024-01-15 Withdrawal to bank account (300.00) 0.00 561.25
    """
)

STATEMENT = PREAMBLE + ROWS + EPILOGUE

# Same rows as ROWS, rendered by the layout that splits each row into five
# chunks and the header into two lines.
SPLIT_ROWS = textwrap.dedent(
    """\
    Deposit
    (0.00)
    250.00
    1,250.00
    2024-01-02
    Auto Investment: invested 500 into
    ABCD-12345678
    (500.00)
    0.00
    750.00
    2024-01-03
    XXXX-00000000 (1 of 1
    repayment) ||
    (0.00)
    100.00
    850.00
    Principal 2024-01-10
    XXXX-00000000 (1 of 1 repayment) ||
    (0.00)
    12.50
    862.50
    Interest 2024-01-10
    XXXX-00000000 (1 of 1 repayment) ||
    (1.25)
    0.00
    861.25
    Service Fee 2024-01-10
    Withdrawal to bank account
    (300.00)
    0.00
    561.25
    2024-01-15
    """
)

SPLIT_STATEMENT = PREAMBLE + SPLIT_ROWS + EPILOGUE

FUNDS = "\tassets:funds:fundingsocieties"
BANK = "\tassets:bank:pbe"
INCOME = "\tincome:interest"
EXPENSE = "\texpenses:service"
ASSET = "\tassets:fundingsocieties"

# Default layout: tab indent (8 columns), line width 62, commodity RM.
EXPECTED_LEDGER = (
    "2024-01-02 * Funding Societies\n"
    f"{ASSET}\n"
    f"{BANK}{' ' * 31}-250.00 RM  ; Deposit\n"
    "\n"
    "2024-01-03 * ABCD-12345678  ; Auto Investment\n"
    f"{ASSET}\n"
    f"{FUNDS}{' ' * 18}500.00 RM  ; Auto Investment\n"
    "\n"
    "2024-01-10 * XXXX-00000000  ; 1 of 1 repayment\n"
    f"{ASSET}\n"
    f"{FUNDS}{' ' * 17}-100.00 RM  ; Principal\n"
    f"{INCOME}{' ' * 32}-12.50 RM  ; Interest\n"
    f"{EXPENSE}{' ' * 33}1.25 RM  ; Service Fee\n"
    "\n"
    "2024-01-15 * Funding Societies  ; Withdrawal to bank account\n"
    f"{ASSET}\n"
    f"{BANK}{' ' * 32}300.00 RM  ; Withdrawal\n"
    "\n"
)


def statement(rows: str) -> str:
    """Wrap table ``rows`` in the usual statement header and footer."""

    return PREAMBLE + textwrap.dedent(rows) + EPILOGUE
