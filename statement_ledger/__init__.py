"""Public interface for the ``statement_ledger`` package.

Converts the transaction table of a Funding Societies statement into
plain-text double-entry ledger postings. This module only re-exports the
stable import surface; there is no runtime logic here.
"""

from .api import convert_pdf, iter_transactions, render_ledger, write_ledger
from .classifier import classify_title
from .config import RULE_SETS, LedgerConfig, PostingRule
from .errors import (
    BoundaryNotFound,
    ExtractionError,
    LayoutOverflow,
    StatementError,
    TrailingUnparsedText,
    UnrecognizedPosting,
    UnsupportedAdjustment,
)
from .extractor import iter_rows
from .formatter import format_transaction
from .grouper import group_rows
from .locator import locate_table
from .models import (
    AccountRole,
    Narration,
    Posting,
    Row,
    TitleShape,
    TransactionGroup,
)
from .normalizer import normalize
from .postings import generate_postings

__version__ = "0.3.0"

__all__ = [
    # API
    "convert_pdf",
    "iter_transactions",
    "render_ledger",
    "write_ledger",
    # Pipeline stages
    "locate_table",
    "normalize",
    "iter_rows",
    "group_rows",
    "classify_title",
    "generate_postings",
    "format_transaction",
    # Configuration
    "LedgerConfig",
    "PostingRule",
    "RULE_SETS",
    # Models / types
    "AccountRole",
    "Narration",
    "Posting",
    "Row",
    "TitleShape",
    "TransactionGroup",
    # Errors
    "StatementError",
    "BoundaryNotFound",
    "TrailingUnparsedText",
    "UnrecognizedPosting",
    "UnsupportedAdjustment",
    "LayoutOverflow",
    "ExtractionError",
]
