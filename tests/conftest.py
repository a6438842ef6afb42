"""Pytest configuration for test isolation.

The text source caches extracted pages under ``./.cache`` by default, and the
configuration layer reads ``STATEMENT_LEDGER_*`` variables (possibly loaded
from a ``.env`` by the CLI). Both would leak state between tests, so every
test gets its own cache root and a clean set of variables.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from statement_ledger import logging_setup


@pytest.fixture(autouse=True)
def _isolate_cache_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Force a per-test cache root so tests don't share on-disk state."""

    cache_root = tmp_path / "cache"
    cache_root.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("STATEMENT_LEDGER_CACHE_DIR", os.fspath(cache_root))


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("STATEMENT_LEDGER_") and name != "STATEMENT_LEDGER_CACHE_DIR":
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Undo ``configure_logging`` calls made by CLI invocations."""

    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    logger = logging.getLogger("statement_ledger")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
