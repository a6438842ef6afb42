"""On-disk cache for text extracted from statement PDFs.

Running ``pdftotext`` page by page is the slowest step of a conversion, and
layout troubleshooting usually means converting the same document many times.
Extracted pages are therefore cached as JSON, keyed by the document content.

Cache layout (relative to the cache root, default: ``./.cache``)::

    <cache_root>/<document_id>.json

where ``document_id`` is the SHA-256 of the PDF bytes. Each file records the
hash of the extraction settings (pdftotext arguments); a file written with
different settings, an older schema, or unreadable JSON is a cache miss.

Atomicity: writes target ``.tmp`` first and then ``os.replace`` into place.
"""

from __future__ import annotations

import contextlib
import hashlib
import json
import os
import re
from collections.abc import Sequence
from os import PathLike
from pathlib import Path

from pydantic import ValidationError

from .logging_setup import get_logger
from .models import TextCacheFile

# Bump only when the on-disk JSON shape changes.
SCHEMA_VERSION: int = 1

_DOCUMENT_ID_RE = re.compile(r"^[a-f0-9]{64}$")

_logger = get_logger("statement_ledger.cache")


def _validate_document_id(document_id: str) -> str:
    """Ensure the identifier is a 64-char lowercase hex string (no path traversal)."""

    if not _DOCUMENT_ID_RE.fullmatch(document_id):
        raise ValueError(
            "Invalid document_id: must be 64-char lowercase hex (sha256 hexdigest). "
            "Use compute_document_id()."
        )
    return document_id


def get_cache_root() -> Path:
    """Return the cache root directory.

    Default: ``./.cache`` under the current working directory.
    Override: ``STATEMENT_LEDGER_CACHE_DIR`` (absolute or relative).
    """

    root = os.getenv("STATEMENT_LEDGER_CACHE_DIR")
    if root and root.strip():
        return Path(root).expanduser().resolve()
    return (Path.cwd() / ".cache").resolve()


def compute_document_id(pdf_path: str | PathLike[str]) -> str:
    """Return the SHA-256 hex digest of the file at ``pdf_path``."""

    h = hashlib.sha256()
    with open(pdf_path, "rb") as f:
        for chunk in iter(lambda: f.read(1 << 16), b""):
            h.update(chunk)
    return h.hexdigest()


def settings_hash(args: Sequence[str]) -> str:
    """Hash the extraction arguments so a change in flags invalidates the cache."""

    s = json.dumps({"pdftotext_args": list(args)}, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(s.encode("utf-8")).hexdigest()


def _cache_path(document_id: str) -> Path:
    document_id = _validate_document_id(document_id)
    root = get_cache_root()
    root.mkdir(parents=True, exist_ok=True)
    return root / f"{document_id}.json"


def read_cached_pages(document_id: str, *, settings: str) -> list[str] | None:
    """Return cached pages when present and valid; otherwise ``None``."""

    path = _cache_path(document_id)
    if not path.exists():
        _logger.debug("text_cache:miss document_id=%s", document_id)
        return None

    try:
        parsed = TextCacheFile.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError):
        _logger.debug(
            "text_cache:read_failed; extracting again document_id=%s path=%s",
            document_id,
            os.fspath(path),
            exc_info=True,
        )
        return None

    if (
        parsed.schema_version != SCHEMA_VERSION
        or parsed.document_id != document_id
        or parsed.settings_hash != settings
    ):
        _logger.debug("text_cache:stale document_id=%s", document_id)
        return None

    _logger.debug("text_cache:hit document_id=%s pages=%d", document_id, len(parsed.pages))
    return list(parsed.pages)


def write_cached_pages(document_id: str, *, settings: str, pages: Sequence[str]) -> None:
    path = _cache_path(document_id)
    tmp = path.with_suffix(path.suffix + ".tmp")

    payload = TextCacheFile(
        schema_version=SCHEMA_VERSION,
        document_id=document_id,
        settings_hash=settings,
        pages=list(pages),
    )

    try:
        tmp.write_text(payload.model_dump_json(), encoding="utf-8")
        os.replace(tmp, path)
    except Exception:
        with contextlib.suppress(FileNotFoundError):
            tmp.unlink()
        raise
    _logger.debug("text_cache:write document_id=%s pages=%d", document_id, len(pages))


__all__ = [
    "SCHEMA_VERSION",
    "compute_document_id",
    "get_cache_root",
    "read_cached_pages",
    "settings_hash",
    "write_cached_pages",
]
