"""Text source: statement PDF -> decoded text via poppler's ``pdftotext``.

Pages are extracted independently (``pdftotext -f N -l N``) on a small thread
pool so large statements convert quickly; results are stitched back in page
order, so the parsing core always sees the document's own page sequence.
Extracted pages are cached on disk (see :mod:`statement_ledger.cache`).

Requires the ``pdftotext`` and ``pdfinfo`` binaries (poppler-utils) on PATH.
"""

from __future__ import annotations

import re
import subprocess
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from os import PathLike
from pathlib import Path

from . import cache
from .errors import ExtractionError
from .logging_setup import get_logger

PDFTOTEXT = "pdftotext"
PDFINFO = "pdfinfo"
# -raw keeps content-stream order, which puts each table row on one line
PDFTOTEXT_ARGS: tuple[str, ...] = ("-nopgbrk", "-raw", "-enc", "UTF-8")

_PAGES_RE = re.compile(r"^Pages:\s+(\d+)\s*$", re.MULTILINE)

_logger = get_logger("statement_ledger.source")


def _run(args: Sequence[str]) -> str:
    try:
        proc = subprocess.run(list(args), capture_output=True, check=False)
    except FileNotFoundError as exc:
        raise ExtractionError(
            f"{args[0]} not found on PATH. Install poppler-utils."
        ) from exc
    if proc.returncode != 0:
        stderr = proc.stderr.decode("utf-8", errors="replace").strip()
        raise ExtractionError(f"{args[0]} failed (code {proc.returncode}): {stderr}")
    try:
        return proc.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ExtractionError(f"{args[0]} produced invalid UTF-8: {exc}") from exc


def page_count(pdf_path: str | PathLike[str]) -> int:
    out = _run([PDFINFO, str(pdf_path)])
    m = _PAGES_RE.search(out)
    if m is None:
        raise ExtractionError(f"{PDFINFO} did not report a page count for {pdf_path}")
    return int(m.group(1))


def extract_page(pdf_path: str | PathLike[str], page: int) -> str:
    """Return the text of one 1-based ``page``."""

    text = _run([PDFTOTEXT, *PDFTOTEXT_ARGS, "-f", str(page), "-l", str(page), str(pdf_path), "-"])
    _logger.debug("extracted page=%d chars=%d", page, len(text))
    return text


def _map_pages(
    pages: Sequence[int], extract: Callable[[int], str], *, jobs: int
) -> list[str]:
    """Run ``extract`` over ``pages`` with at most ``jobs`` in flight, in page order.

    The first failure cancels pages that have not started and is re-raised.
    """

    if not isinstance(jobs, int) or jobs < 1:
        raise ValueError("jobs must be a positive integer")
    if jobs == 1 or len(pages) <= 1:
        return [extract(p) for p in pages]

    results: dict[int, str] = {}
    pending = iter(enumerate(pages))
    future_to_idx: dict[Future[str], int] = {}

    def _submit(pool: ThreadPoolExecutor) -> bool:
        try:
            idx, page = next(pending)
        except StopIteration:
            return False
        future_to_idx[pool.submit(extract, page)] = idx
        return True

    with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="sl-page") as pool:
        for _ in range(jobs):
            if not _submit(pool):
                break
        while future_to_idx:
            done, _ = wait(set(future_to_idx), return_when=FIRST_COMPLETED)
            for fut in done:
                idx = future_to_idx.pop(fut)
                try:
                    results[idx] = fut.result()
                except Exception:
                    pool.shutdown(wait=False, cancel_futures=True)
                    raise
            for _ in range(len(done)):
                if not _submit(pool):
                    break

    return [results[i] for i in range(len(pages))]


def extract_pages(pdf_path: str | PathLike[str], *, jobs: int = 4) -> list[str]:
    n = page_count(pdf_path)
    _logger.debug("extracting pages=%d jobs=%d path=%s", n, jobs, pdf_path)
    return _map_pages(range(1, n + 1), lambda p: extract_page(pdf_path, p), jobs=jobs)


def extract_text(
    pdf_path: str | PathLike[str], *, jobs: int = 4, use_cache: bool = True
) -> str:
    """Return the whole statement text, pages joined with ``\\n`` in page order."""

    path = Path(pdf_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    settings = cache.settings_hash(PDFTOTEXT_ARGS)
    document_id = cache.compute_document_id(path) if use_cache else None

    pages = None
    if document_id is not None:
        try:
            pages = cache.read_cached_pages(document_id, settings=settings)
        except OSError:
            # Unusable cache root; extraction does not depend on it
            _logger.debug("text_cache:read_failed document_id=%s", document_id, exc_info=True)
    if pages is None:
        pages = extract_pages(path, jobs=jobs)
        if document_id is not None:
            try:
                cache.write_cached_pages(document_id, settings=settings, pages=pages)
            except OSError:
                _logger.debug(
                    "text_cache:write_failed document_id=%s", document_id, exc_info=True
                )

    return "\n".join(page.rstrip("\n") for page in pages)


def read_text_file(path: str | PathLike[str]) -> str:
    """Read already-extracted statement text (UTF-8)."""

    return Path(path).read_text(encoding="utf-8")


__all__ = [
    "PDFTOTEXT_ARGS",
    "extract_page",
    "extract_pages",
    "extract_text",
    "page_count",
    "read_text_file",
]
