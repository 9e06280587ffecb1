"""PDF loading — thin wrapper around the LangChain PDF loader."""

from __future__ import annotations

import logging
import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader

logger = logging.getLogger(__name__)


def pdf_bytes_to_text(data: bytes, max_chars: int = 2_000_000) -> str:
    """Extract the text of an in-memory PDF, one line per page.

    Pages are read lazily and extraction stops once *max_chars* have been
    collected, so very large uploads do not exhaust the request budget.
    """
    fd, path = tempfile.mkstemp(suffix=".pdf")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)

        parts: list[str] = []
        total = 0
        for page in PyPDFLoader(path).lazy_load():
            parts.append(page.page_content)
            total += len(page.page_content) + 1
            if total > max_chars:
                logger.warning("PDF text exceeds %d chars, truncating after %d pages", max_chars, len(parts))
                break
    finally:
        os.unlink(path)

    return "\n".join(parts) + "\n" if parts else ""
