from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from pypdf import PdfReader

logger = logging.getLogger("shortlist.extract")


def extract_text(pdf_path: Union[str, Path]) -> str:
    """Full text of a PDF: each page's words joined by single spaces, one trailing space per page."""
    reader = PdfReader(str(pdf_path))
    chunks = []
    for page in reader.pages:
        # extract_text() can return None; guard it
        t = page.extract_text() or ""
        chunks.append(" ".join(t.split()) + " ")
    text = "".join(chunks)
    logger.debug("Extracted %d chars from %d page(s) of %s", len(text), len(reader.pages), pdf_path)
    return text
