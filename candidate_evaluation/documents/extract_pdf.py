"""Local PDF text extraction with PyMuPDF.

Candidate PDFs are stored on local disk by the upload API, so the text layer
is read directly instead of sending the file to a model.

A document that opens fine but has no text layer (a scanned CV) yields an
empty string. A missing, corrupt or non-PDF file raises
DocumentExtractionError; it is never reported as empty text.
"""

import asyncio
from pathlib import Path

import fitz  # pymupdf

from candidate_evaluation.errors import DocumentExtractionError


def extract_pdf_text(path: str | Path) -> str:
    """Return the concatenated text of every page, pages separated by newlines.

    Raises:
        DocumentExtractionError: the file is missing or is not a readable PDF
    """
    path_str = str(path)
    if not Path(path_str).is_file():
        raise DocumentExtractionError(path_str, "file does not exist")

    try:
        doc = fitz.open(path_str, filetype="pdf")
    except Exception as exc:
        raise DocumentExtractionError(path_str, f"Invalid PDF: {exc}") from exc

    try:
        if doc.page_count == 0:
            raise DocumentExtractionError(path_str, "PDF has 0 pages")
        pages = [page.get_text("text") for page in doc]
    except DocumentExtractionError:
        raise
    except Exception as exc:
        raise DocumentExtractionError(path_str, f"Failed to read text: {exc}") from exc
    finally:
        doc.close()

    return "\n".join(text.strip() for text in pages).strip()


class PyMuPDFTextExtractor:
    """TextExtractor backed by extract_pdf_text."""

    def extract(self, path: str) -> str:
        return extract_pdf_text(path)

    async def aextract(self, path: str) -> str:
        # PyMuPDF is blocking; keep the event loop free for the sibling extraction
        return await asyncio.to_thread(extract_pdf_text, path)
