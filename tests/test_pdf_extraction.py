"""Tests for local PDF text extraction."""

import asyncio

import fitz
import pytest

from candidate_evaluation.documents.extract_pdf import PyMuPDFTextExtractor, extract_pdf_text
from candidate_evaluation.errors import DocumentExtractionError


def write_pdf(path, pages: list[str]) -> str:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    doc.save(str(path))
    doc.close()
    return str(path)


class TestExtractPdfText:
    """Tests for extract_pdf_text."""

    def test_extracts_text_from_every_page(self, tmp_path):
        path = write_pdf(tmp_path / "cv.pdf", ["Jane Doe Backend Engineer", "Python PostgreSQL"])

        text = extract_pdf_text(path)

        assert "Jane Doe Backend Engineer" in text
        assert "Python PostgreSQL" in text
        assert text.index("Jane Doe") < text.index("Python PostgreSQL")

    def test_page_without_text_layer_is_empty_string(self, tmp_path):
        """A scanned-style PDF opens fine and yields empty text, not an error."""
        path = write_pdf(tmp_path / "scan.pdf", [""])

        assert extract_pdf_text(path) == ""

    def test_missing_file_raises(self, tmp_path):
        missing = tmp_path / "nope.pdf"

        with pytest.raises(DocumentExtractionError, match="nope.pdf"):
            extract_pdf_text(missing)

    def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"this is not a pdf at all")

        with pytest.raises(DocumentExtractionError, match="Could not process PDF file"):
            extract_pdf_text(path)


class TestPyMuPDFTextExtractor:
    """Tests for the async extractor wrapper."""

    def test_aextract_matches_sync_extract(self, tmp_path):
        path = write_pdf(tmp_path / "report.pdf", ["Case study: evaluation pipeline"])
        extractor = PyMuPDFTextExtractor()

        assert asyncio.run(extractor.aextract(path)) == extractor.extract(path)

    def test_aextract_propagates_errors(self, tmp_path):
        extractor = PyMuPDFTextExtractor()

        with pytest.raises(DocumentExtractionError):
            asyncio.run(extractor.aextract(str(tmp_path / "missing.pdf")))
