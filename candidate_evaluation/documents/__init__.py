"""Candidate document access: id resolution and PDF text extraction."""

from candidate_evaluation.documents.extract_pdf import PyMuPDFTextExtractor, extract_pdf_text
from candidate_evaluation.documents.lookup import DocumentReference, SqlDocumentLookup

__all__ = [
    "DocumentReference",
    "SqlDocumentLookup",
    "PyMuPDFTextExtractor",
    "extract_pdf_text",
]
