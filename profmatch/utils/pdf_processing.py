"""
PDF processing utilities for reading exported reports back.

Helper functions:
    page_count: Quick page count without full extraction.
    extract_text: Plain text of every page, in page order.
    extract_link_uris: URIs of all clickable link annotations.
    normalize_for_matching: Text normalization for fuzzy matching.
"""

from pathlib import Path
from typing import List, Optional

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def extract_text(pdf_path: Path) -> List[str]:
    """
    Extract plain text from each page of a PDF.

    Args:
        pdf_path: Path to PDF file

    Returns:
        One string per page (empty string for pages without text)
    """
    with pdfplumber.open(str(pdf_path)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


def extract_link_uris(pdf_path: Path) -> List[str]:
    """
    Collect the target URI of every link annotation in a PDF.

    Args:
        pdf_path: Path to PDF file

    Returns:
        URIs in page order (duplicates preserved)
    """
    reader = PdfReader(str(pdf_path))
    uris = []

    for page in reader.pages:
        annotations = page.get("/Annots") or []
        for annotation_ref in annotations:
            annotation = annotation_ref.get_object()
            if annotation.get("/Subtype") != "/Link":
                continue
            action = annotation.get("/A")
            if action is None:
                continue
            action = action.get_object()
            uri = action.get("/URI")
            if uri is not None:
                uris.append(str(uri))

    return uris


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())
