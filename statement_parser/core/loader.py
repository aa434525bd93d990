"""
PDF loading and text extraction using pdfplumber.
"""
import io
import pdfplumber
from pathlib import Path
from typing import List, Union
import logging

from ..errors import ExtractionError

logger = logging.getLogger(__name__)


# pdfplumber leaves ligatures from some statement fonts in the text layer
LIGATURES = {
    'ﬁ': 'fi',
    'ﬂ': 'fl',
    'ﬀ': 'ff',
    'ﬃ': 'ffi',
    'ﬄ': 'ffl',
    'ﬆ': 'st',
    'ﬅ': 'st'
}


class PDFLoader:
    """Handles PDF loading and page text extraction."""

    def __init__(self, source: Union[bytes, Path]):
        self.source = source
        self._pdf = None
        self._pages: List[str] = []

    def load(self) -> List[str]:
        """Open the PDF and return the text of every page."""
        if self._pages:
            return self._pages

        try:
            if isinstance(self.source, bytes):
                self._pdf = pdfplumber.open(io.BytesIO(self.source))
            else:
                self._pdf = pdfplumber.open(self.source)
            logger.info(f"Loaded PDF with {len(self._pdf.pages)} pages")

            for i, page in enumerate(self._pdf.pages, 1):
                text = self._normalize_text(page.extract_text() or "")
                self._pages.append(text)
                logger.debug(f"Page {i}: {len(text.splitlines())} lines extracted")

            return self._pages

        except Exception as e:
            logger.error(f"Error loading PDF: {e}")
            raise ExtractionError(f"Could not extract text from PDF: {e}") from e

    def _normalize_text(self, text: str) -> str:
        """Replace typographic ligatures with plain letters."""
        for ligature, replacement in LIGATURES.items():
            text = text.replace(ligature, replacement)
        return text

    def close(self):
        """Close the PDF file."""
        if self._pdf:
            self._pdf.close()
            self._pdf = None


def extract_text(document: Union[bytes, Path]) -> str:
    """
    Convert a PDF document to plain text, one line per text row.

    Args:
        document: Raw PDF bytes or a path to a PDF file

    Returns:
        Text of all pages joined by newlines

    Raises:
        ExtractionError: the document is not a readable PDF
    """
    loader = PDFLoader(document)
    try:
        return "\n".join(loader.load())
    finally:
        loader.close()
