"""
pdfplumber-based text extraction backend.

Better handling of complex layouts, tables, and multi-column documents.
Slower than pypdf but more accurate for difficult PDFs.
"""

from typing import List, Optional, Tuple

import pdfplumber

from ..core import get_logger, ExtractionError
from .locator import DocumentSource

logger = get_logger(__name__)


class PDFPlumberBackend:
    """
    PDF text extraction using pdfplumber library.

    Provides more accurate extraction for complex layouts
    at the cost of slower processing.
    """

    name = "pdfplumber"

    def extract(self, source: DocumentSource, max_pages: Optional[int] = None) -> List[Tuple[int, str]]:
        """
        Extract text from the leading pages of a PDF.

        Args:
            source: Resolved document source.
            max_pages: Read at most this many pages. None reads all pages.

        Returns:
            List of (page_number, text) tuples. Page numbers are 1-indexed.

        Raises:
            ExtractionError: If extraction fails completely.
        """
        results = []

        try:
            with pdfplumber.open(source.open()) as pdf:
                pages = pdf.pages if max_pages is None else pdf.pages[:max_pages]
                logger.debug(f"Processing {len(pages)}/{len(pdf.pages)} pages: {source.name}")

                for page_num, page in enumerate(pages, start=1):
                    try:
                        text = page.extract_text() or ""

                        if text.strip():
                            results.append((page_num, text))
                        else:
                            logger.debug(f"Empty page {page_num} in {source.name}")

                    except Exception as e:
                        logger.warning(
                            f"Failed to extract page {page_num} from {source.name}: {e}"
                        )

        except Exception as e:
            raise ExtractionError(
                f"pdfplumber extraction failed: {e}",
                filepath=source.locator
            )

        return results
