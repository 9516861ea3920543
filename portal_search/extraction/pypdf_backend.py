"""
pypdf-based text extraction backend.

Fast extraction suitable for most standard PDF files.
Handles encryption detection and empty password decryption.
"""

from typing import List, Optional, Tuple

from pypdf import PdfReader

from ..core import get_logger, ExtractionError
from .locator import DocumentSource

logger = get_logger(__name__)


class PyPDFBackend:
    """
    PDF text extraction using the pypdf library.

    Provides fast extraction for standard PDFs with basic
    encryption handling.
    """

    name = "pypdf"

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
            reader = PdfReader(source.open())

            if reader.is_encrypted:
                try:
                    reader.decrypt("")
                except Exception:
                    raise ExtractionError(
                        "PDF is encrypted and cannot be decrypted",
                        filepath=source.locator
                    )

            total_pages = len(reader.pages)
            page_limit = total_pages if max_pages is None else min(max_pages, total_pages)
            logger.debug(f"Processing {page_limit}/{total_pages} pages: {source.name}")

            for page_num in range(1, page_limit + 1):
                try:
                    text = reader.pages[page_num - 1].extract_text() or ""

                    if text.strip():
                        results.append((page_num, text))
                    else:
                        logger.debug(f"Empty page {page_num} in {source.name}")

                except Exception as e:
                    logger.warning(
                        f"Failed to extract page {page_num} from {source.name}: {e}"
                    )

        except ExtractionError:
            raise
        except Exception as e:
            raise ExtractionError(
                f"pypdf extraction failed: {e}",
                filepath=source.locator
            )

        return results
