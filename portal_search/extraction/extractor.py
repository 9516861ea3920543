"""
Unified PDF extraction interface with automatic fallback.

Wraps multiple extraction backends and attempts fallback when
the primary backend fails or returns empty results. This is the
default text extraction capability used by the document index.
"""

from typing import List, Optional, Tuple

from ..core import Config, get_config, get_logger, ExtractionError
from ..utils import clean_text
from .locator import DocumentSource, LocatorResolver
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend

logger = get_logger(__name__)


BACKENDS = {
    "pypdf": PyPDFBackend,
    "pdfplumber": PDFPlumberBackend
}


class PDFExtractor:
    """
    Unified PDF extraction with automatic backend fallback.

    Fetches the document once through the locator resolver, tries the
    primary backend first, and falls back to the secondary backend if
    extraction fails or produces empty results.
    """

    def __init__(
        self,
        primary_backend: str = None,
        fallback_backend: str = None,
        config: Optional[Config] = None,
        resolver: Optional[LocatorResolver] = None
    ):
        """
        Initialize the extractor with configured backends.

        Args:
            primary_backend: Name of primary backend ("pypdf" or "pdfplumber").
            fallback_backend: Name of fallback backend.
            config: Configuration to use. Defaults to the cached config.
            resolver: Locator resolver. Built from config when omitted.
        """
        config = config or get_config()

        primary_name = primary_backend or config.extraction.primary_backend
        fallback_name = fallback_backend or config.extraction.fallback_backend

        if primary_name not in BACKENDS:
            raise ExtractionError(f"Unknown backend: {primary_name}")

        self.primary = BACKENDS[primary_name]()
        self.fallback = BACKENDS.get(fallback_name, lambda: None)()

        self.resolver = resolver or LocatorResolver(
            documents_root=config.paths.documents_root,
            request_timeout=config.extraction.request_timeout_seconds
        )

        logger.debug(
            f"Initialized extractor: primary={primary_name}, fallback={fallback_name}"
        )

    def extract(self, locator: str, max_pages: Optional[int] = None) -> List[Tuple[int, str]]:
        """
        Extract page texts from a PDF using available backends.

        Args:
            locator: URL or path of the PDF.
            max_pages: Read at most this many leading pages.

        Returns:
            List of (page_number, text) tuples.

        Raises:
            FetchError: If the document cannot be fetched.
            ExtractionError: If all backends fail.
        """
        source = self.resolver.resolve(locator)
        return self._extract_source(source, max_pages)

    def extract_text(self, locator: str, max_pages: int) -> str:
        """
        Extract the text of the first pages of a PDF as a single string.

        Pages are joined with a space and the result is cleaned.

        Args:
            locator: URL or path of the PDF.
            max_pages: Read at most this many leading pages.

        Returns:
            Cleaned document text.

        Raises:
            FetchError: If the document cannot be fetched.
            ExtractionError: If all backends fail or return no text.
        """
        pages = self.extract(locator, max_pages)
        return clean_text(" ".join(text for _, text in pages))

    def _extract_source(self, source: DocumentSource, max_pages: Optional[int]) -> List[Tuple[int, str]]:
        """Run the primary backend, then the fallback, over fetched bytes."""
        primary_error = None

        try:
            results = self.primary.extract(source, max_pages)

            if results:
                return results

            logger.debug(f"Primary backend returned empty results: {source.name}")

        except ExtractionError as e:
            primary_error = e
            logger.debug(f"Primary backend failed: {e.message}")

        if self.fallback:
            try:
                logger.debug(f"Trying fallback backend for: {source.name}")
                results = self.fallback.extract(source, max_pages)

                if results:
                    return results

            except ExtractionError as e:
                logger.debug(f"Fallback backend also failed: {e.message}")

        if primary_error:
            raise primary_error

        raise ExtractionError(
            "All backends returned empty results",
            filepath=source.locator
        )
