"""
Tests for the pdfplumber-based extraction backend.

Uses a mocked pdfplumber module for deterministic page contents.
"""

import pytest
from unittest.mock import patch, Mock, MagicMock

from portal_search.extraction.locator import DocumentSource
from portal_search.extraction.pdfplumber_backend import PDFPlumberBackend
from portal_search.core.exceptions import ExtractionError


@pytest.fixture
def backend():
    """Create a PDFPlumberBackend instance."""
    return PDFPlumberBackend()


def _open_result(texts):
    """Build the context manager returned by pdfplumber.open."""
    pages = []
    for text in texts:
        page = Mock()
        page.extract_text.return_value = text
        pages.append(page)

    pdf = MagicMock()
    pdf.pages = pages
    pdf.__enter__ = Mock(return_value=pdf)
    pdf.__exit__ = Mock(return_value=False)
    return pdf


class TestPDFPlumberBackend:
    """Tests for PDFPlumberBackend class."""

    def test_backend_name(self, backend):
        """Test that backend has correct name identifier."""
        assert backend.name == "pdfplumber"

    def test_invalid_pdf_raises(self, backend):
        """Test that bytes that are not a PDF raise ExtractionError."""
        source = DocumentSource(locator="broken.pdf", data=b"Not a valid PDF")

        with pytest.raises(ExtractionError):
            backend.extract(source)

    @patch("portal_search.extraction.pdfplumber_backend.pdfplumber")
    def test_opens_in_memory_stream(self, mock_pdfplumber, backend, sample_source):
        """Test that the backend reads from the fetched bytes."""
        mock_pdfplumber.open.return_value = _open_result(["Page one"])

        backend.extract(sample_source)

        stream = mock_pdfplumber.open.call_args[0][0]
        assert stream.read() == sample_source.data

    @patch("portal_search.extraction.pdfplumber_backend.pdfplumber")
    def test_respects_max_pages(self, mock_pdfplumber, backend, sample_source):
        """Test that only the leading pages are extracted."""
        pdf = _open_result([f"Page {n}" for n in range(1, 8)])
        mock_pdfplumber.open.return_value = pdf

        results = backend.extract(sample_source, max_pages=2)

        assert results == [(1, "Page 1"), (2, "Page 2")]
        pdf.pages[2].extract_text.assert_not_called()

    @patch("portal_search.extraction.pdfplumber_backend.pdfplumber")
    def test_skips_empty_pages(self, mock_pdfplumber, backend, sample_source):
        """Test that blank pages are skipped but keep page numbering."""
        mock_pdfplumber.open.return_value = _open_result(["", "Second page", None])

        assert backend.extract(sample_source) == [(2, "Second page")]

    @patch("portal_search.extraction.pdfplumber_backend.pdfplumber")
    def test_open_failure_raises_extraction_error(self, mock_pdfplumber, backend, sample_source):
        """Test that a failure to open the document is wrapped."""
        mock_pdfplumber.open.side_effect = ValueError("corrupt xref")

        with pytest.raises(ExtractionError, match="pdfplumber extraction failed"):
            backend.extract(sample_source)
