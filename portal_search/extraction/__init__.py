"""
PDF extraction module for Portal Search.

Provides locator resolution and text extraction with multiple backends
(pypdf and pdfplumber) with automatic fallback support.
"""

from .locator import DocumentSource, LocatorResolver
from .pypdf_backend import PyPDFBackend
from .pdfplumber_backend import PDFPlumberBackend
from .extractor import PDFExtractor, BACKENDS

__all__ = [
    "DocumentSource",
    "LocatorResolver",
    "PyPDFBackend",
    "PDFPlumberBackend",
    "PDFExtractor",
    "BACKENDS"
]
