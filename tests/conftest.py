"""
Pytest fixtures and configuration for the test suite.

Provides temporary directories, sample PDFs, mock configurations and a
scriptable fake text extractor so that tests are isolated and fast.
"""

import json
import logging
import pytest
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Dict, Generator, Optional

import sys
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


class FakeExtractor:
    """
    Text extractor returning canned texts per locator.

    A text given as an Exception instance is raised instead of returned.
    Calls are counted per locator; an optional gate blocks every call
    until it is set.
    """

    def __init__(self, texts: Dict[str, object], gate: Optional[threading.Event] = None, delays: Dict[str, float] = None):
        self.texts = texts
        self.gate = gate
        self.delays = delays or {}
        self.calls: Dict[str, int] = {}
        self.max_pages_seen = []
        self._lock = threading.Lock()

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    def extract_text(self, locator: str, max_pages: int) -> str:
        with self._lock:
            self.calls[locator] = self.calls.get(locator, 0) + 1
            self.max_pages_seen.append(max_pages)

        if self.gate is not None:
            self.gate.wait(timeout=5)

        delay = self.delays.get(locator)
        if delay:
            threading.Event().wait(delay)

        text = self.texts.get(locator)
        if isinstance(text, Exception):
            raise text
        if text is None:
            raise FileNotFoundError(locator)
        return text


@pytest.fixture
def fake_extractor():
    """Factory for FakeExtractor instances."""
    return FakeExtractor


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory, cleaned up after test.
    """
    tmp = tempfile.mkdtemp(prefix="portal_search_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def config_data(temp_dir: Path) -> dict:
    """Raw configuration pointing at temporary directories."""
    documents_dir = temp_dir / "public"
    documents_dir.mkdir()

    logs_dir = temp_dir / "output" / "logs"
    logs_dir.mkdir(parents=True)

    return {
        "paths": {
            "documents_root": str(documents_dir),
            "manifest_path": str(temp_dir / "config" / "manifest.json"),
            "logs_directory": str(logs_dir)
        },
        "extraction": {
            "primary_backend": "pypdf",
            "fallback_backend": "pdfplumber",
            "max_pages": 5,
            "supported_extensions": [".pdf"],
            "request_timeout_seconds": 5
        },
        "indexing": {
            "max_workers": 4,
            "document_timeout_seconds": 5,
            "max_documents": 0
        },
        "search": {
            "max_results": 2,
            "snippet_window": 500,
            "min_token_length": 3
        },
        "logging": {
            "level": "DEBUG",
            "format": "%(levelname)s - %(message)s",
            "max_file_size_mb": 1,
            "backup_count": 1
        }
    }


@pytest.fixture
def temp_config(temp_dir: Path, config_data: dict) -> Generator[Path, None, None]:
    """
    Create a temporary config.json for testing.

    Yields:
        Path to temporary config file.
    """
    config_dir = temp_dir / "config"
    config_dir.mkdir(exist_ok=True)

    config_path = config_dir / "config.json"
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config_data, f)

    yield config_path


@pytest.fixture
def test_config(temp_config: Path):
    """Loaded Config for the temporary configuration."""
    from portal_search.core.config_loader import Config
    return Config.from_file(temp_config)


@pytest.fixture
def sample_pdf_content() -> bytes:
    """
    Create minimal valid PDF content for testing.

    Returns:
        Bytes representing a minimal PDF with text.
    """
    # Minimal PDF with "Hello World" text
    pdf_content = b"""%PDF-1.4
1 0 obj
<< /Type /Catalog /Pages 2 0 R >>
endobj
2 0 obj
<< /Type /Pages /Kids [3 0 R] /Count 1 >>
endobj
3 0 obj
<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792]
   /Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>
endobj
4 0 obj
<< /Length 44 >>
stream
BT /F1 12 Tf 100 700 Td (Hello World) Tj ET
endstream
endobj
5 0 obj
<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>
endobj
xref
0 6
0000000000 65535 f
0000000009 00000 n
0000000058 00000 n
0000000115 00000 n
0000000266 00000 n
0000000359 00000 n
trailer
<< /Size 6 /Root 1 0 R >>
startxref
434
%%EOF"""
    return pdf_content


@pytest.fixture
def sample_pdf(temp_dir: Path, sample_pdf_content: bytes) -> Path:
    """
    Create a sample PDF file for testing.

    Returns:
        Path to the created PDF file.
    """
    pdf_path = temp_dir / "sample.pdf"
    pdf_path.write_bytes(sample_pdf_content)
    return pdf_path


@pytest.fixture
def sample_source(sample_pdf: Path, sample_pdf_content: bytes):
    """DocumentSource wrapping the sample PDF bytes."""
    from portal_search.extraction.locator import DocumentSource
    return DocumentSource(locator=str(sample_pdf), data=sample_pdf_content)


@pytest.fixture
def reset_config_singleton():
    """
    Reset the cached config between tests.

    This ensures each test gets a fresh config instance.
    """
    from portal_search.core import config_loader
    config_loader._config_instance = None
    yield
    config_loader._config_instance = None


@pytest.fixture
def reset_logger_singleton():
    """
    Remove package log handlers and reset the initialization flag.
    """
    from portal_search.core import logger

    def reset():
        package_logger = logging.getLogger(logger.PACKAGE_LOGGER)
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()
        package_logger.setLevel(logging.NOTSET)
        logger._logger_initialized = False

    reset()
    yield
    reset()
