"""
Locator resolution for document fetching.

Turns a manifest locator (http(s) URL, filesystem path, or portal web path)
into the raw bytes of the document.
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path, PurePosixPath
from typing import Union
from urllib.parse import unquote, urlparse

import requests

from ..core import get_logger, FetchError
from ..utils import is_url, resolve_local_path

logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentSource:
    """
    Raw document bytes together with where they came from.

    Attributes:
        locator: The locator the bytes were fetched from.
        data: Document content.
    """
    locator: str
    data: bytes

    @property
    def name(self) -> str:
        """Final path component of the locator, for log messages."""
        path = unquote(urlparse(self.locator).path) if is_url(self.locator) else self.locator
        return PurePosixPath(path.replace("\\", "/")).name or self.locator

    def open(self) -> BytesIO:
        """Return a fresh binary stream over the document bytes."""
        return BytesIO(self.data)


class LocatorResolver:
    """
    Fetches document bytes for a locator.

    URLs are downloaded with requests; other locators are read from disk,
    relative to the documents root when they are not existing absolute paths.
    """

    def __init__(
        self,
        documents_root: Union[str, Path, None] = None,
        request_timeout: float = 30
    ):
        """
        Initialize the resolver.

        Args:
            documents_root: Directory serving portal web paths.
            request_timeout: Timeout in seconds for HTTP downloads.
        """
        self.documents_root = Path(documents_root) if documents_root else None
        self.request_timeout = request_timeout

    def resolve(self, locator: str) -> DocumentSource:
        """
        Fetch the document addressed by a locator.

        Args:
            locator: URL or path of the document.

        Returns:
            DocumentSource with the document bytes.

        Raises:
            FetchError: If the document cannot be read.
        """
        if not locator:
            raise FetchError("Empty document locator", locator=locator)

        if is_url(locator):
            return self._fetch_url(locator)

        return self._read_file(locator)

    def _fetch_url(self, url: str) -> DocumentSource:
        """Download a document over HTTP."""
        logger.debug(f"Downloading document: {url}")

        try:
            response = requests.get(url, timeout=self.request_timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(
                f"Failed to download document: {e}",
                locator=url
            )

        return DocumentSource(locator=url, data=response.content)

    def _read_file(self, locator: str) -> DocumentSource:
        """Read a document from the filesystem."""
        path = resolve_local_path(locator, self.documents_root)

        if not path.is_file():
            raise FetchError(
                f"Document not found: {path}",
                locator=locator,
                details={"path": str(path)}
            )

        try:
            data = path.read_bytes()
        except OSError as e:
            raise FetchError(
                f"Cannot read document {path}: {e}",
                locator=locator,
                details={"path": str(path)}
            )

        return DocumentSource(locator=locator, data=data)
