"""
Custom exception hierarchy for Portal Search.

Provides specific exception types for different failure modes:
configuration errors, document fetch failures, extraction failures
and search problems.
"""


class PortalSearchError(Exception):
    """Base exception for all Portal Search errors."""

    def __init__(self, message: str, details: dict = None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PortalSearchError):
    """Raised when configuration or the document manifest is invalid or missing."""
    pass


class FetchError(PortalSearchError):
    """Raised when a document cannot be fetched from its locator."""

    def __init__(self, message: str, locator: str = None, details: dict = None):
        """
        Initialize fetch error.

        Args:
            message: Error description.
            locator: Path or URL that could not be read.
            details: Additional context.
        """
        super().__init__(message, details)
        self.locator = locator


class ExtractionError(PortalSearchError):
    """Raised when PDF text extraction fails."""

    def __init__(self, message: str, filepath: str = None, details: dict = None):
        """
        Initialize extraction error.

        Args:
            message: Error description.
            filepath: Locator of the problematic PDF file.
            details: Additional context.
        """
        super().__init__(message, details)
        self.filepath = filepath


class SearchError(PortalSearchError):
    """Raised when search query execution fails."""

    def __init__(self, message: str, query: str = None, details: dict = None):
        """
        Initialize search error.

        Args:
            message: Error description.
            query: The problematic search query.
            details: Additional context.
        """
        super().__init__(message, details)
        self.query = query
