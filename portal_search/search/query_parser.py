"""
Query parser for lexical document search.

Lowercases free-text queries with the same offset-preserving fold as
document content and splits them on whitespace. Tokens shorter
than the minimum length carry too little signal and are dropped.
"""

from typing import List

from ..core import get_logger, SearchError
from ..utils import fold_case

logger = get_logger(__name__)


DEFAULT_MIN_TOKEN_LENGTH = 3


class QueryParser:
    """Turns user queries into search tokens."""

    def __init__(self, min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH):
        """
        Initialize the parser.

        Args:
            min_token_length: Tokens shorter than this are discarded.
        """
        self.min_token_length = min_token_length

    def tokenize(self, query: str) -> List[str]:
        """
        Split a query into lowercase search tokens.

        Duplicates are kept; each occurrence counts toward a document score.

        Args:
            query: Raw user input.

        Returns:
            Tokens in query order, possibly empty.

        Raises:
            SearchError: If the query is not a string.
        """
        if query is not None and not isinstance(query, str):
            raise SearchError(
                f"Query must be a string, got {type(query).__name__}",
                query=repr(query)
            )

        if not query or not query.strip():
            return []

        tokens = [
            token for token in fold_case(query).split()
            if len(token) >= self.min_token_length
        ]

        if not tokens:
            logger.debug(f"Query has no usable tokens: '{query}'")

        return tokens

    def extract_terms(self, query: str) -> List[str]:
        """
        Extract unique search tokens, preserving query order.

        Useful for highlighting matches in results.

        Args:
            query: Raw user input.

        Returns:
            List of distinct tokens.
        """
        return list(dict.fromkeys(self.tokenize(query)))
