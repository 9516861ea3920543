"""
Search module for lexical document retrieval.

Provides the in-memory document index, query parsing, snippet extraction
and result models consumed by the portal chatbot.
"""

from .models import DocumentRecord, SearchHit, IndexState, IngestionStats
from .query_parser import QueryParser
from .snippets import extract_snippet, highlight_terms
from .document_index import DocumentIndex, TextExtractor

__all__ = [
    "DocumentRecord",
    "SearchHit",
    "IndexState",
    "IngestionStats",
    "QueryParser",
    "extract_snippet",
    "highlight_terms",
    "DocumentIndex",
    "TextExtractor"
]
