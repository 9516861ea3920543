"""
Data models for the document index.

Defines the indexed document record, search hits, the index lifecycle
states and ingestion statistics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from ..utils import fold_case


class IndexState(Enum):
    """Lifecycle of a DocumentIndex."""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass(frozen=True)
class DocumentRecord:
    """
    A document whose text was extracted successfully.

    Attributes:
        title: Display name from the manifest.
        locator: URL or path the document was fetched from.
        category: Menu section from the manifest.
        content: Extracted text, original case.
        folded_content: Lowercased content, offset-aligned with content.
    """
    title: str
    locator: str
    category: str
    content: str
    folded_content: str = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "folded_content", fold_case(self.content))


@dataclass(frozen=True)
class SearchHit:
    """
    A ranked search result.

    Attributes:
        text: Word-boundary-trimmed snippet around a query match.
        title: Title of the source document.
        locator: Locator of the source document.
    """
    text: str
    title: str
    locator: str

    def to_dict(self) -> Dict[str, str]:
        """Plain mapping representation for prompt builders and JSON output."""
        return {"text": self.text, "title": self.title, "locator": self.locator}


@dataclass
class IngestionStats:
    """Statistics from an ingestion pass."""
    documents_requested: int = 0
    documents_filtered: int = 0
    documents_indexed: int = 0
    documents_failed: int = 0
    documents_timed_out: int = 0
    cancelled: bool = False
    errors: List[str] = field(default_factory=list)
