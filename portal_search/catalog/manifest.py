"""
Document manifest for the portal menu.

A manifest lists the documents shown in the portal menu as
(title, locator, category) entries. It is loaded from a JSON file, either
as a flat list of entries or grouped by category:

    [{"title": "...", "locator": "/document/1/a.pdf", "category": "..."}]

    {"categories": [{"name": "...", "documents": [{"title": "...", "path": "..."}]}]}

"path" is accepted as an alias of "locator".
"""

import json
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

from ..core import Config, ConfigurationError, get_config, get_logger
from ..utils import get_extension

logger = get_logger(__name__)


@dataclass(frozen=True)
class ManifestEntry:
    """
    A single document of the portal menu.

    Attributes:
        title: Display name.
        locator: URL or path the document bytes are fetched from.
        category: Menu section the document belongs to.
    """
    title: str
    locator: str
    category: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], category: str = None) -> "ManifestEntry":
        """
        Build an entry from a mapping.

        Args:
            data: Mapping with "title", "locator" (or "path") and "category".
            category: Category to use when the mapping has none.

        Returns:
            ManifestEntry instance.

        Raises:
            ConfigurationError: If title or locator is missing.
        """
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                "Manifest entry must be an object",
                {"entry": repr(data)}
            )

        title = data.get("title")
        locator = data.get("locator", data.get("path"))

        if not title or not locator:
            raise ConfigurationError(
                "Manifest entry requires a title and a locator",
                {"entry": dict(data)}
            )

        return cls(
            title=str(title),
            locator=str(locator),
            category=str(data.get("category", category or ""))
        )

    @property
    def extension(self) -> str:
        """Lowercase extension of the locator."""
        return get_extension(self.locator)

    def to_dict(self) -> Dict[str, str]:
        """Plain mapping representation."""
        return {"title": self.title, "locator": self.locator, "category": self.category}


class Manifest(Sequence):
    """
    Ordered, immutable list of manifest entries.

    Order matters: the document index breaks score ties by manifest order.
    """

    def __init__(self, entries: Iterable[Union[ManifestEntry, Mapping[str, Any]]] = ()):
        self._entries = tuple(
            entry if isinstance(entry, ManifestEntry) else ManifestEntry.from_dict(entry)
            for entry in entries
        )

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Manifest(self._entries[index])
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ManifestEntry]:
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        if isinstance(other, Manifest):
            return self._entries == other._entries
        return NotImplemented

    def __repr__(self) -> str:
        return f"Manifest({len(self._entries)} entries)"

    @classmethod
    def from_data(cls, data: Any) -> "Manifest":
        """
        Build a manifest from decoded JSON.

        Args:
            data: Flat list of entries or {"categories": [...]} mapping.

        Returns:
            Manifest instance.

        Raises:
            ConfigurationError: If the structure is not recognized.
        """
        if isinstance(data, list):
            return cls(ManifestEntry.from_dict(item) for item in data)

        if isinstance(data, Mapping) and isinstance(data.get("categories"), list):
            entries: List[ManifestEntry] = []

            for group in data["categories"]:
                if not isinstance(group, Mapping) or "name" not in group:
                    raise ConfigurationError(
                        "Manifest category requires a name",
                        {"category": repr(group)}
                    )

                for item in group.get("documents", []):
                    entries.append(ManifestEntry.from_dict(item, category=str(group["name"])))

            return cls(entries)

        raise ConfigurationError(
            "Manifest must be a list of documents or an object with 'categories'"
        )

    @classmethod
    def from_file(cls, manifest_path: Union[str, Path]) -> "Manifest":
        """
        Load a manifest from a JSON file.

        Args:
            manifest_path: Path to the manifest JSON file.

        Returns:
            Manifest instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        manifest_path = Path(manifest_path)

        if not manifest_path.exists():
            raise ConfigurationError(
                f"Manifest file not found: {manifest_path}",
                {"path": str(manifest_path)}
            )

        try:
            with open(manifest_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in manifest file: {e}",
                {"path": str(manifest_path)}
            )

        manifest = cls.from_data(data)
        logger.debug(f"Loaded manifest with {len(manifest)} documents: {manifest_path}")

        return manifest

    def categories(self) -> List[str]:
        """Unique category names in manifest order."""
        return list(dict.fromkeys(entry.category for entry in self._entries))

    def by_category(self, category: str) -> "Manifest":
        """Entries belonging to a category."""
        return Manifest(entry for entry in self._entries if entry.category == category)

    def supported(self, extensions: Iterable[str]) -> "Manifest":
        """
        Entries whose locator has one of the given extensions.

        Args:
            extensions: Extensions including the dot, e.g. [".pdf"].

        Returns:
            Filtered manifest.
        """
        allowed = {ext.lower() for ext in extensions}
        return Manifest(entry for entry in self._entries if entry.extension in allowed)

    def filter_titles(self, query: Optional[str]) -> "Manifest":
        """
        Menu search: entries whose title or category contains the query.

        Matching is case-insensitive on the whole stripped query.

        Args:
            query: Text typed in the menu search box.

        Returns:
            Matching entries; empty for a blank query.
        """
        if not query or not query.strip():
            return Manifest()

        needle = query.lower().strip()

        return Manifest(
            entry for entry in self._entries
            if needle in entry.title.lower() or needle in entry.category.lower()
        )


def get_manifest(config: Optional[Config] = None) -> Manifest:
    """
    Load the manifest configured in paths.manifest_path.

    Args:
        config: Configuration to use. Defaults to the cached config.

    Returns:
        Manifest instance.
    """
    config = config or get_config()
    return Manifest.from_file(config.paths.manifest_path)
