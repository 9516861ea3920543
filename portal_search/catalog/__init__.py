"""
Catalog module describing the portal's document menu.

Provides the manifest model handed to the document index, JSON loading,
supported-type filtering and the menu title search.
"""

from .manifest import ManifestEntry, Manifest, get_manifest

__all__ = [
    "ManifestEntry",
    "Manifest",
    "get_manifest"
]
