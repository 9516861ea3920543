"""
Locator utility functions for Portal Search.

A locator is either an http(s) URL or a filesystem path. Portal menus use
root-anchored web paths such as "/document/1/guide.pdf", which are served
from the documents root.
"""

from pathlib import Path, PurePosixPath
from typing import Union
from urllib.parse import unquote, urlparse


URL_SCHEMES = ("http", "https")


def is_url(locator: str) -> bool:
    """
    Check whether a locator is an http(s) URL.

    Args:
        locator: Document locator.

    Returns:
        True for http:// and https:// locators.
    """
    return urlparse(locator).scheme.lower() in URL_SCHEMES


def get_extension(locator: str) -> str:
    """
    Get the lowercase file extension of a locator.

    Query strings and fragments of URLs are ignored.

    Args:
        locator: Path or URL.

    Returns:
        Extension including the dot (e.g. ".pdf"), or "" if none.
    """
    if not locator:
        return ""

    if is_url(locator):
        path = unquote(urlparse(locator).path)
    else:
        path = locator.replace("\\", "/")

    return PurePosixPath(path).suffix.lower()


def resolve_local_path(locator: str, documents_root: Union[str, Path, None]) -> Path:
    """
    Map a non-URL locator to a filesystem path.

    Existing absolute paths are used as is. Root-anchored web paths and
    relative paths are resolved against the documents root.

    Args:
        locator: Filesystem path or portal web path.
        documents_root: Directory serving portal documents.

    Returns:
        Resolved Path (not checked for existence when under the root).
    """
    path = Path(locator)

    if path.is_absolute() and (path.exists() or documents_root is None):
        return path

    if documents_root is None:
        return path

    return Path(documents_root) / locator.lstrip("/\\")
