"""
Utility module providing shared helper functions.

Contains locator handling and text processing utilities used across
the application. Depends only on the core module.
"""

from .file_utils import (
    is_url,
    get_extension,
    resolve_local_path
)
from .text_utils import (
    clean_text,
    fold_case,
    truncate_text
)

__all__ = [
    "is_url",
    "get_extension",
    "resolve_local_path",
    "clean_text",
    "fold_case",
    "truncate_text"
]
