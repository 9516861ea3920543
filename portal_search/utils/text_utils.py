"""
Text utility functions for Portal Search.

Provides text cleaning, case folding and truncation for processing
extracted PDF content and displaying snippets.
"""

import re
import unicodedata


def clean_text(text: str) -> str:
    """
    Normalize and clean extracted text.

    Removes control characters, normalizes whitespace, and handles
    common PDF extraction artifacts.

    Args:
        text: Raw text from PDF extraction.

    Returns:
        Cleaned text string.
    """
    if not text:
        return ""

    # Normalize unicode characters
    text = unicodedata.normalize("NFKC", text)

    # Remove control characters except newlines and tabs
    text = "".join(
        char for char in text
        if not unicodedata.category(char).startswith("C")
        or char in "\n\t"
    )

    # Replace multiple spaces/tabs with single space
    text = re.sub(r"[ \t]+", " ", text)

    # Replace multiple newlines with double newline
    text = re.sub(r"\n{3,}", "\n\n", text)

    # Remove leading/trailing whitespace from each line
    lines = [line.strip() for line in text.split("\n")]
    text = "\n".join(lines)

    return text.strip()


def fold_case(text: str) -> str:
    """
    Lowercase text while keeping every character at its original offset.

    str.lower() expands a few characters (e.g. "İ") into two code points,
    which would shift match offsets relative to the original text. Such
    characters are kept unchanged.

    Args:
        text: Text to fold.

    Returns:
        Lowercased text of the same length as the input.
    """
    if not text:
        return ""

    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered

    return "".join(
        low if len(low) == 1 else char
        for char, low in ((char, char.lower()) for char in text)
    )


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate text to maximum length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length including suffix.
        suffix: String to append when truncated.

    Returns:
        Truncated text or original if within limit.
    """
    if not text or len(text) <= max_length:
        return text

    truncate_at = max_length - len(suffix)
    if truncate_at <= 0:
        return suffix[:max_length]

    # Try to break at word boundary
    truncated = text[:truncate_at]
    last_space = truncated.rfind(" ")

    if last_space > truncate_at * 0.7:
        truncated = truncated[:last_space]

    return truncated + suffix
