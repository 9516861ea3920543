"""
Snippet extraction around query matches.

A snippet is a window of the original text centred on a match, widened so
that it neither starts nor ends in the middle of a word.
"""

import re
from typing import Iterable

DEFAULT_SNIPPET_WINDOW = 500


def extract_snippet(
    content: str,
    match_start: int,
    match_length: int,
    window: int = DEFAULT_SNIPPET_WINDOW
) -> str:
    """
    Extract a word-boundary-aligned excerpt around a match.

    Half of the window is taken before the match and half after it. A start
    falling inside a word moves back to just after the preceding whitespace
    (or to the beginning of the text); an end falling inside a word moves
    forward to the next whitespace (or to the end of the text).

    Args:
        content: Original-case document text.
        match_start: Offset of the match in content.
        match_length: Length of the matched token.
        window: Total number of context characters around the match.

    Returns:
        Stripped snippet text.
    """
    if not content:
        return ""

    half = window // 2
    start = max(0, match_start - half)
    end = min(len(content), match_start + match_length + half)

    if 0 < start < len(content) and not content[start].isspace():
        while start > 0 and not content[start - 1].isspace():
            start -= 1

    if 0 < end < len(content) and not content[end - 1].isspace():
        while end < len(content) and not content[end].isspace():
            end += 1

    return content[start:end].strip()


def highlight_terms(snippet: str, terms: Iterable[str], marker: str = "**") -> str:
    """
    Wrap case-insensitive occurrences of terms with a marker.

    Args:
        snippet: Text to highlight.
        terms: Search tokens.
        marker: String placed before and after each occurrence.

    Returns:
        Highlighted text.
    """
    terms = sorted({term for term in terms if term}, key=len, reverse=True)
    if not snippet or not terms:
        return snippet

    pattern = re.compile("|".join(re.escape(term) for term in terms), re.IGNORECASE)
    return pattern.sub(lambda match: f"{marker}{match.group(0)}{marker}", snippet)
