"""
Tests for text utility functions.

Tests cleaning of extracted PDF text, offset-preserving case folding and
snippet truncation.
"""

from portal_search.utils.text_utils import (
    clean_text,
    fold_case,
    truncate_text
)


class TestCleanText:
    """Tests for clean_text function."""

    def test_collapses_spaces_and_tabs(self):
        """Test that runs of spaces and tabs become one space."""
        assert clean_text("Softswitch \t  routing   table") == "Softswitch routing table"

    def test_limits_blank_lines(self):
        """Test that more than one blank line is reduced."""
        assert clean_text("Page 1\n\n\n\n\nPage 2") == "Page 1\n\nPage 2"

    def test_strips_each_line(self):
        """Test that leading/trailing whitespace is stripped from lines."""
        assert clean_text("  Line 1  \n   Line 2   ") == "Line 1\nLine 2"

    def test_removes_control_characters(self):
        """Test that control characters from PDF text layers are dropped."""
        assert clean_text("Backup\x00-\x07Restore") == "Backup-Restore"

    def test_preserves_vietnamese_diacritics(self):
        """Test that accented Vietnamese text survives cleaning."""
        text = "Khai thác, sử dụng tổng đài"

        assert clean_text(text) == text

    def test_empty_input_returns_empty(self):
        """Test that empty or None input returns an empty string."""
        assert clean_text("") == ""
        assert clean_text(None) == ""


class TestFoldCase:
    """Tests for fold_case function."""

    def test_lowercases_ascii(self):
        """Test plain lowercasing."""
        assert fold_case("Routing CONFIGURATION") == "routing configuration"

    def test_lowercases_accented_characters(self):
        """Test that accented capitals are lowercased."""
        assert fold_case("TỔNG ĐÀI") == "tổng đài"

    def test_keeps_length_for_expanding_characters(self):
        """Test that characters whose lowercase is longer stay in place."""
        text = "İstanbul Routing"

        folded = fold_case(text)

        assert len(folded) == len(text)
        assert folded.index("routing") == text.index("Routing")

    def test_empty_input(self):
        """Test that empty input returns an empty string."""
        assert fold_case("") == ""
        assert fold_case(None) == ""


class TestTruncateText:
    """Tests for truncate_text function."""

    def test_short_text_unchanged(self):
        """Test that text within the limit is unchanged."""
        assert truncate_text("Backup guide", 100) == "Backup guide"

    def test_exact_length_unchanged(self):
        """Test that text at exactly max_length is unchanged."""
        assert truncate_text("12345", 5) == "12345"

    def test_truncation_adds_suffix(self):
        """Test that truncated text ends with the suffix within the limit."""
        result = truncate_text("Emergency configuration of the softswitch", 20)

        assert result.endswith("...")
        assert len(result) <= 20

    def test_breaks_at_late_word_boundary(self):
        """Test that a space late in the cut is used as break point."""
        # truncate_at=17, text[:17]="This is a very lo", last space at 14 > 11.9
        assert truncate_text("This is a very long text", 20) == "This is a very..."

    def test_cuts_mid_word_when_space_too_early(self):
        """Test that an early space is not used as break point."""
        # truncate_at=12, last space at 5 < 8.4
        assert truncate_text("Hello beautiful world", 15) == "Hello beauti..."

    def test_none_passes_through(self):
        """Test that None and empty text are returned unchanged."""
        assert truncate_text("", 10) == ""
        assert truncate_text(None, 10) is None
