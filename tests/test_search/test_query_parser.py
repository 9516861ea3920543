"""
Tests for the query parser.

Tests lowercasing, whitespace splitting and the short-token filter.
"""

import pytest

from portal_search.core import SearchError
from portal_search.search.query_parser import QueryParser


@pytest.fixture
def parser():
    """Parser with the default minimum token length."""
    return QueryParser()


class TestTokenize:
    """Tests for QueryParser.tokenize."""

    def test_lowercases_and_splits(self, parser):
        """Test that tokens are lowercased and split on whitespace."""
        assert parser.tokenize("Routing  CONFIGURATION\tExample") == [
            "routing", "configuration", "example"
        ]

    def test_drops_tokens_of_two_characters_or_less(self, parser):
        """Test that short tokens are discarded."""
        assert parser.tokenize("how to add a new route") == ["how", "add", "new", "route"]

    def test_only_short_tokens_yields_nothing(self, parser):
        """Test that a stopword-only query has no tokens."""
        assert parser.tokenize("is a") == []

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query(self, parser, query):
        """Test that blank queries have no tokens."""
        assert parser.tokenize(query) == []

    def test_keeps_duplicates(self, parser):
        """Test that repeated tokens are all returned."""
        assert parser.tokenize("backup Backup") == ["backup", "backup"]

    def test_punctuation_is_part_of_token(self, parser):
        """Test that only whitespace separates tokens."""
        assert parser.tokenize("TP-64, IP-512?") == ["tp-64,", "ip-512?"]

    def test_vietnamese_tokens(self, parser):
        """Test that accented tokens are lowercased."""
        assert parser.tokenize("TỔNG ĐÀI Softswitch") == ["tổng", "đài", "softswitch"]

    def test_folds_like_document_content(self, parser):
        """Test that characters without a same-length lowercase are kept."""
        assert parser.tokenize("İSTANBUL routing") == ["İstanbul", "routing"]

    def test_custom_minimum_length(self):
        """Test a parser with a different minimum length."""
        assert QueryParser(min_token_length=5).tokenize("route routing") == ["route", "routing"]
        assert QueryParser(min_token_length=6).tokenize("route routing") == ["routing"]

    def test_non_string_query_raises(self, parser):
        """Test that a non-string query is rejected."""
        with pytest.raises(SearchError) as exc_info:
            parser.tokenize(42)

        assert exc_info.value.query == "42"


class TestExtractTerms:
    """Tests for QueryParser.extract_terms."""

    def test_deduplicates_in_order(self, parser):
        """Test that terms are unique and keep query order."""
        assert parser.extract_terms("Backup restore BACKUP guide") == ["backup", "restore", "guide"]
