"""Tests for the canonical trie store."""

import pytest

from occugroup.normalize import CanonicalTrie


def test_insert_counts_frequency():
    """Test that each insert bumps the term frequency."""
    trie = CanonicalTrie()

    assert trie.insert("nurse", "nurse") == 1
    assert trie.insert("nurse", "nurse") == 2
    assert trie.frequency_of("nurse") == 2


def test_frequency_of_unknown_and_prefix():
    """Test that non-terminal paths and unknown terms have zero frequency."""
    trie = CanonicalTrie()
    trie.insert("nurse", "nurse")

    assert trie.frequency_of("nurs") == 0
    assert trie.frequency_of("nurses") == 0
    assert trie.frequency_of("chef") == 0


def test_longest_prefix_match_returns_last_terminal():
    """Test that the deepest registered prefix wins."""
    trie = CanonicalTrie()
    trie.insert("soft", "soft")
    trie.insert("software", "software")

    assert trie.longest_prefix_match("software engineer") == "software"
    assert trie.longest_prefix_match("softball") == "soft"
    assert trie.longest_prefix_match("so") is None
    assert trie.longest_prefix_match("hardware") is None


def test_longest_prefix_match_returns_label():
    """Test that the stored canonical label is returned, not the path."""
    trie = CanonicalTrie()
    trie.insert("swe", "software engineer")

    assert trie.longest_prefix_match("swe lead") == "software engineer"
    assert trie.longest_prefix_match("swe") == "software engineer"


def test_relabel_keeps_frequency():
    """Test relabeling an existing term."""
    trie = CanonicalTrie()
    trie.insert("docter", "docter")
    trie.insert("docter", "docter")

    assert trie.relabel("docter", "doctor") is True
    assert ("docter", "doctor", 2) in set(trie.terms())
    assert trie.frequency_of("docter") == 2
    assert trie.relabel("nurse", "nurse") is False


def test_terms_and_membership():
    """Test enumeration, length and membership."""
    trie = CanonicalTrie()
    trie.insert("soft", "soft")
    trie.insert("software", "software")
    trie.insert("soft", "soft")

    assert set(trie.terms()) == {("soft", "soft", 2), ("software", "software", 1)}
    assert len(trie) == 2
    assert "soft" in trie
    assert "sof" not in trie
    assert 42 not in trie


def test_to_dict_serializes_arena():
    """Test debugging serialization of the node arena."""
    trie = CanonicalTrie()
    trie.insert("ab", "ab")
    trie.insert("ac", "ab")

    data = trie.to_dict()

    assert data["node_count"] == 4
    assert data["term_count"] == 2
    assert data["nodes"][0]["terminal"] is False
    assert trie.node_count == 4


def test_insert_empty_term_rejected():
    """Test that the root can never become terminal."""
    trie = CanonicalTrie()

    with pytest.raises(ValueError):
        trie.insert("", "x")
