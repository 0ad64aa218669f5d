"""Tests for string similarity primitives."""

import pytest

from occugroup.similarity import (
    levenshtein_distance,
    longest_common_prefix,
    longest_common_subsequence,
    rank_candidates,
    similarity,
    token_overlap,
)


SAMPLE_WORDS = [
    "", "a", "doctor", "docter", "kitten", "sitting", "software engineer",
    "software enginer", "front-end developer", "café", "cafe", "naïve",
]


def test_levenshtein_known_values():
    """Test edit distance on classic examples."""
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("doctor", "docter") == 1
    assert levenshtein_distance("flaw", "lawn") == 2


def test_levenshtein_identity_and_empty():
    """Test distance to itself and to the empty string."""
    for word in SAMPLE_WORDS:
        assert levenshtein_distance(word, word) == 0
        assert levenshtein_distance("", word) == len(word)
        assert levenshtein_distance(word, "") == len(word)


def test_levenshtein_symmetric_and_triangle():
    """Test symmetry and the triangle inequality over sample words."""
    for a in SAMPLE_WORDS:
        for b in SAMPLE_WORDS:
            assert levenshtein_distance(a, b) == levenshtein_distance(b, a)
            for c in SAMPLE_WORDS[:6]:
                assert levenshtein_distance(a, c) <= (
                    levenshtein_distance(a, b) + levenshtein_distance(b, c)
                )


def test_longest_common_subsequence_bounds():
    """Test LCS symmetry, identity and length bounds over sample words."""
    for a in SAMPLE_WORDS:
        assert longest_common_subsequence(a, a) == len(a)
        for b in SAMPLE_WORDS:
            lcs = longest_common_subsequence(a, b)
            assert lcs == longest_common_subsequence(b, a)
            assert lcs <= min(len(a), len(b))
            assert levenshtein_distance(a, b) >= max(len(a), len(b)) - lcs


def test_levenshtein_counts_code_points():
    """Test that accented characters count as one unit."""
    assert levenshtein_distance("café", "cafe") == 1
    assert levenshtein_distance("naïve", "naive") == 1


def test_longest_common_subsequence():
    """Test LCS length."""
    assert longest_common_subsequence("abcde", "ace") == 3
    assert longest_common_subsequence("", "abc") == 0
    assert longest_common_subsequence("doctor", "docter") == 5


def test_longest_common_prefix():
    """Test shared prefix."""
    assert longest_common_prefix("software", "soft skills") == "soft"
    assert longest_common_prefix("nurse", "chef") == ""
    assert longest_common_prefix("dr", "dr") == "dr"


def test_token_overlap():
    """Test token overlap including empty token sets."""
    assert token_overlap("senior software engineer", "software engineer") == pytest.approx(2 / 3)
    assert token_overlap("nurse", "nurse") == 1.0
    assert token_overlap("", "") == 1.0
    assert token_overlap("", "nurse") == 0.0
    assert token_overlap("chef", "nurse") == 0.0


def test_similarity_single_typo_in_long_title():
    """Test that a one-letter typo in a long title scores high."""
    score = similarity("software engineer", "software enginer")

    # lcs and levenshtein ratios are 16/17, one of two tokens shared, prefix bonus
    expected = 0.75 * 16 / 17 + 0.25 * 0.5 + 0.1
    assert score == pytest.approx(expected)
    assert score >= 0.85


def test_similarity_length_penalty():
    """Test that large length gaps are penalized."""
    # lcs 2/3, levenshtein 2/3, no shared tokens, no prefix bonus, penalty 0.8
    assert similarity("hrs", "hr") == pytest.approx(0.4)


def test_similarity_identical_with_prefix_bonus():
    """Test that identical long labels score above 1.0 via the prefix bonus."""
    assert similarity("developer", "developer") == pytest.approx(1.1)
    assert similarity("dr", "dr") == pytest.approx(1.0)


def test_similarity_empty_and_symmetric():
    """Test empty inputs and symmetry."""
    assert similarity("", "") == 0.0
    assert similarity("nurse", "") == pytest.approx(0.0)

    for a in SAMPLE_WORDS:
        for b in SAMPLE_WORDS:
            assert similarity(a, b) == pytest.approx(similarity(b, a))


def test_similarity_dissimilar_labels_score_low():
    """Test that unrelated labels stay well below match thresholds."""
    assert similarity("plumber", "nurse") < 0.5
    assert similarity("chef", "cook") < 0.5


def test_rank_candidates_orders_deterministically():
    """Test ordering by score, then length, then lexicographic."""
    ranked = rank_candidates([
        ("bb", 0.9),
        ("aa", 0.9),
        ("ccc", 0.9),
        ("zzzz", 0.8),
    ])

    assert [candidate for candidate, _ in ranked] == ["ccc", "aa", "bb", "zzzz"]
