"""
String similarity primitives for occugroup.

Provides the edit distance shared by the grouper and the normalizer, and the
composite similarity score used to decide "close enough" matches between
free-text labels.
"""

import os
from typing import List

from rapidfuzz.distance import LCSseq, Levenshtein


# Composite score weights
LCS_WEIGHT = 0.25
LEVENSHTEIN_WEIGHT = 0.5
TOKEN_WEIGHT = 0.25

# Prefix bonus applies when the shared prefix is long in absolute and relative terms
PREFIX_BONUS = 0.1
PREFIX_MIN_LENGTH = 5
PREFIX_MIN_RATIO = 0.6

# Length penalty applies when lengths differ by more than this fraction
LENGTH_DIFF_RATIO = 0.2
LENGTH_PENALTY = 0.8


def levenshtein_distance(a: str, b: str) -> int:
    """
    Minimum number of single-character edits turning a into b.

    Insertions, deletions and substitutions each cost 1. Works on code
    points, so an accented character counts as one unit.

    Args:
        a: First string
        b: Second string

    Returns:
        Edit distance (0 when the strings are equal)
    """
    return Levenshtein.distance(a, b)


def longest_common_subsequence(a: str, b: str) -> int:
    """Length of the longest common (not necessarily contiguous) subsequence."""
    return LCSseq.similarity(a, b)


def longest_common_prefix(a: str, b: str) -> str:
    """Longest shared prefix of two strings."""
    return os.path.commonprefix([a, b])


def token_overlap(a: str, b: str) -> float:
    """
    Fraction of shared whitespace-delimited tokens.

    The shared token count is divided by the larger token-set size.
    Two empty token sets overlap fully; exactly one empty set does not.
    """
    tokens_a = set(a.split())
    tokens_b = set(b.split())

    if not tokens_a and not tokens_b:
        return 1.0
    if not tokens_a or not tokens_b:
        return 0.0

    return len(tokens_a & tokens_b) / max(len(tokens_a), len(tokens_b))


def similarity(a: str, b: str) -> float:
    """
    Composite similarity score between two labels.

    Combines the LCS ratio, the edit-distance ratio and token overlap, adds
    a bonus for long shared prefixes and penalizes large length gaps:

        (0.25 * lcs + 0.5 * levenshtein + 0.25 * tokens + bonus) * penalty

    Edit-distance closeness carries the most weight, so single typos in
    long titles still score high. The prefix bonus can push the score
    slightly above 1.0, so treat it as a ranking score.

    Args:
        a: First label (already lowercased and trimmed)
        b: Second label (already lowercased and trimmed)

    Returns:
        Similarity score, 0.0 when both strings are empty
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 0.0

    length_penalty = 1.0
    if abs(len(a) - len(b)) / max_len > LENGTH_DIFF_RATIO:
        length_penalty = LENGTH_PENALTY

    lcs_ratio = longest_common_subsequence(a, b) / max_len
    lev_ratio = 1.0 - levenshtein_distance(a, b) / max_len
    overlap = token_overlap(a, b)

    prefix_len = len(longest_common_prefix(a, b))
    prefix_bonus = 0.0
    if prefix_len >= PREFIX_MIN_LENGTH and prefix_len / max_len > PREFIX_MIN_RATIO:
        prefix_bonus = PREFIX_BONUS

    score = (
        lcs_ratio * LCS_WEIGHT
        + lev_ratio * LEVENSHTEIN_WEIGHT
        + overlap * TOKEN_WEIGHT
        + prefix_bonus
    )

    return score * length_penalty


def rank_candidates(scores: List[tuple]) -> List[tuple]:
    """
    Order (candidate, score) pairs for deterministic selection.

    Highest score first, then the longer candidate, then lexicographic order.
    """
    return sorted(scores, key=lambda item: (-item[1], -len(item[0]), item[0]))
