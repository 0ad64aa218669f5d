"""
Normalization module for occugroup.

Handles open-vocabulary canonicalization of labels:
- Trie-indexed prefix matching
- Similarity-based fuzzy matching
- Batch merging of near-duplicate canonical terms
"""

from .trie import CanonicalTrie
from .rwlock import ReadWriteLock
from .normalizer import TermNormalizer

__all__ = [
    "CanonicalTrie",
    "ReadWriteLock",
    "TermNormalizer",
]
