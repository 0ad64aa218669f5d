"""
Term normalizer for occugroup.

Builds an open canonical vocabulary from observed labels. Each new term is
resolved to an existing canonical term (by trie prefix or by similarity) or
registered as a new canonical term. Safe for concurrent use.
"""

import logging
from typing import Callable, Dict, List, Optional, Set

from ..similarity import longest_common_prefix, rank_candidates, similarity
from ..text import clean_label
from .rwlock import ReadWriteLock
from .trie import CanonicalTrie


logger = logging.getLogger(__name__)

DEFAULT_FUZZY_THRESHOLD = 0.80
DEFAULT_MERGE_THRESHOLD = 0.85

# Prefix heuristic: short terms need an exact match, longer ones 80% prefix coverage
PREFIX_MIN_LENGTH = 5
PREFIX_COVERAGE = 0.8


class TermNormalizer:
    """
    Incremental canonicalizer for free-text labels.

    State:
    - canonical terms: every observed term -> its canonical term
      (a term is canonical when it maps to itself)
    - variations: canonical term -> variants that resolved to it
    - match cache: memoized prefix/fuzzy resolutions
    - trie: every observed term with its label and observation count

    Lookups share a read lock; every mutation takes the write lock.
    """

    def __init__(
        self,
        fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD,
        merge_threshold: float = DEFAULT_MERGE_THRESHOLD,
        scorer: Callable[[str, str], float] = similarity,
    ):
        """
        Initialize normalizer.

        Args:
            fuzzy_threshold: Minimum score to resolve a new term to an existing one
            merge_threshold: Minimum score to merge two canonical terms
            scorer: Similarity function over two cleaned terms
        """
        self.fuzzy_threshold = fuzzy_threshold
        self.merge_threshold = merge_threshold
        self.scorer = scorer

        self._trie = CanonicalTrie()
        self._canonical_terms: Dict[str, str] = {}
        self._variations: Dict[str, List[str]] = {}
        self._match_cache: Dict[str, str] = {}
        self._lock = ReadWriteLock()

    def normalize(self, term: str) -> str:
        """
        Resolve a term to its canonical form.

        Args:
            term: Already-cleaned label

        Returns:
            Canonical term, or term unchanged when it is empty after trimming
        """
        cleaned = clean_label(term)
        if not cleaned:
            return term

        # Fast path: already resolved
        with self._lock.read_locked():
            known = self._lookup(cleaned)

        if known is not None:
            with self._lock.write_locked():
                # A merge may have redirected the term while unlocked
                canonical = self._lookup(cleaned) or known
                self._trie.insert(cleaned, canonical)
            return canonical

        with self._lock.write_locked():
            # Another thread may have resolved the term while we waited
            canonical = self._lookup(cleaned)
            if canonical is not None:
                self._trie.insert(cleaned, canonical)
                return canonical

            # Prefix match (incomplete or extended words)
            candidate = self._trie.longest_prefix_match(cleaned)
            if candidate is not None and self._is_similar_by_prefix(cleaned, candidate):
                self._register_alias(cleaned, candidate)
                logger.debug("Prefix match: '%s' -> '%s'", cleaned, candidate)
                return candidate

            # Fuzzy match against canonical terms
            candidate = self._best_fuzzy_match(cleaned)
            if candidate is not None:
                self._register_alias(cleaned, candidate)
                self._variations[candidate].append(cleaned)
                logger.debug("Fuzzy match: '%s' -> '%s'", cleaned, candidate)
                return candidate

            self._register_canonical(cleaned)
            logger.debug("New canonical term: '%s'", cleaned)
            return cleaned

    def _lookup(self, cleaned: str) -> Optional[str]:
        canonical = self._match_cache.get(cleaned)
        if canonical is None:
            canonical = self._canonical_terms.get(cleaned)
        return canonical

    def _register_alias(self, cleaned: str, canonical: str) -> None:
        self._match_cache[cleaned] = canonical
        self._canonical_terms[cleaned] = canonical
        self._trie.insert(cleaned, canonical)

    def _register_canonical(self, cleaned: str) -> None:
        self._canonical_terms[cleaned] = cleaned
        self._variations[cleaned] = [cleaned]
        self._trie.insert(cleaned, cleaned)

    @staticmethod
    def _is_similar_by_prefix(term: str, candidate: str) -> bool:
        """Accept a prefix candidate covering most of the shorter string."""
        if len(term) < PREFIX_MIN_LENGTH:
            return term == candidate

        shorter = min(len(term), len(candidate))
        common = len(longest_common_prefix(term, candidate))
        return common >= shorter * PREFIX_COVERAGE

    def _best_fuzzy_match(self, cleaned: str) -> Optional[str]:
        """Highest-scoring canonical term at or above the fuzzy threshold."""
        scored = []
        for key, canonical in self._canonical_terms.items():
            if key != canonical:
                continue
            score = self.scorer(cleaned, canonical)
            if score >= self.fuzzy_threshold:
                scored.append((canonical, score))

        if not scored:
            return None
        return rank_candidates(scored)[0][0]

    def get_canonical_terms(self) -> List[str]:
        """
        Canonical terms, most frequently observed first.

        Ties are ordered lexicographically.
        """
        with self._lock.read_locked():
            return self._sorted_canonicals()

    def _sorted_canonicals(self) -> List[str]:
        canonicals = [key for key, value in self._canonical_terms.items() if key == value]
        return sorted(canonicals, key=lambda term: (-self._trie.frequency_of(term), term))

    def merge_similar_terms(self) -> Dict[str, str]:
        """
        Merge near-duplicate canonical terms.

        Compares every pair of canonical terms; pairs scoring at or above
        merge_threshold are merged into the more frequent term (ties: the
        longer term). A term that took part in a merge is not compared again
        during the same call, so merges do not chain within one call.

        Everything that resolved to the dropped term is redirected to the
        kept term. Keys are never removed.

        Returns:
            Dict mapping each dropped term to the term it was merged into
        """
        with self._lock.write_locked():
            canonicals = self._sorted_canonicals()
            merged: Dict[str, str] = {}
            touched: Set[str] = set()

            for i, first in enumerate(canonicals):
                for second in canonicals[i + 1:]:
                    if first in touched:
                        break
                    if second in touched:
                        continue

                    if self.scorer(first, second) < self.merge_threshold:
                        continue

                    keep, drop = self._choose_survivor(first, second)
                    self._redirect(drop, keep)
                    merged[drop] = keep
                    touched.update((keep, drop))

            if merged:
                logger.info(
                    "Merged %d canonical term(s); %d remain",
                    len(merged), len(canonicals) - len(merged),
                )

            return merged

    def _choose_survivor(self, first: str, second: str):
        """(keep, drop): higher frequency wins, then the longer term, then first."""
        freq_first = self._trie.frequency_of(first)
        freq_second = self._trie.frequency_of(second)

        if freq_first > freq_second or (freq_first == freq_second and len(first) >= len(second)):
            return first, second
        return second, first

    def _redirect(self, drop: str, keep: str) -> None:
        for key, canonical in self._canonical_terms.items():
            if canonical == drop:
                self._canonical_terms[key] = keep
                self._trie.relabel(key, keep)

        for key, canonical in self._match_cache.items():
            if canonical == drop:
                self._match_cache[key] = keep

        self._variations.setdefault(keep, []).extend(self._variations.pop(drop, []))

    def get_variations(self, canonical: str) -> List[str]:
        """Observed variants of a canonical term, in discovery order."""
        with self._lock.read_locked():
            return list(self._variations.get(clean_label(canonical), []))

    def frequency_of(self, term: str) -> int:
        """How many times a term has been observed."""
        with self._lock.read_locked():
            return self._trie.frequency_of(clean_label(term))

    def snapshot(self) -> Dict[str, str]:
        """Copy of the observed term -> canonical term mapping."""
        with self._lock.read_locked():
            return dict(self._canonical_terms)

    def stats(self) -> Dict[str, int]:
        """
        Vocabulary statistics.

        Returns:
            Dict with canonical_terms, observed_terms, cached_matches,
            total_observations and trie_nodes counts
        """
        with self._lock.read_locked():
            canonical_count = sum(
                1 for key, value in self._canonical_terms.items() if key == value
            )
            total = sum(freq for _, _, freq in self._trie.terms())

            return {
                "canonical_terms": canonical_count,
                "observed_terms": len(self._canonical_terms),
                "cached_matches": len(self._match_cache),
                "total_observations": total,
                "trie_nodes": self._trie.node_count,
            }
