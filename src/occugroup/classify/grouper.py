"""
Category grouper for occugroup.

Maps free-text occupation labels onto a fixed taxonomy using tiered matching:
exact keyword, whole-word substring, then a bounded fuzzy match for typos.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..similarity import levenshtein_distance
from ..text import clean_label
from .taxonomy import DEFAULT_TAXONOMY, Taxonomy


logger = logging.getLogger(__name__)

# Fuzzy tier bounds: typos only, never short abbreviations
FUZZY_MAX_DISTANCE = 1
FUZZY_MIN_LENGTH = 5
FUZZY_MAX_LENGTH_DIFF = 1


class CategoryGrouper:
    """
    Rule-driven classifier over a keyword -> category index.

    Tiers, first match wins:
    - Exact: the cleaned label is a keyword
    - Substring: a keyword appears as whole words inside the label
    - Fuzzy: a keyword within edit distance 1 (labels of 5+ characters)

    When several keywords qualify, the longest keyword wins and ties are
    broken lexicographically, so results never depend on dict ordering.

    Not internally locked: add_rule() must not run concurrently with
    classify().
    """

    def __init__(self, taxonomy: Optional[Taxonomy] = None):
        """
        Initialize grouper.

        Args:
            taxonomy: Category table to index (default: DEFAULT_TAXONOMY)
        """
        self.taxonomy = taxonomy if taxonomy is not None else DEFAULT_TAXONOMY
        self._rules: Dict[str, str] = {}
        self._ordered_keys: Optional[List[str]] = None

        for keyword, category in self.taxonomy.iter_rules():
            self._rules[keyword] = category

        logger.debug(
            "Indexed %d keywords across %d categories from taxonomy '%s'",
            len(self._rules), len(self.taxonomy), self.taxonomy.name,
        )

    def classify(self, label: str) -> str:
        """
        Return the category for a label, or "" when nothing matches.

        Args:
            label: Already-cleaned label text

        Returns:
            Category name, or empty string for unclassified labels
        """
        cleaned = clean_label(label)

        if not cleaned:
            return ""

        # 1. Exact match
        category = self._rules.get(cleaned)
        if category is not None:
            return category

        # 2. Whole-word substring match
        padded = f" {cleaned} "
        for key in self._keys_by_length():
            if f" {key} " in padded:
                return self._rules[key]

        # 3. Bounded fuzzy match (typos only)
        match = self._fuzzy_match(cleaned)
        if match is not None:
            return self._rules[match]

        return ""

    def _fuzzy_match(self, cleaned: str) -> Optional[str]:
        """Closest keyword within the fuzzy bounds, or None."""
        if len(cleaned) < FUZZY_MIN_LENGTH:
            return None

        best: Optional[Tuple[int, int, str]] = None

        for key in self._rules:
            if abs(len(key) - len(cleaned)) > FUZZY_MAX_LENGTH_DIFF:
                continue

            distance = levenshtein_distance(cleaned, key)
            if distance > FUZZY_MAX_DISTANCE:
                continue

            # Smallest distance, then longest keyword, then lexicographic
            rank = (distance, -len(key), key)
            if best is None or rank < best:
                best = rank

        return best[2] if best is not None else None

    def _keys_by_length(self) -> List[str]:
        """Keywords ordered longest first, ties lexicographic."""
        if self._ordered_keys is None:
            self._ordered_keys = sorted(self._rules, key=lambda key: (-len(key), key))
        return self._ordered_keys

    def add_rule(self, term: str, category: str) -> None:
        """
        Add or overwrite a grouping rule (for runtime tuning).

        Args:
            term: Keyword to match
            category: Category the keyword maps to
        """
        keyword = clean_label(term)
        if not keyword:
            return

        previous = self._rules.get(keyword)
        self._rules[keyword] = category
        self._ordered_keys = None

        if previous is not None and previous != category:
            logger.info("Rule '%s' moved from '%s' to '%s'", keyword, previous, category)

    def get_all_groups(self) -> Dict[str, Tuple[str, ...]]:
        """
        Snapshot of all categories with their keywords.

        Includes rules added at runtime. Keywords keep rule insertion order.

        Returns:
            Dict mapping category names to keyword tuples
        """
        groups: Dict[str, List[str]] = {}
        for keyword, category in self._rules.items():
            groups.setdefault(category, []).append(keyword)

        return {category: tuple(keywords) for category, keywords in groups.items()}

    def rules(self) -> Dict[str, str]:
        """Snapshot of the keyword -> category index."""
        return dict(self._rules)

    def categories(self) -> List[str]:
        """Category names in first-seen order."""
        return list(self.get_all_groups())
