"""
Canonical trie store for occugroup.

A character-indexed prefix tree. Every terminal node carries the canonical
label its term resolved to and how often the term has been observed.

Nodes live in an arena of parallel lists addressed by index; node 0 is the
root and is never terminal.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple


ROOT = 0


class CanonicalTrie:
    """Prefix tree over observed terms with per-term label and frequency."""

    def __init__(self):
        self._children: List[Dict[str, int]] = [{}]
        self._terminal: List[bool] = [False]
        self._labels: List[Optional[str]] = [None]
        self._frequency: List[int] = [0]
        self._term_count = 0

    def _new_node(self) -> int:
        self._children.append({})
        self._terminal.append(False)
        self._labels.append(None)
        self._frequency.append(0)
        return len(self._children) - 1

    def _find(self, term: str) -> Optional[int]:
        """Index of the node at the end of term's path, or None."""
        node = ROOT
        for char in term:
            node = self._children[node].get(char)
            if node is None:
                return None
        return node

    def insert(self, term: str, label: str) -> int:
        """
        Record an observation of term resolving to label.

        Creates missing nodes, marks the final node terminal, stores the
        label and increments the frequency counter.

        Args:
            term: Observed term (non-empty)
            label: Canonical label it resolved to

        Returns:
            Frequency of term after this observation

        Raises:
            ValueError: If term is empty
        """
        if not term:
            raise ValueError("Cannot insert an empty term")

        node = ROOT
        for char in term:
            child = self._children[node].get(char)
            if child is None:
                child = self._new_node()
                self._children[node][char] = child
            node = child

        if not self._terminal[node]:
            self._terminal[node] = True
            self._term_count += 1

        self._labels[node] = label
        self._frequency[node] += 1
        return self._frequency[node]

    def longest_prefix_match(self, term: str) -> Optional[str]:
        """
        Label of the longest registered term that is a prefix of term.

        Walks along term as far as the trie allows and keeps the label of
        the last terminal node seen.
        """
        node = ROOT
        match = None

        for char in term:
            node = self._children[node].get(char)
            if node is None:
                break
            if self._terminal[node]:
                match = self._labels[node]

        return match

    def frequency_of(self, term: str) -> int:
        """Observation count for term (0 if never inserted)."""
        node = self._find(term)
        if node is None or not self._terminal[node]:
            return 0
        return self._frequency[node]

    def relabel(self, term: str, label: str) -> bool:
        """
        Point an existing term at a new canonical label.

        Frequency is left untouched.

        Returns:
            True if term was registered, False otherwise
        """
        node = self._find(term)
        if node is None or not self._terminal[node]:
            return False
        self._labels[node] = label
        return True

    def terms(self) -> Iterator[Tuple[str, str, int]]:
        """Yield (term, label, frequency) for every registered term, depth-first."""
        stack = [(ROOT, "")]
        while stack:
            node, prefix = stack.pop()
            if self._terminal[node]:
                yield prefix, self._labels[node], self._frequency[node]
            for char, child in sorted(self._children[node].items(), reverse=True):
                stack.append((child, prefix + char))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the arena for debugging and introspection."""
        return {
            "node_count": self.node_count,
            "term_count": self._term_count,
            "nodes": [
                {
                    "id": idx,
                    "children": dict(self._children[idx]),
                    "terminal": self._terminal[idx],
                    "label": self._labels[idx],
                    "frequency": self._frequency[idx],
                }
                for idx in range(len(self._children))
            ],
        }

    @property
    def node_count(self) -> int:
        """Nodes in the arena, root included."""
        return len(self._children)

    def __len__(self) -> int:
        return self._term_count

    def __contains__(self, term: object) -> bool:
        if not isinstance(term, str):
            return False
        node = self._find(term)
        return node is not None and self._terminal[node]
