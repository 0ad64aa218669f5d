"""occugroup: grouping and canonicalization of free-text occupation labels."""

from .classify import CategoryGrouper, DEFAULT_TAXONOMY, LabelProcessor, Taxonomy
from .normalize import TermNormalizer
from .similarity import levenshtein_distance, similarity

__version__ = "0.1.0"
__all__ = [
    "CategoryGrouper",
    "DEFAULT_TAXONOMY",
    "LabelProcessor",
    "Taxonomy",
    "TermNormalizer",
    "levenshtein_distance",
    "similarity",
]
