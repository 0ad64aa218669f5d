"""
Classification module for occugroup.

Handles rule-driven grouping of occupation labels onto a fixed taxonomy.
"""

from .taxonomy import Taxonomy, CATEGORY_DEFINITIONS, DEFAULT_TAXONOMY
from .grouper import CategoryGrouper
from .run import LabelProcessor, BatchResult, RecordResult, detect_category_field

__all__ = [
    "Taxonomy",
    "CATEGORY_DEFINITIONS",
    "DEFAULT_TAXONOMY",
    "CategoryGrouper",
    "LabelProcessor",
    "BatchResult",
    "RecordResult",
    "detect_category_field",
]
