"""
Record classification orchestrator for occugroup.

Handles batch grouping of already-cleaned records (field name -> value) and
builds the category -> record id index.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from ..normalize import TermNormalizer
from .grouper import CategoryGrouper


logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 10

# Priority-ordered field names that usually hold a category-like value
CATEGORY_FIELDS = (
    "category", "type", "specialty", "profession", "occupation",
    "role", "title", "job", "position", "designation",
    "department", "field", "industry", "sector", "skill",
)

# Header keywords used to pick the category column, ordered by priority
CATEGORY_COLUMN_KEYWORDS = (
    "category", "type", "specialty", "profession", "occupation",
    "role", "title", "job", "position", "designation",
    "department", "field", "industry", "sector", "work",
)

# "name" values shorter than this are ignored (keeps abbreviations like HR, IT)
NAME_MIN_LENGTH = 2


@dataclass
class RecordResult:
    """Result of grouping one record."""
    record_id: int
    fields: Dict[str, str]
    grouped_category: str
    canonical_term: str


@dataclass
class BatchResult:
    """Result of grouping a batch of records."""
    records: List[RecordResult] = field(default_factory=list)
    groups: Dict[str, List[int]] = field(default_factory=dict)
    counters: Dict[str, int] = field(default_factory=lambda: {
        "processed": 0,
        "classified": 0,
        "unclassified": 0,
        "errors": 0,
    })


def detect_category_field(field_names: Iterable[str]) -> Optional[str]:
    """
    Find the field most likely to hold the record's category.

    Exact (case-insensitive) matches win over substring matches.

    Args:
        field_names: Field names of a record or header row

    Returns:
        The original field name, or None if nothing looks like a category
    """
    names = list(field_names)

    for name in names:
        if name.lower() in CATEGORY_COLUMN_KEYWORDS:
            return name

    for name in names:
        lowered = name.lower()
        for keyword in CATEGORY_COLUMN_KEYWORDS:
            if keyword in lowered:
                return name

    return None


class LabelProcessor:
    """
    Orchestrates grouping and canonicalization of record batches.

    Features:
    - Category detection from priority-ordered fields
    - Open-vocabulary canonical term per record (shared normalizer)
    - Bounded worker pool
    - Per-record error isolation
    """

    def __init__(
        self,
        grouper: Optional[CategoryGrouper] = None,
        normalizer: Optional[TermNormalizer] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        """
        Initialize processor.

        Args:
            grouper: Taxonomy grouper (default: CategoryGrouper())
            normalizer: Shared term normalizer (default: TermNormalizer())
            max_workers: Worker threads for process_records()
        """
        self.grouper = grouper or CategoryGrouper()
        self.normalizer = normalizer or TermNormalizer()
        self.max_workers = max_workers

    def detect_category(self, record: Mapping[str, str]) -> str:
        """
        Group a record using its category-like fields.

        Priority fields are tried in order; the first one that classifies
        wins. A "name" field is the last resort.

        Args:
            record: Field name -> cleaned value

        Returns:
            Category name, or "" when no field classifies
        """
        for field_name in CATEGORY_FIELDS:
            for key, value in record.items():
                if key.lower() == field_name and value:
                    category = self.grouper.classify(value)
                    if category:
                        return category
                    break

        for key, value in record.items():
            if key.lower() == "name" and value and len(value) >= NAME_MIN_LENGTH:
                return self.grouper.classify(value)

        return ""

    def process_record(self, record_id: int, record: Mapping[str, str]) -> RecordResult:
        """Group and canonicalize a single record."""
        fields = dict(record)
        grouped = self.detect_category(fields)

        canonical = ""
        label_field = detect_category_field(fields)
        if label_field is not None and fields[label_field]:
            canonical = self.normalizer.normalize(fields[label_field])

        return RecordResult(
            record_id=record_id,
            fields=fields,
            grouped_category=grouped,
            canonical_term=canonical,
        )

    def process_records(self, records: Iterable[Mapping[str, str]]) -> BatchResult:
        """
        Group a batch of records.

        Records get 1-based ids in input order. Results keep input order.

        Args:
            records: Already-cleaned records

        Returns:
            BatchResult with per-record results, group index and counters
        """
        batch = list(records)
        result = BatchResult()

        logger.info("Processing %d record(s)", len(batch))

        def _safe_process(item):
            record_id, record = item
            try:
                return self.process_record(record_id, record)
            except Exception as e:
                logger.warning("Error processing record %d: %s", record_id, e)
                return None

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            outcomes = list(executor.map(_safe_process, enumerate(batch, start=1)))

        for outcome in outcomes:
            if outcome is None:
                result.counters["errors"] += 1
                continue

            result.records.append(outcome)
            result.counters["processed"] += 1

            if outcome.grouped_category:
                result.counters["classified"] += 1
                result.groups.setdefault(outcome.grouped_category, []).append(outcome.record_id)
            else:
                result.counters["unclassified"] += 1

        logger.info(
            "Processed %d record(s): %d classified, %d unclassified, %d error(s)",
            result.counters["processed"],
            result.counters["classified"],
            result.counters["unclassified"],
            result.counters["errors"],
        )

        return result
