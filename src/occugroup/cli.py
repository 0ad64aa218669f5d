"""
CLI entrypoint for occugroup.

Provides command-line access to label grouping and canonicalization.
"""

import sys
import json
import argparse
import logging
from typing import List, Optional

import yaml
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from occugroup.classify import CategoryGrouper, DEFAULT_TAXONOMY, LabelProcessor, Taxonomy
from occugroup.config import load_settings, load_taxonomy
from occugroup.normalize import TermNormalizer


def read_labels(labels: List[str]) -> List[str]:
    """Labels from the command line, or one per line from stdin when none given."""
    if labels:
        return labels
    return [line.rstrip("\n") for line in sys.stdin if line.strip()]


def resolve_taxonomy(path: Optional[str]) -> Taxonomy:
    """Taxonomy from --taxonomy, then OCCUGROUP_TAXONOMY, then the built-in table."""
    if path is None:
        path = load_settings().taxonomy_path

    if path is None:
        return DEFAULT_TAXONOMY

    taxonomy = load_taxonomy(path)
    print(f"[OK] Loaded taxonomy from: {path}")
    return taxonomy


def print_groups(groups: dict) -> None:
    """Print taxonomy groups to console."""
    print("\n" + "=" * 60)
    print("TAXONOMY GROUPS")
    print("=" * 60)

    total_keywords = sum(len(keywords) for keywords in groups.values())
    print(f"\nCategories: {len(groups)}")
    print(f"Keywords: {total_keywords}")

    for category, keywords in groups.items():
        print(f"\n{category} ({len(keywords)})")
        print(f"   {', '.join(keywords)}")


def classify_command(args) -> int:
    """
    Execute the classify command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        taxonomy = resolve_taxonomy(args.taxonomy)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[ERROR] Failed to load taxonomy: {e}")
        return 1

    grouper = CategoryGrouper(taxonomy)
    labels = read_labels(args.labels)

    classified = 0
    for label in labels:
        category = grouper.classify(label)
        if category:
            classified += 1
            print(f"{label} -> {category}")
        else:
            print(f"{label} -> (unclassified)")

    print(f"\n[INFO] Classified {classified} of {len(labels)} label(s)")
    return 0


def normalize_command(args) -> int:
    """
    Execute the normalize command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    normalizer = TermNormalizer(
        fuzzy_threshold=settings.fuzzy_threshold,
        merge_threshold=settings.merge_threshold,
    )

    labels = read_labels(args.labels)
    for label in labels:
        print(f"{label} -> {normalizer.normalize(label)}")

    if args.merge:
        merged = normalizer.merge_similar_terms()
        print(f"\n[INFO] Merged {len(merged)} canonical term(s)")
        for dropped, kept in merged.items():
            print(f"   {dropped} -> {kept}")

    stats = normalizer.stats()

    print("\n" + "=" * 60)
    print("CANONICAL TERMS")
    print("=" * 60)
    print(f"\nObserved terms: {stats['observed_terms']}")
    print(f"Canonical terms: {stats['canonical_terms']}")
    print(f"Total observations: {stats['total_observations']}\n")

    for term in normalizer.get_canonical_terms():
        variations = normalizer.get_variations(term)
        print(f"{term} (seen {normalizer.frequency_of(term)}, variants: {len(variations)})")

    return 0


def read_records(path: Optional[str]) -> List[dict]:
    """JSON-lines records from a file, or from stdin when no path is given."""
    if path is None:
        lines = list(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()

    records = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        record = json.loads(line)
        if not isinstance(record, dict):
            raise ValueError(f"line {line_number}: expected a JSON object")
        records.append({
            str(key): "" if value is None else str(value).strip()
            for key, value in record.items()
        })

    return records


def batch_command(args) -> int:
    """
    Execute the batch command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        settings = load_settings()
        taxonomy = resolve_taxonomy(args.taxonomy)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[ERROR] {e}")
        return 1

    try:
        records = read_records(args.input)
    except (OSError, ValueError) as e:
        print(f"[ERROR] Failed to read records: {e}")
        return 1

    processor = LabelProcessor(
        grouper=CategoryGrouper(taxonomy),
        normalizer=TermNormalizer(
            fuzzy_threshold=settings.fuzzy_threshold,
            merge_threshold=settings.merge_threshold,
        ),
        max_workers=settings.max_workers,
    )

    print(f"[INFO] Processing {len(records)} record(s) with {settings.max_workers} worker(s)")
    result = processor.process_records(records)

    for record in result.records:
        category = record.grouped_category or "(unclassified)"
        print(f"#{record.record_id} -> {category} [{record.canonical_term}]")

    counters = result.counters

    print("\n" + "=" * 60)
    print("BATCH SUMMARY")
    print("=" * 60)
    print(f"\nProcessed: {counters['processed']}")
    print(f"Classified: {counters['classified']}")
    print(f"Unclassified: {counters['unclassified']}")
    print(f"Errors: {counters['errors']}\n")

    for category, record_ids in result.groups.items():
        print(f"{category}: {', '.join(str(record_id) for record_id in record_ids)}")

    return 0


def groups_command(args) -> int:
    """
    Execute the groups command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        taxonomy = resolve_taxonomy(args.taxonomy)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[ERROR] Failed to load taxonomy: {e}")
        return 1

    print_groups(CategoryGrouper(taxonomy).get_all_groups())
    return 0


def validate_taxonomy_command(args) -> int:
    """
    Execute the validate-taxonomy command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        taxonomy = load_taxonomy(args.path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"[FAIL] {args.path}: {e}")
        return 1

    grouper = CategoryGrouper(taxonomy)
    declared = sum(len(keywords) for keywords in taxonomy.categories.values())
    indexed = len(grouper.rules())

    print(f"[OK] {args.path}: {len(taxonomy)} categories, {indexed} keywords")

    if indexed < declared:
        # A keyword listed under several categories keeps the last one
        print(f"[WARN] {declared - indexed} keyword(s) appear in more than one category")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        description="occugroup - Occupation Label Grouping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Group labels onto the built-in taxonomy
  occugroup classify cardiologist "front-end developer" docter

  # Group labels read from stdin with a custom taxonomy
  cat labels.txt | occugroup classify --taxonomy config/taxonomy.yaml

  # Build a canonical vocabulary and merge near-duplicates
  occugroup normalize "software engineer" "software enginer" --merge

  # Group JSON-lines records with a bounded worker pool
  occugroup batch records.jsonl

  # Check a taxonomy file
  occugroup validate-taxonomy config/taxonomy.yaml

Environment Variables:
  OCCUGROUP_TAXONOMY          Default taxonomy YAML (default: built-in table)
  OCCUGROUP_FUZZY_THRESHOLD   Normalizer match threshold (default: 0.80)
  OCCUGROUP_MERGE_THRESHOLD   Normalizer merge threshold (default: 0.85)
  OCCUGROUP_MAX_WORKERS       Worker threads for batch processing (default: 10)
        """,
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # classify command
    classify_parser = subparsers.add_parser(
        "classify",
        help="Group labels onto the taxonomy",
    )

    classify_parser.add_argument(
        "labels",
        nargs="*",
        help="Labels to classify (default: read from stdin)",
    )

    classify_parser.add_argument(
        "--taxonomy",
        type=str,
        help="Path to taxonomy YAML (default: $OCCUGROUP_TAXONOMY or built-in)",
    )

    # normalize command
    normalize_parser = subparsers.add_parser(
        "normalize",
        help="Canonicalize labels into an open vocabulary",
    )

    normalize_parser.add_argument(
        "labels",
        nargs="*",
        help="Labels to normalize (default: read from stdin)",
    )

    normalize_parser.add_argument(
        "--merge",
        action="store_true",
        help="Merge near-duplicate canonical terms after normalizing",
    )

    # batch command
    batch_parser = subparsers.add_parser(
        "batch",
        help="Group and canonicalize JSON-lines records",
    )

    batch_parser.add_argument(
        "input",
        nargs="?",
        help="JSON-lines file, one object per record (default: read from stdin)",
    )

    batch_parser.add_argument(
        "--taxonomy",
        type=str,
        help="Path to taxonomy YAML (default: $OCCUGROUP_TAXONOMY or built-in)",
    )

    # groups command
    groups_parser = subparsers.add_parser(
        "groups",
        help="Show taxonomy categories and keywords",
    )

    groups_parser.add_argument(
        "--taxonomy",
        type=str,
        help="Path to taxonomy YAML (default: $OCCUGROUP_TAXONOMY or built-in)",
    )

    # validate-taxonomy command
    validate_parser = subparsers.add_parser(
        "validate-taxonomy",
        help="Validate a taxonomy YAML file",
    )

    validate_parser.add_argument(
        "path",
        type=str,
        help="Path to taxonomy YAML",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if not args.command:
        parser.print_help()
        return 1

    commands = {
        "classify": classify_command,
        "normalize": normalize_command,
        "batch": batch_command,
        "groups": groups_command,
        "validate-taxonomy": validate_taxonomy_command,
    }

    try:
        return commands[args.command](args)
    except KeyboardInterrupt:
        print("\n\n[INTERRUPTED] Cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
