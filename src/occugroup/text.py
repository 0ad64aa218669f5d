"""Label cleaning shared by the grouper and the normalizer."""


def clean_label(label: str) -> str:
    """Lowercase and trim a label; all rule, term and cache keys use this form."""
    return label.strip().lower()
