"""
Configuration management for occugroup.

Handles loading and saving of taxonomy YAML files and reading runtime
settings from the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .classify.taxonomy import Taxonomy
from .classify.run import DEFAULT_MAX_WORKERS
from .normalize.normalizer import DEFAULT_FUZZY_THRESHOLD, DEFAULT_MERGE_THRESHOLD


ENV_TAXONOMY = "OCCUGROUP_TAXONOMY"
ENV_FUZZY_THRESHOLD = "OCCUGROUP_FUZZY_THRESHOLD"
ENV_MERGE_THRESHOLD = "OCCUGROUP_MERGE_THRESHOLD"
ENV_MAX_WORKERS = "OCCUGROUP_MAX_WORKERS"


@dataclass(frozen=True)
class Settings:
    """Runtime settings."""
    taxonomy_path: Optional[str] = None
    fuzzy_threshold: float = DEFAULT_FUZZY_THRESHOLD
    merge_threshold: float = DEFAULT_MERGE_THRESHOLD
    max_workers: int = DEFAULT_MAX_WORKERS


def load_taxonomy(path: str) -> Taxonomy:
    """
    Load a taxonomy from YAML file.

    Expected layout:

        metadata:
          name: occupations
        categories:
          doctor: [cardiologist, dr]

    Args:
        path: Path to taxonomy YAML

    Returns:
        Taxonomy built from the file

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If required fields are missing or malformed
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Taxonomy file not found: {path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        raise ValueError(f"Taxonomy file is empty: {path}")

    if not isinstance(data, dict):
        raise ValueError("Taxonomy file must contain a mapping")

    # Validate required top-level structure
    if "categories" not in data:
        raise ValueError("Missing required 'categories' key in taxonomy")

    categories = data["categories"]
    if not isinstance(categories, dict):
        raise ValueError("'categories' must be a mapping of category -> keywords")

    # Validate each category has a keyword list
    for category, keywords in categories.items():
        if not isinstance(keywords, list):
            raise ValueError(f"Keywords for category '{category}' must be a list")

    metadata = data.get("metadata") or {}
    name = metadata.get("name", config_path.stem) if isinstance(metadata, dict) else config_path.stem

    return Taxonomy(categories, name=name)


def save_taxonomy(path: str, taxonomy: Taxonomy) -> None:
    """
    Save a taxonomy to YAML file.

    Note: This will overwrite the existing file and does not preserve
    comments.

    Args:
        path: Path to save taxonomy YAML
        taxonomy: Taxonomy to write

    Raises:
        IOError: If file cannot be written
    """
    config_path = Path(path)

    # Ensure parent directory exists
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: Dict[str, Any] = {
        "metadata": {"name": taxonomy.name},
        "categories": taxonomy.to_dict(),
    }

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, allow_unicode=True, sort_keys=False)


def _read_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Invalid {key}: '{raw}' must be a number")
    if value < 0:
        raise ValueError(f"Invalid {key}: '{raw}' must not be negative")
    return value


def _read_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"Invalid {key}: '{raw}' must be an integer")
    if value < 1:
        raise ValueError(f"Invalid {key}: '{raw}' must be at least 1")
    return value


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from environment variables.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Settings with defaults for unset variables

    Raises:
        ValueError: If a variable holds an invalid value
    """
    if environ is None:
        environ = os.environ

    taxonomy_path = environ.get(ENV_TAXONOMY) or None

    return Settings(
        taxonomy_path=taxonomy_path,
        fuzzy_threshold=_read_float(environ, ENV_FUZZY_THRESHOLD, DEFAULT_FUZZY_THRESHOLD),
        merge_threshold=_read_float(environ, ENV_MERGE_THRESHOLD, DEFAULT_MERGE_THRESHOLD),
        max_workers=_read_int(environ, ENV_MAX_WORKERS, DEFAULT_MAX_WORKERS),
    )
