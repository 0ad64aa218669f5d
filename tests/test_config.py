"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml

from occugroup.classify import CategoryGrouper, Taxonomy
from occugroup.config import Settings, load_settings, load_taxonomy, save_taxonomy


EXAMPLE_TAXONOMY = Path(__file__).parent.parent / "config" / "taxonomy.yaml"


def write_yaml(path: Path, data) -> str:
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return str(path)


def test_load_taxonomy(tmp_path):
    """Test loading a valid taxonomy file."""
    path = write_yaml(tmp_path / "tax.yaml", {
        "metadata": {"name": "care"},
        "categories": {"nurse": ["RN", "registered nurse"]},
    })

    taxonomy = load_taxonomy(path)

    assert taxonomy.name == "care"
    assert taxonomy.keywords("nurse") == ("rn", "registered nurse")


def test_load_taxonomy_name_defaults_to_file_stem(tmp_path):
    """Test taxonomy naming without metadata."""
    path = write_yaml(tmp_path / "trades.yaml", {"categories": {"trades": ["welder"]}})

    assert load_taxonomy(path).name == "trades"


def test_load_example_taxonomy():
    """Test that the shipped example taxonomy loads and classifies."""
    grouper = CategoryGrouper(load_taxonomy(str(EXAMPLE_TAXONOMY)))

    assert grouper.classify("registered nurse") == "nurse"
    assert grouper.classify("docter") == "doctor"


def test_load_taxonomy_missing_file(tmp_path):
    """Test missing file handling."""
    with pytest.raises(FileNotFoundError):
        load_taxonomy(str(tmp_path / "missing.yaml"))


@pytest.mark.parametrize("content", [
    "",
    "- just\n- a list\n",
    "metadata:\n  name: x\n",
    "categories:\n  - nurse\n",
    "categories:\n  nurse: rn\n",
])
def test_load_taxonomy_invalid(tmp_path, content):
    """Test structural validation."""
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_taxonomy(str(path))


def test_save_and_reload_taxonomy(tmp_path):
    """Test that saved taxonomies load back unchanged."""
    taxonomy = Taxonomy({"nurse": ["rn"], "doctor": ["dr", "md"]}, name="mini")
    path = tmp_path / "nested" / "mini.yaml"

    save_taxonomy(str(path), taxonomy)
    reloaded = load_taxonomy(str(path))

    assert reloaded.name == "mini"
    assert reloaded.to_dict() == taxonomy.to_dict()


def test_load_settings_defaults():
    """Test defaults with an empty environment."""
    assert load_settings({}) == Settings()
    assert Settings().fuzzy_threshold == 0.80
    assert Settings().merge_threshold == 0.85


def test_load_settings_from_environment():
    """Test environment overrides."""
    settings = load_settings({
        "OCCUGROUP_TAXONOMY": "config/taxonomy.yaml",
        "OCCUGROUP_FUZZY_THRESHOLD": "0.9",
        "OCCUGROUP_MERGE_THRESHOLD": "0.95",
        "OCCUGROUP_MAX_WORKERS": "4",
    })

    assert settings.taxonomy_path == "config/taxonomy.yaml"
    assert settings.fuzzy_threshold == 0.9
    assert settings.merge_threshold == 0.95
    assert settings.max_workers == 4


@pytest.mark.parametrize("key,value", [
    ("OCCUGROUP_FUZZY_THRESHOLD", "high"),
    ("OCCUGROUP_MERGE_THRESHOLD", "-1"),
    ("OCCUGROUP_MAX_WORKERS", "0"),
    ("OCCUGROUP_MAX_WORKERS", "two"),
])
def test_load_settings_invalid(key, value):
    """Test rejection of invalid values."""
    with pytest.raises(ValueError):
        load_settings({key: value})
