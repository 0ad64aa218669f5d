"""Tests for the taxonomy table."""

import pytest

from occugroup.classify import CATEGORY_DEFINITIONS, DEFAULT_TAXONOMY, Taxonomy


def test_default_taxonomy_covers_definitions():
    """Test that the built-in taxonomy holds every curated category."""
    assert list(DEFAULT_TAXONOMY) == list(CATEGORY_DEFINITIONS)
    assert "doctor" in DEFAULT_TAXONOMY
    assert "cardiologist" in DEFAULT_TAXONOMY.keywords("doctor")
    assert DEFAULT_TAXONOMY.name == "occupations"


def test_keywords_are_cleaned_and_deduplicated():
    """Test lowercase/trim normalization and per-category de-duplication."""
    taxonomy = Taxonomy({"sales": ["Sales Rep", "sales rep ", "  AE", ""]})

    assert taxonomy.keywords("sales") == ("sales rep", "ae")


def test_iter_rules_follows_declaration_order():
    """Test that rules come out category by category, keyword by keyword."""
    taxonomy = Taxonomy({"b": ["y", "x"], "a": ["z"]})

    assert list(taxonomy.iter_rules()) == [("y", "b"), ("x", "b"), ("z", "a")]


def test_taxonomy_is_read_only():
    """Test that the category table cannot be modified."""
    taxonomy = Taxonomy({"nurse": ["rn"]})

    with pytest.raises(TypeError):
        taxonomy.categories["nurse"] = ("lpn",)


@pytest.mark.parametrize("categories", [
    {"": ["x"]},
    {"   ": ["x"]},
    {"nurse": "rn"},
    {"nurse": ["rn", 5]},
])
def test_invalid_taxonomy_rejected(categories):
    """Test validation of category names and keywords."""
    with pytest.raises(ValueError):
        Taxonomy(categories)


def test_unknown_category_has_no_keywords():
    """Test lookup of a category that does not exist."""
    assert DEFAULT_TAXONOMY.keywords("astronaut") == ()


def test_to_dict_round_trip():
    """Test plain-dict export."""
    taxonomy = Taxonomy({"nurse": ["rn", "lpn"]}, name="care")

    assert taxonomy.to_dict() == {"nurse": ["rn", "lpn"]}
    assert dict(Taxonomy(taxonomy.to_dict()).categories) == dict(taxonomy.categories)
    assert len(taxonomy) == 1
