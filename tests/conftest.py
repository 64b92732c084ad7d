"""
Pytest configuration and fixtures for Furnilyzer tests.
"""
import sys
from pathlib import Path

# Add src to path for imports
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest
from furnilyzer.dictionaries import Category, Dictionary
from furnilyzer.models import DictionaryEntry, PlaceEntry, TermRecord
from furnilyzer.services import FurnitureAnalyzer


@pytest.fixture
def data_dir():
    """Shipped data folder."""
    return project_root / "data"


@pytest.fixture
def product_type_dictionary():
    return Dictionary(Category.PRODUCT_TYPE, [
        DictionaryEntry(
            canonical="Sofa",
            synonyms=["couch", "settee", "loveseat"],
            spelling_variations=["sofas", "soffa"],
        ),
        DictionaryEntry(
            canonical="Armchair",
            synonyms=["wing chair", "club chair"],
            spelling_variations=["armchairs"],
        ),
    ])


@pytest.fixture
def feature_dictionary():
    return Dictionary(Category.FEATURE, [
        DictionaryEntry(canonical="Elevated Arms", synonyms=["raised arms"]),
        DictionaryEntry(canonical="Tufted Back", synonyms=["button tufted"]),
        DictionaryEntry(canonical="Leather Piping"),
    ])


@pytest.fixture
def style_dictionary():
    return Dictionary(Category.STYLE, [
        DictionaryEntry(canonical="Modern", spelling_variations=["modren"]),
        DictionaryEntry(
            canonical="Mid-Century",
            synonyms=["mid century modern"],
            spelling_variations=["midcentury"],
        ),
        DictionaryEntry(canonical="Scandinavian", synonyms=["nordic"]),
    ])


@pytest.fixture
def place_dictionary():
    return Dictionary(Category.PLACE, [
        PlaceEntry(canonical="Italy", synonyms=["italia"], region="Europe"),
        PlaceEntry(canonical="Denmark", region="Europe"),
        PlaceEntry(canonical="India", region="Asia"),
        DictionaryEntry(canonical="Europe", synonyms=["european"]),
    ])


@pytest.fixture
def brand_dictionary():
    return Dictionary.from_records(Category.BRAND, [
        TermRecord(name="Bolzan", id=1),
        TermRecord(name="Poltrona Frau", id=2),
        TermRecord(name="1882", id=3),
    ])


@pytest.fixture
def product_name_dictionary():
    return Dictionary.from_records(Category.PRODUCT_NAME, [
        TermRecord(name="Togo", id=101, brand_id=1),
        TermRecord(name="Egg Chair", id=102, brand_id=2),
    ])


@pytest.fixture
def dictionaries(
    product_type_dictionary,
    feature_dictionary,
    style_dictionary,
    place_dictionary,
    brand_dictionary,
    product_name_dictionary,
):
    """All six category dictionaries."""
    return {
        Category.PRODUCT_TYPE: product_type_dictionary,
        Category.FEATURE: feature_dictionary,
        Category.STYLE: style_dictionary,
        Category.PLACE: place_dictionary,
        Category.BRAND: brand_dictionary,
        Category.PRODUCT_NAME: product_name_dictionary,
    }


@pytest.fixture
def analyzer(dictionaries):
    """Fully wired analyzer with the default matchers."""
    return FurnitureAnalyzer(dictionaries)


@pytest.fixture
def debug_analyzer(dictionaries):
    """Analyzer that attaches match details to results."""
    return FurnitureAnalyzer(dictionaries, debug=True)
