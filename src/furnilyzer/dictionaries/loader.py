"""
Loading of the static dictionary tables from the data/ folder.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

from .base import Category, Dictionary
from ..config import Config
from ..logger import get_logger

logger = get_logger(__name__)


class DictionaryLoadError(Exception):
    """Raised when a dictionary data file exists but cannot be parsed."""


# Data file per statically shipped category
DATA_FILES = {
    Category.PRODUCT_TYPE: "product_types.json",
    Category.FEATURE: "features.json",
    Category.STYLE: "styles.json",
    Category.PLACE: "places.json",
}


def load_dictionary_file(category: Category, path: Path) -> Optional[Dictionary]:
    """
    Load one dictionary from a JSON file.

    Args:
        category: Category the file belongs to
        path: JSON file path

    Returns:
        Dictionary, or None if the file does not exist

    Raises:
        DictionaryLoadError: If the file is not valid JSON
    """
    if not path.exists():
        logger.warning(f"{category.value} dictionary file not found: {path}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DictionaryLoadError(f"Invalid {category.value} dictionary file {path}: {e}") from e

    dictionary = Dictionary.from_dict(category, payload)
    logger.info(
        f"Loaded {category.value} dictionary: {len(dictionary.entries)} entries, "
        f"{len(dictionary.all_terms)} terms"
    )
    return dictionary


def load_static_dictionaries(data_dir: Optional[Path] = None) -> Dict[Category, Dictionary]:
    """
    Load the product type, feature, style and place tables.

    Args:
        data_dir: Folder with the JSON data files. Defaults to Config.DATA_DIR

    Returns:
        Mapping of category to dictionary for every file found
    """
    data_dir = Path(data_dir) if data_dir is not None else Config.DATA_DIR
    dictionaries: Dict[Category, Dictionary] = {}

    for category, filename in DATA_FILES.items():
        dictionary = load_dictionary_file(category, data_dir / filename)
        if dictionary is not None:
            dictionaries[category] = dictionary

    return dictionaries
