"""
Analyzer wiring from configuration.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Type

from .analyzer import FurnitureAnalyzer
from .term_source import JsonTermSource, PostgresTermSource, TermSource, TermSourceError
from ..config import Config
from ..dictionaries import Category, Dictionary, load_static_dictionaries
from ..logger import get_logger

logger = get_logger(__name__)


def get_term_source(config: Type[Config] = Config) -> TermSource:
    """Postgres when DATABASE_URL is set, otherwise the JSON files in DATA_DIR."""
    if config.DATABASE_URL:
        logger.debug("Using Postgres term source")
        return PostgresTermSource(config.DATABASE_URL)
    logger.debug("Using JSON term source")
    return JsonTermSource(config.DATA_DIR)


def build_analyzer(
    config: Type[Config] = Config,
    term_source: Optional[TermSource] = None,
    data_dir: Optional[Path] = None,
) -> FurnitureAnalyzer:
    """
    Build an analyzer with every dictionary that can be loaded.

    Args:
        config: Configuration class
        term_source: Brand/product-name source (defaults to get_term_source())
        data_dir: Folder with the static tables (defaults to config.DATA_DIR)

    Returns:
        Ready FurnitureAnalyzer. Categories whose data could not be loaded
        are left out.
    """
    analyzer = FurnitureAnalyzer(debug=config.ANALYZER_DEBUG)

    for category, dictionary in load_static_dictionaries(data_dir or config.DATA_DIR).items():
        analyzer.add_dictionary(category, dictionary)

    source = term_source if term_source is not None else get_term_source(config)

    try:
        brands = source.load_brands()
        product_names = source.load_product_names()
    except TermSourceError as e:
        logger.error(f"Term source unavailable, brand and product name extraction disabled: {e}")
    else:
        if brands:
            analyzer.add_dictionary(Category.BRAND, Dictionary.from_records(Category.BRAND, brands))
        if product_names:
            analyzer.add_dictionary(
                Category.PRODUCT_NAME,
                Dictionary.from_records(Category.PRODUCT_NAME, product_names),
            )

    logger.info(f"Analyzer ready with categories: {[c.value for c in analyzer.categories()]}")
    return analyzer
