"""
Brand and product-name supply.

Brands and product names change with the catalogue, so they are not shipped
as static tables. A term source provides them as TermRecord lists:
- JsonTermSource reads brands.json / product_names.json from the data folder
- PostgresTermSource queries the catalogue database with psycopg2
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional, Protocol

import psycopg2

from ..models import TermRecord
from ..logger import get_logger

logger = get_logger(__name__)


class TermSourceError(Exception):
    """Raised when brands or product names cannot be loaded."""


class TermSource(Protocol):
    """Anything that can list brand and product-name records."""

    def load_brands(self) -> List[TermRecord]:
        ...

    def load_product_names(self) -> List[TermRecord]:
        ...


def _records(rows: Iterable[Any]) -> List[TermRecord]:
    """Build records from JSON items (strings or objects), skipping nameless ones."""
    records = []
    for row in rows:
        if isinstance(row, str):
            row = {"name": row}
        if not isinstance(row, dict):
            continue

        name = row.get("name")
        if not isinstance(name, str) or not name.strip():
            continue

        records.append(TermRecord(
            name=name.strip(),
            id=row.get("id"),
            brand_id=row.get("brandId", row.get("brand_id")),
        ))
    return records


class JsonTermSource:
    """Reads term records from JSON files in a data folder."""

    BRANDS_FILE = "brands.json"
    PRODUCT_NAMES_FILE = "product_names.json"

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _load(self, filename: str) -> List[TermRecord]:
        path = self.data_dir / filename
        if not path.exists():
            logger.warning(f"Term file not found: {path}")
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TermSourceError(f"Could not read {path}: {e}") from e

        # Either a bare list or {"entries": [...]}
        if isinstance(payload, dict):
            payload = payload.get("entries", [])
        if not isinstance(payload, list):
            raise TermSourceError(f"Expected a list of terms in {path}")

        records = _records(payload)
        logger.info(f"Loaded {len(records)} terms from {path.name}")
        return records

    def load_brands(self) -> List[TermRecord]:
        return self._load(self.BRANDS_FILE)

    def load_product_names(self) -> List[TermRecord]:
        return self._load(self.PRODUCT_NAMES_FILE)


class PostgresTermSource:
    """
    Reads brands and published product names from the catalogue database.

    A connection is opened for each load and closed when it finishes.
    """

    BRANDS_QUERY = 'SELECT id, name FROM "Brand"'
    PRODUCT_NAMES_QUERY = 'SELECT id, name, "brandId" FROM "product" WHERE "isPublished" = TRUE'

    def __init__(self, dsn: str, connect_timeout: Optional[int] = 5):
        self.dsn = dsn
        self.connect_timeout = connect_timeout

    def _connect(self):
        if self.connect_timeout is not None:
            return psycopg2.connect(self.dsn, connect_timeout=self.connect_timeout)
        return psycopg2.connect(self.dsn)

    def _fetch(self, query: str) -> List[tuple]:
        try:
            conn = self._connect()
        except psycopg2.Error as e:
            raise TermSourceError(f"Could not connect to term database: {e}") from e

        try:
            with conn.cursor() as cur:
                cur.execute(query)
                return cur.fetchall()
        except psycopg2.Error as e:
            raise TermSourceError(f"Term query failed: {e}") from e
        finally:
            conn.close()

    def load_brands(self) -> List[TermRecord]:
        rows = self._fetch(self.BRANDS_QUERY)
        records = [TermRecord(name=name, id=row_id) for row_id, name in rows if name]
        logger.info(f"Loaded {len(records)} brands from database")
        return records

    def load_product_names(self) -> List[TermRecord]:
        rows = self._fetch(self.PRODUCT_NAMES_QUERY)
        records = [
            TermRecord(name=name, id=row_id, brand_id=brand_id)
            for row_id, name, brand_id in rows
            if name
        ]
        logger.info(f"Loaded {len(records)} product names from database")
        return records
