# =============================================================================
# shortage_core/catalog/catalog.py
# Static medication/supply catalog
# =============================================================================

from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from shortage_core.errors import ConfigurationError
from shortage_core.logging import get_logger
from shortage_core.models import Category, ItemOrigin, MedicalItem
from shortage_core.services.search_service import SEARCH_RESULT_LIMIT, search_items

from .constants import CATALOG_COLUMNS, CATALOG_PATH

logger = get_logger(__name__)


class ItemCatalog:
    """
    Read-only catalog of medical items.

    Usage:
        catalog = ItemCatalog.from_csv()
        catalog.search("paracet")       # up to 15 matches
        catalog.by_code("M001")
    """

    def __init__(self, items: List[MedicalItem]):
        self._items = list(items)
        self._by_id: Dict[str, MedicalItem] = {i.id: i for i in self._items}
        if len(self._by_id) != len(self._items):
            raise ConfigurationError("Catalog contains duplicate item ids", config_key="catalog")

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> ItemCatalog:
        missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
        if missing:
            raise ConfigurationError(
                f"Catalog is missing columns: {missing}",
                config_key="catalog",
            )

        items = [
            MedicalItem(
                id=row["id"],
                code=row["code"],
                description=row["description"].upper(),
                presentation=row["presentation"],
                category=Category.parse(row["category"]),
                origin=ItemOrigin.CATALOG,
            )
            for row in df[CATALOG_COLUMNS].to_dict(orient="records")
        ]
        return cls(items)

    @classmethod
    def from_csv(cls, path: Optional[Path] = None) -> ItemCatalog:
        """Load the catalog CSV shipped with the package (or a custom one)."""
        path = path or CATALOG_PATH
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
        catalog = cls.from_dataframe(df)
        logger.info(f"Loaded {len(catalog)} catalog items from {path.name}")
        return catalog

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> List[MedicalItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[MedicalItem]:
        return self._by_id.get(item_id)

    def by_code(self, code: str) -> Optional[MedicalItem]:
        for item in self._items:
            if item.code == code:
                return item
        return None

    def by_category(self, category: Category) -> List[MedicalItem]:
        category = Category.parse(category)
        return [i for i in self._items if i.category is category]

    def search(self, term: str, limit: int = SEARCH_RESULT_LIMIT) -> List[MedicalItem]:
        return search_items(term, self._items, limit=limit)
