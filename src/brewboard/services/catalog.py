"""
Store catalog: products listed for sale, persisted under the ``catalog``
key of the local store.
"""

import uuid
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd

from brewboard.services.storage import LocalStore
from brewboard.utils.constants import (
    CATALOG_KEY,
    GENERIC_SIZES,
    PLACEHOLDER_IMAGE,
    WEIGHT_SIZES,
)
from brewboard.utils.logger import get_logger
from brewboard.utils.validators import ProductValidator, ValidationResult, coerce_number

logger = get_logger(__name__)

CATALOG_COLUMNS = [
    'id', 'name', 'category', 'unit', 'size', 'price', 'sku',
    'stock', 'image_url', 'description', 'added_at',
]


@dataclass
class CatalogProduct:
    id: str
    name: str
    category: str
    unit: str
    size: str
    price: float
    sku: str
    stock: int
    image_url: str
    description: str
    added_at: str  # ISO timestamp

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def size_options(category: str, unit: str) -> List[str]:
    """Coffee sells by weight in the chosen unit; everything else by size name"""
    if category == "Coffee":
        return [f"{s}{unit}" for s in WEIGHT_SIZES]
    return list(GENERIC_SIZES)


class Catalog:
    """
    Listed products backed by the local store.

    Usage
    -----
    >>> catalog = Catalog(store)
    >>> result = catalog.add({"name": "House Blend", "category": "Coffee", ...})
    >>> catalog.total_skus, catalog.total_units
    """

    def __init__(self, store: LocalStore, validator: Optional[ProductValidator] = None):
        self.store = store
        self.validator = validator or ProductValidator()
        self.products: List[CatalogProduct] = self.load()

    def load(self) -> List[CatalogProduct]:
        raw = self.store.load_json(CATALOG_KEY, default=[])
        if not isinstance(raw, list):
            logger.warning("Stored catalog is not a list; starting with an empty catalog")
            return []
        products = []
        for item in raw:
            try:
                product = CatalogProduct(**item)
            except TypeError as e:
                logger.warning(f"Skipping malformed catalog item: {e}")
                continue
            # Non-numeric stock or price counts as zero
            stock = coerce_number(product.stock)
            price = coerce_number(product.price)
            if stock is None or price is None:
                logger.warning(f"Catalog item {product.sku!r} has a non-numeric stock or price")
            product.stock = int(stock) if stock is not None else 0
            product.price = price if price is not None else 0.0
            products.append(product)
        return products

    def _persist(self) -> None:
        self.store.save_json(CATALOG_KEY, [p.to_dict() for p in self.products])

    def add(self, form: Dict[str, Any]) -> ValidationResult:
        """Validate a product form and append it to the catalog"""
        result = self.validator.validate(form)
        if not result.is_valid:
            return result

        values = result.values
        product = CatalogProduct(
            id=str(uuid.uuid4()),
            name=values['name'],
            category=values['category'],
            unit=values['unit'],
            size=values['size'],
            price=values['price'],
            sku=values['sku'],
            stock=values['stock'],
            image_url=values['image_url'] or PLACEHOLDER_IMAGE,
            description=values['description'],
            added_at=datetime.now().isoformat(),
        )
        self.products.append(product)
        self._persist()
        logger.info(f"Catalog: added {product.name} ({product.sku})")
        result.info['product'] = product
        return result

    def clear(self) -> None:
        self.products = []
        self._persist()
        logger.info("Catalog cleared")

    @property
    def total_skus(self) -> int:
        return len(self.products)

    @property
    def total_units(self) -> int:
        return sum(p.stock for p in self.products)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([p.to_dict() for p in self.products], columns=CATALOG_COLUMNS)
