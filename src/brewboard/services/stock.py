"""
Stock Coverage Service
======================
Raw-material coverage and next-day readiness for the coffee menu.

Coverage Logic:
- Each product has a recipe: raw material id + amount per unit sold
- Coverage = how many units the current raw stock can produce, i.e. the
  minimum over recipe lines of floor(stock / amount)
- A line with amount 0 never limits production
- A missing raw material limits production to 0

Readiness:
- Required units are a seeded estimate by category, weekday and noise
- A product is "Ready" when coverage >= required, otherwise "Short"
"""

import math
import uuid
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Dict, List, Optional, Any

import pandas as pd

from brewboard.services.calendar_ranges import sunday_weekday
from brewboard.services.storage import LocalStore
from brewboard.services.synthetic import sine_rand, round_half_up
from brewboard.utils.constants import (
    RAW_MATERIALS,
    STOCK_PRODUCTS,
    CATEGORY_BASE_UNITS,
    DEFAULT_BASE_UNITS,
    WEEKDAY_FACTORS,
    PRODUCT_DRAFTS_KEY,
)
from brewboard.utils.logger import get_logger
from brewboard.utils.validators import ValidationResult, validate_product_draft

logger = get_logger(__name__)


@dataclass
class RawMaterial:
    id: str
    name: str
    unit: str
    qty: float


@dataclass
class RecipeItem:
    raw_id: str
    amount: float


@dataclass
class StockProduct:
    id: str
    name: str
    category: str
    recipe: List[RecipeItem] = field(default_factory=list)


@dataclass
class MissingMaterial:
    raw: RawMaterial
    needed: float


def default_raw_materials() -> List[RawMaterial]:
    return [RawMaterial(**r) for r in RAW_MATERIALS]


def default_products() -> List[StockProduct]:
    return [
        StockProduct(
            id=p['id'],
            name=p['name'],
            category=p['category'],
            recipe=[RecipeItem(raw_id, amount) for raw_id, amount in p['recipe']],
        )
        for p in STOCK_PRODUCTS
    ]


def _raw_index(raws: List[RawMaterial]) -> Dict[str, RawMaterial]:
    return {r.id: r for r in raws}


def coverage_for_product(product: StockProduct, raws: List[RawMaterial]) -> float:
    """
    Units of ``product`` the raw stock can cover.

    Returns an int, or ``math.inf`` when every recipe line has amount 0.
    A product with an empty recipe covers 0 units.
    """
    if not product.recipe:
        return 0

    index = _raw_index(raws)
    limits = []
    for item in product.recipe:
        raw = index.get(item.raw_id)
        if raw is None:
            limits.append(0)
        elif item.amount == 0:
            limits.append(math.inf)
        else:
            limits.append(math.floor(raw.qty / item.amount))

    coverage = max(0, min(limits))
    return coverage if coverage == math.inf else int(coverage)


def missing_materials(product: StockProduct, raws: List[RawMaterial]) -> List[MissingMaterial]:
    """Recipe lines whose single-unit amount exceeds the stock on hand"""
    index = _raw_index(raws)
    missing = []
    for item in product.recipe:
        raw = index.get(item.raw_id)
        if raw is None:
            continue
        needed = max(0, item.amount - raw.qty)
        if needed > 0:
            missing.append(MissingMaterial(raw=raw, needed=needed))
    return missing


def predicted_units(product: StockProduct, on: Optional[date] = None) -> int:
    """
    Seeded estimate of units needed for the next trading day.

    The seed is the calendar date ``on`` (today by default), so the
    estimate is stable for a whole day.
    """
    on = on or date.today()
    seed = on.year * 10000 + on.month * 100 + on.day
    base = CATEGORY_BASE_UNITS.get(product.category, DEFAULT_BASE_UNITS)
    dow_factor = WEEKDAY_FACTORS[sunday_weekday(on)]
    noise = 0.8 + sine_rand(seed + len(product.id) * 7) * 0.6  # 0.8..1.4
    return max(0, round_half_up(base * dow_factor * noise))


def readiness(
    products: List[StockProduct],
    raws: List[RawMaterial],
    on: Optional[date] = None
) -> pd.DataFrame:
    """
    Tomorrow's requirement vs coverage per product.

    Returns DataFrame with columns:
    - id, name, category, required, coverage, status (Ready / Short)
    """
    rows = []
    for p in products:
        required = predicted_units(p, on)
        coverage = coverage_for_product(p, raws)
        rows.append({
            'id': p.id,
            'name': p.name,
            'category': p.category,
            'required': required,
            'coverage': coverage,
            'status': 'Ready' if coverage >= required else 'Short',
        })
    return pd.DataFrame(rows, columns=['id', 'name', 'category', 'required', 'coverage', 'status'])


def inventory_status(products: List[StockProduct], raws: List[RawMaterial]) -> pd.DataFrame:
    """Coverage with In Stock / Out status for the products table"""
    rows = []
    for p in products:
        cover = coverage_for_product(p, raws)
        rows.append({
            'id': p.id,
            'name': p.name,
            'category': p.category,
            'coverage': cover,
            'status': 'In Stock' if cover > 0 else 'Out',
        })
    return pd.DataFrame(rows, columns=['id', 'name', 'category', 'coverage', 'status'])


def recipe_status(product: StockProduct, raws: List[RawMaterial]) -> pd.DataFrame:
    """Per-material requirement for one unit of ``product``"""
    index = _raw_index(raws)
    rows = []
    for item in product.recipe:
        raw = index.get(item.raw_id)
        if raw is None:
            logger.warning(f"Recipe for '{product.id}' references unknown material '{item.raw_id}'")
            continue
        rows.append({
            'raw_id': raw.id,
            'material': raw.name,
            'required': f"{item.amount:g} {raw.unit}",
            'in_stock': f"{raw.qty:g} {raw.unit}",
            'status': 'Missing' if raw.qty < item.amount else 'OK',
        })
    return pd.DataFrame(rows, columns=['raw_id', 'material', 'required', 'in_stock', 'status'])


def order_message(raw: RawMaterial, auto_order: bool = False) -> str:
    prefix = "Auto-order enabled. " if auto_order else ""
    logger.info(f"Order requested for {raw.id} (auto_order={auto_order})")
    return f"{prefix}Ordering {raw.name}"


def low_stock_count(
    products: Optional[List[StockProduct]] = None,
    raws: Optional[List[RawMaterial]] = None,
    on: Optional[date] = None
) -> int:
    """Number of products that cannot cover tomorrow's requirement"""
    products = products if products is not None else default_products()
    raws = raws if raws is not None else default_raw_materials()
    table = readiness(products, raws, on)
    return int((table['status'] == 'Short').sum())


# =============================================================================
# PRODUCT DRAFTS
# =============================================================================

def variant_labels(category: str) -> List[str]:
    """Price variants offered for a draft category"""
    if category == "drink":
        return ["Small", "Medium", "Large"]
    return ["250g", "500g", "1000g"]


@dataclass
class ProductDraft:
    id: str
    name: str
    description: str
    category: str
    prices: Dict[str, Optional[float]]
    images: List[str]
    submitted_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class DraftBook:
    """Submitted product drafts, persisted in the local store"""

    def __init__(self, store: LocalStore):
        self.store = store

    def load(self) -> List[ProductDraft]:
        raw = self.store.load_json(PRODUCT_DRAFTS_KEY, default=[])
        if not isinstance(raw, list):
            logger.warning("Stored product drafts are not a list; ignoring them")
            return []
        drafts = []
        for item in raw:
            try:
                drafts.append(ProductDraft(**item))
            except TypeError as e:
                logger.warning(f"Skipping malformed product draft: {e}")
        return drafts

    def submit(
        self,
        name: str,
        description: str,
        category: str,
        prices: Dict[str, Any],
        images: Optional[List[str]] = None
    ) -> ValidationResult:
        """
        Validate and store a draft.

        Only the price labels valid for ``category`` are kept.
        """
        labels = variant_labels(category)
        scoped = {label: prices.get(label) for label in labels}
        result = validate_product_draft(name, scoped, images)
        if not result.is_valid:
            return result

        values = result.values
        draft = ProductDraft(
            id=uuid.uuid4().hex,
            name=values['name'],
            description=(description or '').strip(),
            category=category,
            prices=values['prices'],
            images=values['images'],
            submitted_at=datetime.now().isoformat(),
        )
        drafts = self.load()
        drafts.append(draft)
        self.store.save_json(PRODUCT_DRAFTS_KEY, [d.to_dict() for d in drafts])
        logger.info(f"Product draft submitted: {draft.name} ({category})")
        result.info['draft'] = draft
        return result
