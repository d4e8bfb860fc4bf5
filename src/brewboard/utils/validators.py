"""
Form Validation Utilities
=========================
Input verification for the forms the dashboard persists.

Design Principles:
- Never silently fail - always log issues
- Return structured validation results instead of raising
- Provide actionable, per-field error messages
- Coerced values travel back in ``result.info["values"]``
"""

import math
from datetime import date, datetime
from typing import Dict, List, Any, Optional
from urllib.parse import urlparse
from dataclasses import dataclass, field

from brewboard.utils.logger import get_logger
from brewboard.utils.constants import PRODUCT_RULES, MAX_DRAFT_IMAGES

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """
    Structured result of a validation operation.

    Attributes
    ----------
    is_valid : bool
        Overall validation status
    errors : List[str]
        Issues that prevent saving
    warnings : List[str]
        Non-critical issues to be aware of
    field_errors : Dict[str, str]
        First error message per form field
    info : Dict[str, Any]
        Additional metadata, including coerced values
    """
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    field_errors: Dict[str, str] = field(default_factory=dict)
    info: Dict[str, Any] = field(default_factory=dict)

    def add_error(self, message: str, field_name: Optional[str] = None) -> None:
        """Add an error and mark as invalid."""
        self.errors.append(message)
        self.is_valid = False
        if field_name and field_name not in self.field_errors:
            self.field_errors[field_name] = message

    def add_warning(self, message: str) -> None:
        """Add a warning (doesn't affect validity)."""
        self.warnings.append(message)

    @property
    def values(self) -> Dict[str, Any]:
        return self.info.get("values", {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "field_errors": self.field_errors,
            "info": self.info
        }


def coerce_number(value: Any) -> Optional[float]:
    """
    Coerce form input to a finite float.

    Returns None for blanks, non-numeric text, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def is_valid_url(value: str) -> bool:
    """Check that a string is an absolute http(s) URL."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def parse_iso_date(value: Any) -> Optional[date]:
    """Parse a yyyy-mm-dd string (or pass through a date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.strptime(value.strip()[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


class ProductValidator:
    """
    Validates catalog product form input.

    Usage
    -----
    validator = ProductValidator()
    result = validator.validate({"name": "Ground Coffee", ...})

    if not result.is_valid:
        print(result.field_errors)
    """

    def __init__(self, rules: Optional[Dict] = None):
        self.rules = rules or PRODUCT_RULES

    def validate(self, form: Dict[str, Any]) -> ValidationResult:
        result = ValidationResult()
        values: Dict[str, Any] = {}

        name = str(form.get("name") or "").strip()
        if len(name) < self.rules["name_min_length"]:
            result.add_error("Enter a product name", "name")
        values["name"] = name

        category = str(form.get("category") or "").strip()
        if not category:
            result.add_error("Choose a category", "category")
        values["category"] = category

        values["unit"] = str(form.get("unit") or "").strip()
        values["size"] = str(form.get("size") or "").strip()

        price = coerce_number(form.get("price"))
        if price is None or price < 0:
            result.add_error("Price must be >= 0", "price")
        values["price"] = price

        sku = str(form.get("sku") or "").strip()
        if not sku:
            result.add_error("SKU is required", "sku")
        values["sku"] = sku

        stock = coerce_number(form.get("stock"))
        if stock is None or stock < 0 or not float(stock).is_integer():
            result.add_error("Stock must be >= 0", "stock")
            values["stock"] = stock
        else:
            values["stock"] = int(stock)

        image_url = str(form.get("image_url") or "").strip()
        if image_url and not is_valid_url(image_url):
            result.add_error("Must be a valid URL", "image_url")
        values["image_url"] = image_url

        description = str(form.get("description") or "")
        if len(description) > self.rules["description_max_length"]:
            result.add_error(
                f"Description must be at most {self.rules['description_max_length']} characters",
                "description"
            )
        values["description"] = description

        result.info["values"] = values
        if not result.is_valid:
            logger.info(f"Product form rejected: {result.field_errors}")
        return result


def validate_cost_entry(entry_date: Any, amount: Any, note: str = "") -> ValidationResult:
    """
    Validate a cost ledger entry.

    The date must parse as yyyy-mm-dd and the amount must be a finite
    number. The amount is rounded to cents.
    """
    result = ValidationResult()
    parsed = parse_iso_date(entry_date)
    if parsed is None:
        result.add_error("Enter a valid date", "date")

    number = coerce_number(amount)
    if number is None:
        result.add_error("Enter a numeric amount", "amount")

    result.info["values"] = {
        "date": parsed,
        "amount": number,
        "note": (note or "").strip(),
    }
    return result


def validate_login(email: str, password: str) -> ValidationResult:
    """Both fields are required; the email needs an '@' and a domain part."""
    result = ValidationResult()
    email = (email or "").strip()
    local, _, domain = email.partition("@")
    if not local or not domain:
        result.add_error("Enter a valid email address", "email")
    if not password:
        result.add_error("Password is required", "password")
    result.info["values"] = {"email": email}
    return result


def validate_product_draft(
    name: str,
    prices: Dict[str, Any],
    images: Optional[List[str]] = None
) -> ValidationResult:
    """
    Validate a stock product draft with per-variant prices.

    Blank prices are allowed (variant not offered yet); filled prices
    must be numbers >= 0. At most MAX_DRAFT_IMAGES images are kept.
    """
    result = ValidationResult()
    name = (name or "").strip()
    if not name:
        result.add_error("Product name is required", "name")

    cleaned: Dict[str, Optional[float]] = {}
    for label, raw in prices.items():
        if raw is None or (isinstance(raw, str) and not raw.strip()):
            cleaned[label] = None
            continue
        number = coerce_number(raw)
        if number is None or number < 0:
            result.add_error(f"Price for {label} must be a number >= 0", f"price_{label}")
        cleaned[label] = number

    images = list(images or [])
    if len(images) > MAX_DRAFT_IMAGES:
        result.add_warning(f"Only the first {MAX_DRAFT_IMAGES} images are kept")
        images = images[:MAX_DRAFT_IMAGES]

    result.info["values"] = {"name": name, "prices": cleaned, "images": images}
    return result
