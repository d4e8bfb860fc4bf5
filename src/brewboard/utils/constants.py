"""
System-Wide Constants
=====================
Centralized location for demo seed data, storage keys and option lists.

Design Principles:
- All magic numbers for the synthetic generators are defined next to them
  in the service modules; this file holds the shared vocabularies
- Storage keys are human-readable and never versioned
"""

from typing import Dict, List, Any

# =============================================================================
# STORAGE KEYS
# =============================================================================
# Keys used in the local JSON key-value store.

AUTH_KEY = "auth"
CATALOG_KEY = "catalog"
FEEDBACK_KEY = "cs_feedback_entries"
PRODUCT_DRAFTS_KEY = "stock_product_drafts"

COST_LEDGERS: List[Dict[str, str]] = [
    {
        "title": "Cost of Goods Sold (COGS)",
        "storage_key": "finance_cogs_entries",
        "description": "Add entries to update the chart in real time. "
                       "Filter annually, quarterly, monthly, weekly, or daily.",
    },
    {
        "title": "Technology & Platform Costs",
        "storage_key": "finance_tech_platform_entries",
        "description": "Track cloud, subscriptions, and tooling costs with real-time chart and filters.",
    },
    {
        "title": "Variable Costs",
        "storage_key": "finance_variable_entries",
        "description": "Track variable expenses with real-time chart and filters.",
    },
]

# =============================================================================
# CALENDAR
# =============================================================================

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Overview hourly view windows: (label, start hour, end hour exclusive)
HOUR_INTERVALS = [
    ("09–12", 9, 12),
    ("12–15", 12, 15),
    ("15–18", 15, 18),
    ("18–21", 18, 21),
    ("21–24", 21, 24),
]

# =============================================================================
# CUSTOMER SEGMENTS
# =============================================================================

GENDERS = ["Male", "Female"]
AGE_GROUPS = ["15-20", "20-25", "25-30", "30-35", "35-40", "40+"]
RANKED_PRODUCTS = ["Spanish Latte", "Americano", "Iced Caramel", "Croissant", "Espresso", "Mocha"]
FEEDBACK_TYPES = ["Quality", "Service", "Delivery", "Price", "Other"]
PRIORITIES = ["Low", "Medium", "High", "Critical"]

DEMAND_CITIES: List[Dict[str, Any]] = [
    {"city": "Cairo", "lat": 30.0444, "lon": 31.2357},
    {"city": "Riyadh", "lat": 24.7136, "lon": 46.6753},
    {"city": "Dubai", "lat": 25.2048, "lon": 55.2708},
    {"city": "London", "lat": 51.5074, "lon": -0.1278},
    {"city": "New York", "lat": 40.7128, "lon": -74.006},
]

# Seed feedback rows; created_at is "days_ago" relative to now
SEED_FEEDBACK: List[Dict[str, Any]] = [
    {"id": "1", "name": "Ahmed Samir", "phone": "+20 100 123 4567", "type": "Service",
     "description": "Long waiting time at counter.", "days_ago": 2},
    {"id": "2", "name": "Sara Ali", "phone": "+971 50 555 7788", "type": "Quality",
     "description": "Coffee tasted burnt.", "days_ago": 10},
    {"id": "3", "name": "Mohamed Hassan", "phone": "+966 55 331 2244", "type": "Delivery",
     "description": "Order arrived late and cold.", "days_ago": 16},
    {"id": "4", "name": "Laila Omar", "phone": "+20 112 987 6543", "type": "Price",
     "description": "Price higher than menu.", "days_ago": 6},
    {"id": "5", "name": "John Smith", "phone": "+1 917 555 1000", "type": "Other",
     "description": "Music too loud.", "days_ago": 1},
    {"id": "6", "name": "Mary Jane", "phone": "+44 7700 900123", "type": "Quality",
     "description": "Croissant not fresh.", "days_ago": 20},
    {"id": "7", "name": "Omar Farouk", "phone": "+20 109 222 6789", "type": "Service",
     "description": "Rude response on phone.", "days_ago": 8},
    {"id": "8", "name": "Fatima Noor", "phone": "+971 52 333 4444", "type": "Delivery",
     "description": "Wrong items delivered.", "days_ago": 4},
]

# =============================================================================
# FINANCE
# =============================================================================

INVOICE_PRODUCTS = ["Spanish Latte", "Americano", "Iced Caramel", "Croissant", "Cappuccino", "Mocha"]

INVOICE_CUSTOMERS: List[Dict[str, str]] = [
    {"name": "Ali Hassan", "phone": "+201234567890", "gender": "Male"},
    {"name": "Sara Ahmed", "phone": "+201112223334", "gender": "Female"},
    {"name": "Omar Noor", "phone": "+201009998877", "gender": "Male"},
    {"name": "Mona Adel", "phone": "+201555667788", "gender": "Female"},
]

# =============================================================================
# STOCK
# =============================================================================

RAW_MATERIALS: List[Dict[str, Any]] = [
    {"id": "beans", "name": "Arabica Beans", "unit": "g", "qty": 20000},
    {"id": "milk", "name": "Milk", "unit": "ml", "qty": 8000},
    {"id": "syrup", "name": "Caramel Syrup", "unit": "ml", "qty": 1200},
    {"id": "sugar", "name": "Sugar", "unit": "g", "qty": 5000},
    {"id": "ice", "name": "Ice", "unit": "g", "qty": 10000},
    {"id": "cup", "name": "12oz Cup", "unit": "pcs", "qty": 120},
]

STOCK_PRODUCTS: List[Dict[str, Any]] = [
    {"id": "spanish_latte", "name": "Spanish Latte", "category": "Coffee",
     "recipe": [("beans", 18), ("milk", 220), ("sugar", 8), ("cup", 1)]},
    {"id": "americano", "name": "Americano", "category": "Coffee",
     "recipe": [("beans", 15), ("cup", 1)]},
    {"id": "iced_caramel", "name": "Iced Caramel", "category": "Cold",
     "recipe": [("beans", 16), ("milk", 120), ("syrup", 25), ("ice", 180), ("cup", 1)]},
    {"id": "croissant", "name": "Croissant", "category": "Bakery",
     "recipe": [("sugar", 12), ("cup", 0)]},
]

# Expected daily units by category, scaled by weekday and noise
CATEGORY_BASE_UNITS = {"Coffee": 120, "Cold": 80}
DEFAULT_BASE_UNITS = 60

# Sunday-first weekday factors
WEEKDAY_FACTORS = [0.9, 0.95, 1.0, 1.05, 1.1, 1.25, 1.3]

DRAFT_CATEGORIES = ["coffee bean", "coffee", "drink"]
MAX_DRAFT_IMAGES = 3

# =============================================================================
# STORE CATALOG
# =============================================================================

CATALOG_CATEGORIES = ["Coffee", "Bakery", "Cold", "Merch"]
CATALOG_UNITS = ["g", "ml", "pcs"]
WEIGHT_SIZES = [250, 500, 750, 1000]
GENERIC_SIZES = ["One size", "Small", "Medium", "Large"]
PLACEHOLDER_IMAGE = "/placeholder.svg"

PRODUCT_RULES = {
    "name_min_length": 2,
    "description_max_length": 500,
}
