"""Expiry dates and freshness for pantry items.

Shelf lives are looked up on the matcher's normalized names: a table entry
applies when the item name contains it, so "유기농 계란" or "free-range eggs"
pick up the egg entry while plain "onion" does not pick up "green onion".
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

from fridge_recipes.config import EXPIRING_SOON_DAYS
from fridge_recipes.models import PantryItem, PantryStatus, StorageType
from fridge_recipes.services.matching import normalize_ingredient_name

DEFAULT_SHELF_LIFE_BY_STORAGE: dict[StorageType, int] = {
    "refrigerated": 7,
    "frozen": 30,
    "room": 60,
}

# Checked in order; more specific names come before the names they contain.
SHELF_LIFE_DAYS: list[tuple[str, int]] = [
    ("green onion", 7),
    ("대파", 7),
    ("sweet potato", 21),
    ("고구마", 21),
    ("egg", 21),
    ("계란", 21),
    ("달걀", 21),
    ("milk", 7),
    ("우유", 7),
    ("tofu", 5),
    ("두부", 5),
    ("kimchi", 30),
    ("김치", 30),
    ("onion", 30),
    ("양파", 30),
    ("potato", 30),
    ("감자", 30),
]


def now_iso() -> str:
    return datetime.utcnow().replace(microsecond=0).isoformat() + "Z"


def parse_iso_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def shelf_life_days(name: str, storage_type: StorageType) -> int:
    # Frozen food outlasts any fridge table entry.
    if storage_type != "frozen":
        key = normalize_ingredient_name(name)
        for known, days in SHELF_LIFE_DAYS:
            if key and normalize_ingredient_name(known) in key:
                return days
    return DEFAULT_SHELF_LIFE_BY_STORAGE[storage_type]


def suggest_expiration_date(
    name: str,
    purchased_at: str | None,
    storage_type: StorageType,
    explicit_expiration_date: str | None = None,
    product_shelf_life_days: int | None = None,
) -> tuple[date, str, str]:
    """Return (expiry date, how it was decided, purchase date as ISO)."""
    purchase = parse_iso_date(purchased_at) or date.today()

    explicit = parse_iso_date(explicit_expiration_date)
    if explicit:
        return explicit, "manual", purchase.isoformat()

    if product_shelf_life_days:
        return purchase + timedelta(days=product_shelf_life_days), "product_rule", purchase.isoformat()

    return purchase + timedelta(days=shelf_life_days(name, storage_type)), "avg_rule", purchase.isoformat()


def status_from_days(days: int) -> PantryStatus:
    if days < 0:
        return "expired"
    if days <= EXPIRING_SOON_DAYS:
        return "expiring_soon"
    return "fresh"


def is_expiring_soon(expires_at: str | None, as_of: date | None = None, days: int = EXPIRING_SOON_DAYS) -> bool:
    """True when the item expires today or within ``days`` days. Expired or undated items are not."""
    exp = parse_iso_date(expires_at)
    if exp is None:
        return False
    return 0 <= (exp - (as_of or date.today())).days <= days


def refresh_item(item: PantryItem, as_of: Optional[date] = None) -> PantryItem:
    """Recompute the date-relative fields, which go stale as soon as they are stored."""
    exp = parse_iso_date(item.expires_at)
    if exp is None:
        return item.model_copy(update={"status": "fresh", "days_remaining": None})
    left = (exp - (as_of or date.today())).days
    return item.model_copy(update={"status": status_from_days(left), "days_remaining": left})
