from datetime import date, timedelta

import pytest

from fridge_recipes.models import PantryItem
from fridge_recipes.services.expiration import (
    is_expiring_soon,
    parse_iso_date,
    refresh_item,
    shelf_life_days,
    status_from_days,
    suggest_expiration_date,
)


def _item(expires_at):
    return PantryItem(
        id="i1",
        user_id="demo-user",
        name="두부",
        quantity=1,
        purchased_at="2024-01-01",
        expires_at=expires_at,
        expiration_source="manual",
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )


@pytest.mark.parametrize(
    "days, expected",
    [(-1, "expired"), (0, "expiring_soon"), (3, "expiring_soon"), (4, "fresh")],
)
def test_status_from_days(days, expected):
    assert status_from_days(days) == expected


@pytest.mark.parametrize(
    "expires_at, expected",
    [
        ("2024-01-10", True),
        ("2024-01-13", True),
        ("2024-01-14", False),
        ("2024-01-09", False),
        ("", False),
        ("not-a-date", False),
        (None, False),
    ],
)
def test_is_expiring_soon(expires_at, expected):
    assert is_expiring_soon(expires_at, as_of=date(2024, 1, 10)) is expected


def test_suggest_uses_explicit_date_first():
    exp, source, purchased = suggest_expiration_date("milk", "2024-01-01", "refrigerated", "2024-01-05", 30)
    assert exp == date(2024, 1, 5)
    assert source == "manual"
    assert purchased == "2024-01-01"


def test_suggest_uses_product_shelf_life():
    exp, source, _ = suggest_expiration_date("milk", "2024-01-01", "refrigerated", None, 10)
    assert exp == date(2024, 1, 11)
    assert source == "product_rule"


@pytest.mark.parametrize(
    "name, storage, days",
    [
        ("계란", "refrigerated", 21),
        ("유기농 계란", "refrigerated", 21),
        ("free-range eggs", "refrigerated", 21),
        ("Green Onion", "refrigerated", 7),
        ("onion", "refrigerated", 30),
        ("sweet potato", "room", 21),
        ("감자", "room", 30),
        ("계란", "frozen", 30),
        ("mystery sauce", "refrigerated", 7),
        ("mystery sauce", "room", 60),
    ],
)
def test_shelf_life_days(name, storage, days):
    assert shelf_life_days(name, storage) == days


def test_suggest_uses_average_rules():
    exp, source, purchased = suggest_expiration_date("대파 한 단", "2024-01-01", "refrigerated")
    assert exp == date(2024, 1, 1) + timedelta(days=7)
    assert source == "avg_rule"
    assert purchased == "2024-01-01"


def test_suggest_without_purchase_date_starts_today():
    exp, _, purchased = suggest_expiration_date("두부", None, "refrigerated")
    assert purchased == date.today().isoformat()
    assert exp == date.today() + timedelta(days=5)


@pytest.mark.parametrize(
    "expires_at, status, days",
    [
        ("2024-01-09", "expired", -1),
        ("2024-01-12", "expiring_soon", 2),
        ("2024-02-01", "fresh", 22),
        ("not-a-date", "fresh", None),
    ],
)
def test_refresh_item(expires_at, status, days):
    refreshed = refresh_item(_item(expires_at), as_of=date(2024, 1, 10))
    assert refreshed.status == status
    assert refreshed.days_remaining == days
    assert refreshed.expires_at == expires_at


def test_parse_iso_date():
    assert parse_iso_date("2024-02-03T10:00:00Z") == date(2024, 2, 3)
    assert parse_iso_date("") is None
    assert parse_iso_date("soon") is None
