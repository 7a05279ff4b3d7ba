from __future__ import annotations

from uuid import uuid4

from fastapi import APIRouter, HTTPException, Query, Request

from fridge_recipes.config import DEFAULT_USER_ID
from fridge_recipes.models import (
    PantryAdjustRequest,
    PantryCreateRequest,
    PantryItem,
    PantrySummaryModel,
)
from fridge_recipes.services.expiration import now_iso, refresh_item, suggest_expiration_date

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


def _current_pantry(request: Request, user_id: str) -> list[PantryItem]:
    """The user's pantry with freshness recomputed for today, soonest expiry first."""
    items = [refresh_item(item) for item in request.app.state.store.get_user_pantry(user_id)]
    return sorted(items, key=lambda item: item.expires_at)


def _summary(items: list[PantryItem]) -> PantrySummaryModel:
    by_status = {"fresh": 0, "expiring_soon": 0, "expired": 0}
    for item in items:
        by_status[item.status] += 1
    return PantrySummaryModel(
        total_items=len(items),
        fresh_count=by_status["fresh"],
        expiring_soon_count=by_status["expiring_soon"],
        expired_count=by_status["expired"],
        expiring_soon_names=[item.name for item in items if item.status == "expiring_soon"],
    )


@router.get("/items")
async def list_items(
    request: Request,
    user_id: str = Query(default=DEFAULT_USER_ID),
) -> dict:
    items = _current_pantry(request, user_id)
    return {"data": {"items": [item.model_dump() for item in items], "count": len(items)}}


@router.post("/items")
async def create_item(
    payload: PantryCreateRequest,
    request: Request,
) -> dict:
    store = request.app.state.store
    user_id = payload.user_id.strip() or DEFAULT_USER_ID
    expires_at, source, purchased_at = suggest_expiration_date(
        name=payload.name,
        purchased_at=payload.purchased_at,
        storage_type=payload.storage_type,
        explicit_expiration_date=payload.expires_at,
        product_shelf_life_days=payload.product_shelf_life_days,
    )
    now = now_iso()
    item = PantryItem(
        id=str(uuid4()),
        user_id=user_id,
        name=payload.name.strip(),
        category=payload.category.strip() or "etc",
        quantity=round(payload.quantity, 2),
        unit=payload.unit.strip() or "ea",
        storage_type=payload.storage_type,
        purchased_at=purchased_at,
        expires_at=expires_at.isoformat(),
        expiration_source=source,
        created_at=now,
        updated_at=now,
    )
    store.save_user_pantry(user_id, store.get_user_pantry(user_id) + [item])
    return {"data": {"item": refresh_item(item).model_dump()}}


@router.post("/items/{item_id}/adjust")
async def adjust_item(
    item_id: str,
    payload: PantryAdjustRequest,
    request: Request,
) -> dict:
    if payload.delta_quantity == 0:
        raise HTTPException(status_code=400, detail="delta_quantity must be non-zero.")

    store = request.app.state.store
    user_id = payload.user_id.strip() or DEFAULT_USER_ID
    items = store.get_user_pantry(user_id)
    index = next((i for i, item in enumerate(items) if item.id == item_id), None)
    if index is None:
        raise HTTPException(status_code=404, detail="pantry item not found.")

    qty = round(items[index].quantity + payload.delta_quantity, 2)
    updated: PantryItem | None = None
    if qty <= 0:
        # Used up: the item leaves the pantry and stops counting toward matches.
        del items[index]
    else:
        updated = items[index] = items[index].model_copy(update={"quantity": qty, "updated_at": now_iso()})
    store.save_user_pantry(user_id, items)

    return {
        "data": {
            "updated_item": refresh_item(updated).model_dump() if updated else None,
            "removed": updated is None,
        }
    }


@router.get("/summary")
async def summary(
    request: Request,
    user_id: str = Query(default=DEFAULT_USER_ID),
) -> dict:
    return {"data": {"summary": _summary(_current_pantry(request, user_id)).model_dump()}}
