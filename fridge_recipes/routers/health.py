from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict:
    return {
        "status": "ok",
        "recipes": len(request.app.state.store.get_recipe_rows()),
        "timestamp": datetime.utcnow().replace(microsecond=0).isoformat() + "Z",
    }
