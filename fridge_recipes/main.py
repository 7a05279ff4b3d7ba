from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fridge_recipes.config import DATA_FILE, LOG_LEVEL, get_cors_allow_origins
from fridge_recipes.routers.health import router as health_router
from fridge_recipes.routers.pantry import router as pantry_router
from fridge_recipes.routers.recipes import router as recipes_router
from fridge_recipes.routers.taste import router as taste_router
from fridge_recipes.storage import JsonStore, StoreError

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Fridge Recipes API",
    version="0.1.0",
    description="Recipe recommendations from pantry contents or a taste questionnaire.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_allow_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.store = JsonStore(DATA_FILE)

app.include_router(health_router)
app.include_router(pantry_router)
app.include_router(recipes_router)
app.include_router(taste_router)


@app.exception_handler(StoreError)
async def store_error(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(str(exc))
    return JSONResponse(status_code=503, content={"detail": "store is unreadable; refusing to write."})


@app.get("/")
async def root() -> dict:
    return {
        "name": "fridge-recipes",
        "status": "ok",
        "docs": "/docs",
    }
