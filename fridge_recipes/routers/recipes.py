from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from fridge_recipes.config import DEFAULT_LOCALE, DEFAULT_MAX_RESULTS, DEFAULT_USER_ID
from fridge_recipes.models import MatchResult, Recipe, RecipeMatchItem, Recommendation, RecommendationItem
from fridge_recipes.services.matching import match_recipes
from fridge_recipes.services.ranking import by_match_rate, rank, top
from fridge_recipes.services.recommend import (
    pick_random_recipe,
    recommend_recipes,
    suggest_search_keywords,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


def _match_item(result: MatchResult, locale: str) -> dict:
    return RecipeMatchItem(
        recipe_id=result.recipe_id,
        title=result.recipe.display_title(locale),
        match_rate=result.match_rate,
        matched_ingredients=result.matched_ingredients,
        missing_ingredients=result.missing_ingredients,
    ).model_dump()


def _recommendation_item(result: Recommendation, locale: str) -> dict:
    return RecommendationItem(
        recipe_id=result.recipe_id,
        title=result.recipe.display_title(locale),
        match_rate=result.match_rate,
        matched_ingredients=result.matched_ingredients,
        missing_ingredients=result.missing_ingredients,
        expiring_ingredient_count=result.expiring_ingredient_count,
        score=result.score,
    ).model_dump()


@router.get("")
async def list_recipes(request: Request) -> dict:
    recipes = request.app.state.store.get_all_recipes()
    return {"data": {"items": [r.model_dump() for r in recipes], "count": len(recipes)}}


@router.post("")
async def create_recipe(payload: Recipe, request: Request) -> dict:
    row = payload.model_dump()
    request.app.state.store.add_recipe_row(row)
    logger.info(f"Saved recipe {row['id']} with {len(row['ingredients'])} ingredients")
    return {"data": {"recipe": row}}


@router.get("/random")
async def random_recipe(request: Request) -> dict:
    recipe = pick_random_recipe(request.app.state.store.get_all_recipes())
    if recipe is None:
        raise HTTPException(status_code=404, detail="no recipes found.")
    return {"data": {"recipe": recipe.model_dump()}}


@router.get("/match")
async def match(
    request: Request,
    user_id: str = Query(default=DEFAULT_USER_ID),
    limit: Optional[int] = Query(default=None, ge=0),
    locale: str = Query(default=DEFAULT_LOCALE),
) -> dict:
    store = request.app.state.store
    pantry_names = [item.name for item in store.get_user_pantry(user_id)]
    results = top(rank(match_recipes(pantry_names, store.get_all_recipes()), key=by_match_rate), limit)
    items = [_match_item(r, locale) for r in results]
    return {"data": {"items": items, "count": len(items)}}


@router.get("/recommendations")
async def recommendations(
    request: Request,
    user_id: str = Query(default=DEFAULT_USER_ID),
    min_match_rate: int = Query(default=0, ge=0, le=100),
    prioritize_expiring: bool = Query(default=True),
    max_results: int = Query(default=DEFAULT_MAX_RESULTS, ge=0),
    locale: str = Query(default=DEFAULT_LOCALE),
) -> dict:
    store = request.app.state.store
    results = recommend_recipes(
        store.get_user_pantry(user_id),
        store.get_all_recipes(),
        min_match_rate=min_match_rate,
        prioritize_expiring=prioritize_expiring,
        max_results=max_results,
    )
    items = [_recommendation_item(r, locale) for r in results]
    return {"data": {"items": items, "count": len(items)}}


@router.get("/keywords")
async def keywords(
    request: Request,
    user_id: str = Query(default=DEFAULT_USER_ID),
) -> dict:
    words = suggest_search_keywords(request.app.state.store.get_user_pantry(user_id))
    return {"data": {"keywords": words}}
