"""Pantry-driven recommendations built on top of the ingredient matcher."""
from __future__ import annotations

import logging
import random
from datetime import date
from typing import Optional, Sequence

from fridge_recipes.config import DEFAULT_MAX_RESULTS
from fridge_recipes.models import PantryItem, Recipe, Recommendation
from fridge_recipes.services.expiration import is_expiring_soon
from fridge_recipes.services.matching import ingredients_equivalent, match_recipes
from fridge_recipes.services.ranking import rank, top

logger = logging.getLogger(__name__)

EXPIRING_BONUS = 10
DIFFICULTY_BONUS: dict[str, int] = {"easy": 5, "medium": 2}

CATEGORY_DISHES: dict[str, list[str]] = {
    "vegetables": ["볶음", "무침", "전", "샐러드"],
    "meat": ["구이", "찌개", "조림", "볶음"],
    "seafood": ["조림", "구이", "찌개", "탕"],
    "dairy": ["스크램블", "오믈렛", "그라탕"],
    "grains": ["볶음밥", "비빔밥", "죽"],
}

MAX_KEYWORDS = 10


def recommend_recipes(
    pantry: Sequence[PantryItem],
    recipes: Sequence[Recipe],
    min_match_rate: int = 0,
    prioritize_expiring: bool = True,
    max_results: Optional[int] = DEFAULT_MAX_RESULTS,
    as_of: Optional[date] = None,
) -> list[Recommendation]:
    """Rank recipes by match rate plus bonuses for soon-expiring pantry items and easy recipes."""
    expiring = [item.name for item in pantry if is_expiring_soon(item.expires_at, as_of)]

    out: list[Recommendation] = []
    for result in match_recipes([item.name for item in pantry], recipes):
        expiring_count = sum(
            1 for name in result.matched_ingredients if any(ingredients_equivalent(e, name) for e in expiring)
        )
        score = result.match_rate
        if prioritize_expiring:
            score += expiring_count * EXPIRING_BONUS
        if result.recipe.ingredients:
            score += DIFFICULTY_BONUS.get(result.recipe.difficulty or "", 0)
        if result.match_rate < min_match_rate:
            continue
        out.append(
            Recommendation(
                **result.model_dump(exclude={"recipe"}),
                recipe=result.recipe,
                expiring_ingredient_count=expiring_count,
                score=score,
            )
        )

    logger.debug(f"{len(out)} of {len(recipes)} recipes passed min_match_rate={min_match_rate}")
    return top(rank(out), max_results)


def pick_random_recipe(recipes: Sequence[Recipe], rng: Optional[random.Random] = None) -> Optional[Recipe]:
    if not recipes:
        return None
    return (rng or random).choice(list(recipes))


def suggest_search_keywords(pantry: Sequence[PantryItem]) -> list[str]:
    """Suggest search phrases: the first few pantry names, then name + dish combinations by category."""
    keywords: dict[str, None] = {}
    for item in pantry[:5]:
        keywords.setdefault(item.name, None)
    for item in pantry:
        for dish in CATEGORY_DISHES.get(item.category, []):
            keywords.setdefault(f"{item.name} {dish}", None)
    return list(keywords)[:MAX_KEYWORDS]
