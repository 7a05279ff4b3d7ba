import random
from datetime import date

import pytest

from fridge_recipes.models import PantryItem
from fridge_recipes.services.recommend import (
    MAX_KEYWORDS,
    pick_random_recipe,
    recommend_recipes,
    suggest_search_keywords,
)

AS_OF = date(2024, 1, 10)


def pantry_item(name, expires_at="2024-03-01", category="etc"):
    return PantryItem(
        id=name,
        user_id="demo-user",
        name=name,
        category=category,
        quantity=1,
        purchased_at="2024-01-01",
        expires_at=expires_at,
        expiration_source="manual",
        status="fresh",
        days_remaining=0,
        created_at="2024-01-01T00:00:00Z",
        updated_at="2024-01-01T00:00:00Z",
    )


@pytest.fixture
def pantry():
    return [
        pantry_item("egg", expires_at="2024-01-11", category="dairy"),
        pantry_item("onion", category="vegetables"),
        pantry_item("김치"),
    ]


def test_expiring_and_difficulty_bonuses(pantry, recipes):
    out = recommend_recipes(pantry, recipes, as_of=AS_OF)

    assert [r.recipe_id for r in out] == ["egg-rice", "kimchi-stew", "shrimp-pasta", "empty"]
    egg_rice = out[0]
    assert egg_rice.match_rate == 67
    assert egg_rice.expiring_ingredient_count == 1
    assert egg_rice.score == 67 + 10 + 5
    assert egg_rice.matched_ingredients == ["egg", "green onion"]
    assert out[1].score == 25 + 2
    assert out[2].score == 2
    assert out[3].score == 0


def test_without_expiring_priority(pantry, recipes):
    out = recommend_recipes(pantry, recipes, prioritize_expiring=False, as_of=AS_OF)
    assert out[0].score == 67 + 5
    assert out[0].expiring_ingredient_count == 1


def test_expired_items_earn_no_bonus(recipes):
    stale = [pantry_item("egg", expires_at="2024-01-01")]
    out = recommend_recipes(stale, recipes, as_of=AS_OF)
    assert out[0].recipe_id == "egg-rice"
    assert out[0].expiring_ingredient_count == 0


def test_min_match_rate_filter(pantry, recipes):
    out = recommend_recipes(pantry, recipes, min_match_rate=30, as_of=AS_OF)
    assert [r.recipe_id for r in out] == ["egg-rice"]


def test_max_results_cap(pantry, recipes):
    assert len(recommend_recipes(pantry, recipes, max_results=2, as_of=AS_OF)) == 2
    assert len(recommend_recipes(pantry, recipes, max_results=None, as_of=AS_OF)) == len(recipes)


def test_empty_inputs(pantry):
    assert recommend_recipes(pantry, []) == []
    assert [r.match_rate for r in recommend_recipes([], [])] == []


def test_pick_random_recipe(recipes):
    assert pick_random_recipe([]) is None
    assert pick_random_recipe(recipes, rng=random.Random(7)) in recipes


def test_suggest_search_keywords(pantry):
    assert suggest_search_keywords(pantry) == [
        "egg",
        "onion",
        "김치",
        "egg 스크램블",
        "egg 오믈렛",
        "egg 그라탕",
        "onion 볶음",
        "onion 무침",
        "onion 전",
        "onion 샐러드",
    ]


def test_suggest_search_keywords_caps_and_dedupes():
    items = [pantry_item(f"item{i}", category="meat") for i in range(7)] + [pantry_item("item0")]
    words = suggest_search_keywords(items)
    assert len(words) == MAX_KEYWORDS
    assert len(set(words)) == len(words)
    assert words[:5] == ["item0", "item1", "item2", "item3", "item4"]
