from types import SimpleNamespace

from fridge_recipes.models import MatchResult, ScoredRecipe
from fridge_recipes.services.ranking import by_match_rate, rank, top


def _scored(recipe_factory, scores):
    return [ScoredRecipe(recipe=recipe_factory(f"r{i}"), score=s) for i, s in enumerate(scores, start=1)]


def test_rank_is_stable_for_ties(recipe_factory):
    items = _scored(recipe_factory, [40, 90, 90, 10])
    ranked = rank(items)
    assert [s.recipe_id for s in ranked] == ["r2", "r3", "r1", "r4"]


def test_rank_is_monotonic(recipe_factory):
    ranked = rank(_scored(recipe_factory, [3, -1, 7, 0, 7, 2]))
    scores = [s.score for s in ranked]
    assert scores == sorted(scores, reverse=True)


def test_rank_all_equal_preserves_input(recipe_factory):
    items = _scored(recipe_factory, [0, 0, 0])
    assert rank(items) == items


def test_rank_does_not_modify_input(recipe_factory):
    items = _scored(recipe_factory, [1, 5, 3])
    snapshot = list(items)
    rank(items)
    assert items == snapshot


def test_rank_by_match_rate_keeps_detail(recipe_factory):
    results = [
        MatchResult(recipe=recipe_factory("a"), match_rate=40, matched_ingredients=["x"], missing_ingredients=["y"]),
        MatchResult(recipe=recipe_factory("b"), match_rate=90, matched_ingredients=["x", "z"], missing_ingredients=[]),
    ]
    ranked = rank(results, key=by_match_rate)
    assert ranked[0] is results[1]
    assert ranked[1].missing_ingredients == ["y"]


def test_rank_accepts_any_keyed_items():
    rows = [SimpleNamespace(score=1, name="a"), SimpleNamespace(score=2, name="b")]
    assert [r.name for r in rank(rows)] == ["b", "a"]


def test_rank_empty():
    assert rank([]) == []


def test_top_caps_after_ranking(recipe_factory):
    ranked = rank(_scored(recipe_factory, [1, 2, 3, 4, 5, 6, 7]))
    capped = top(ranked, 5)
    assert [s.score for s in capped] == [7, 6, 5, 4, 3]


def test_top_without_limit_and_short_inputs():
    assert top([1, 2], None) == [1, 2]
    assert top([1, 2], 5) == [1, 2]
    assert top([1, 2], -3) == []
