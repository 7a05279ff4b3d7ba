from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from fridge_recipes.models import MatchResult, Recipe

logger = logging.getLogger(__name__)

# Letters and digits of any script survive; punctuation, symbols and underscores go.
_NON_NAME_CHARS = re.compile(r"[\W_]+")
_WHITESPACE = re.compile(r"\s+")

SYNONYM_GROUPS: dict[str, list[str]] = {
    "돼지고기": ["삼겹살", "목살", "앞다리살", "뒷다리살", "안심", "등심"],
    "소고기": ["쇠고기", "한우", "차돌박이", "등심", "안심", "불고기"],
    "닭고기": ["닭", "닭가슴살", "닭다리", "닭날개", "닭안심"],
    "양파": ["양파", "자색양파", "빨간양파"],
    "파": ["대파", "쪽파", "실파", "파"],
    "고추": ["청양고추", "홍고추", "풋고추", "고추"],
    "간장": ["진간장", "국간장", "양조간장", "간장"],
    "된장": ["된장", "재래된장", "한식된장"],
    "고추장": ["고추장", "태양초고추장"],
}


def normalize_ingredient_name(name: str | None) -> str:
    """Fold an ingredient name into the form used for comparison.

    >>> normalize_ingredient_name("  Green Onion ")
    'greenonion'
    >>> normalize_ingredient_name("대파 (1대)")
    '대파1대'
    >>> normalize_ingredient_name("ご飯")
    'ご飯'

    A name made only of symbols keeps its case-folded form rather than
    collapsing to blank.
    """
    text = _WHITESPACE.sub("", (name or "").casefold())
    return _NON_NAME_CHARS.sub("", text) or text


def _build_synonym_index(groups: dict[str, list[str]]) -> list[frozenset[str]]:
    index: list[frozenset[str]] = []
    for base, variants in groups.items():
        names = {normalize_ingredient_name(base)}
        names.update(normalize_ingredient_name(v) for v in variants)
        names.discard("")
        index.append(frozenset(names))
    return index


_SYNONYM_INDEX = _build_synonym_index(SYNONYM_GROUPS)


def _equivalent_normalized(a: str, b: str) -> bool:
    if not a or not b:
        return False
    if a in b or b in a:
        return True
    return any(a in group and b in group for group in _SYNONYM_INDEX)


def ingredients_equivalent(a: str, b: str) -> bool:
    """Return True when two ingredient names count as the same ingredient.

    Names match when one contains the other after normalization, so "onion"
    matches "green onion" in both directions, or when both belong to the same
    synonym group. Blank names match nothing.
    """
    return _equivalent_normalized(normalize_ingredient_name(a), normalize_ingredient_name(b))


def match_rate(matched: int, total: int) -> int:
    """Percentage of ``matched`` over ``total``, rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    return (200 * matched + total) // (2 * total)


def match_recipe(pantry_names: Iterable[str], recipe: Recipe) -> MatchResult:
    pantry = [n for n in (normalize_ingredient_name(p) for p in pantry_names) if n]
    return _match_normalized(pantry, recipe)


def _match_normalized(pantry: Sequence[str], recipe: Recipe) -> MatchResult:
    matched: list[str] = []
    missing: list[str] = []
    for ingredient in recipe.ingredients:
        key = normalize_ingredient_name(ingredient.name)
        if any(_equivalent_normalized(p, key) for p in pantry):
            matched.append(ingredient.name)
        else:
            missing.append(ingredient.name)
    return MatchResult(
        recipe=recipe,
        match_rate=match_rate(len(matched), len(recipe.ingredients)),
        matched_ingredients=matched,
        missing_ingredients=missing,
    )


def match_recipes(pantry_names: Iterable[str], recipes: Sequence[Recipe]) -> list[MatchResult]:
    """Match every recipe against the pantry, keeping the input order."""
    pantry = [n for n in (normalize_ingredient_name(p) for p in pantry_names) if n]
    results = [_match_normalized(pantry, recipe) for recipe in recipes]
    logger.debug(f"Matched {len(results)} recipes against {len(pantry)} pantry names")
    return results
