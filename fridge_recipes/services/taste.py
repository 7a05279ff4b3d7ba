"""Questionnaire-driven taste scoring.

Each answer selects an option, and each option carries a ``TasteRule``
describing which recipe attributes earn or lose points. Adding a question
means adding data to ``TASTE_QUESTIONS``; the scoring loop does not change.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from fridge_recipes.config import MAX_TASTE_RESULTS, TASTE_RESULT_LIMIT
from fridge_recipes.models import (
    Recipe,
    ScoredRecipe,
    TasteAnswers,
    TasteOption,
    TasteQuestion,
    TasteRule,
)
from fridge_recipes.services.matching import ingredients_equivalent
from fridge_recipes.services.ranking import rank, top

logger = logging.getLogger(__name__)

TAG_WEIGHT = 2
TAG_MATCH_CAP = 2
EXCLUDE_PENALTY = 2
TIME_WEIGHT = 2
DIFFICULTY_WEIGHT = 2
INGREDIENT_WEIGHT = 1
INGREDIENT_MATCH_CAP = 3

NO_PREFERENCE = "any"


def _any_option() -> TasteOption:
    return TasteOption(
        id=NO_PREFERENCE,
        label={"ko": "상관없어", "en": "Don't care", "ja": "どちらでも", "zh": "都行"},
    )


TASTE_QUESTIONS: list[TasteQuestion] = [
    TasteQuestion(
        id="spicy",
        prompt={
            "ko": "매운 거 먹고 싶어요?",
            "en": "Do you want something spicy?",
            "ja": "辛いものが食べたいですか？",
            "zh": "想吃辣的吗？",
        },
        options=[
            TasteOption(
                id="yes",
                label={"ko": "매운 거!", "en": "Spicy!", "ja": "辛いもの！", "zh": "要辣的！"},
                rule=TasteRule(include_tags=["spicy"]),
            ),
            TasteOption(
                id="no",
                label={"ko": "안 매운 거", "en": "Not spicy", "ja": "辛くないもの", "zh": "不辣的"},
                rule=TasteRule(include_tags=["mild"], exclude_tags=["spicy"]),
            ),
            _any_option(),
        ],
    ),
    TasteQuestion(
        id="style",
        prompt={
            "ko": "국물 있는 게 좋아요?",
            "en": "Do you prefer soup-based dishes?",
            "ja": "スープ系がいいですか？",
            "zh": "喜欢汤类吗？",
        },
        options=[
            TasteOption(
                id="soupy",
                label={"ko": "국물 있는 거", "en": "Soupy", "ja": "スープ系", "zh": "有汤的"},
                rule=TasteRule(include_tags=["soupy"]),
            ),
            TasteOption(
                id="dry",
                label={"ko": "볶음/구이", "en": "Stir-fry/Grilled", "ja": "炒め/焼き", "zh": "炒/烤"},
                rule=TasteRule(include_tags=["stir_fry", "grilled"], exclude_tags=["soupy"]),
            ),
            _any_option(),
        ],
    ),
    TasteQuestion(
        id="protein",
        prompt={
            "ko": "어떤 재료가 끌려요?",
            "en": "What kind of protein do you prefer?",
            "ja": "どんな食材がいいですか？",
            "zh": "想吃什么食材？",
        },
        multiple=True,
        options=[
            TasteOption(
                id="meat",
                label={"ko": "고기", "en": "Meat", "ja": "肉", "zh": "肉"},
                rule=TasteRule(
                    include_tags=["meat"],
                    ingredients=["돼지고기", "소고기", "닭고기", "pork", "beef", "chicken"],
                ),
            ),
            TasteOption(
                id="seafood",
                label={"ko": "해산물", "en": "Seafood", "ja": "海鮮", "zh": "海鲜"},
                rule=TasteRule(
                    include_tags=["seafood"],
                    ingredients=["새우", "오징어", "조개", "생선", "shrimp", "squid", "fish"],
                ),
            ),
            TasteOption(
                id="veggie",
                label={"ko": "채소/가벼운 거", "en": "Veggies/Light", "ja": "野菜", "zh": "蔬菜"},
                rule=TasteRule(
                    include_tags=["veggie"],
                    ingredients=["두부", "버섯", "애호박", "tofu", "mushroom", "zucchini"],
                ),
            ),
            _any_option(),
        ],
    ),
    TasteQuestion(
        id="portion",
        prompt={
            "ko": "양이 중요한가요?",
            "en": "How much do you want to eat?",
            "ja": "ボリュームは？",
            "zh": "分量重要吗？",
        },
        options=[
            TasteOption(
                id="heavy",
                label={"ko": "든든하게!", "en": "Big portion!", "ja": "がっつり！", "zh": "吃饱！"},
                rule=TasteRule(include_tags=["heavy"]),
            ),
            TasteOption(
                id="light",
                label={"ko": "가볍게", "en": "Light", "ja": "軽めに", "zh": "清淡"},
                rule=TasteRule(include_tags=["light"]),
            ),
            _any_option(),
        ],
    ),
    TasteQuestion(
        id="time",
        prompt={
            "ko": "빨리 만들 수 있는 게 좋아요?",
            "en": "Do you want something quick to make?",
            "ja": "早く作れるものがいいですか？",
            "zh": "想快速做好吗？",
        },
        options=[
            TasteOption(
                id="quick",
                label={
                    "ko": "빨리! (20분 이내)",
                    "en": "Quick! (under 20min)",
                    "ja": "早く！（20分以内）",
                    "zh": "快！（20分钟内）",
                },
                rule=TasteRule(include_tags=["quick"], max_minutes=20),
            ),
            TasteOption(
                id="relaxed",
                label={"ko": "천천히 (20~60분)", "en": "Relaxed (20-60min)", "ja": "ゆっくり（20〜60分）", "zh": "慢慢来（20-60分钟）"},
                rule=TasteRule(min_minutes=20, max_minutes=60),
            ),
            _any_option(),
        ],
    ),
    TasteQuestion(
        id="difficulty",
        prompt={
            "ko": "요리 난이도는요?",
            "en": "How hard should it be?",
            "ja": "難易度は？",
            "zh": "难度呢？",
        },
        options=[
            TasteOption(
                id="easy",
                label={"ko": "쉬운 거", "en": "Easy", "ja": "簡単", "zh": "简单"},
                rule=TasteRule(difficulty="easy"),
            ),
            TasteOption(
                id="medium",
                label={"ko": "보통", "en": "Medium", "ja": "普通", "zh": "中等"},
                rule=TasteRule(difficulty="medium"),
            ),
            TasteOption(
                id="hard",
                label={"ko": "도전!", "en": "Challenge me", "ja": "挑戦！", "zh": "挑战！"},
                rule=TasteRule(difficulty="hard"),
            ),
            _any_option(),
        ],
    ),
]


def _selected_option_ids(value: object) -> list[str]:
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return list(dict.fromkeys(v for v in value if isinstance(v, str) and v))
    return []


def selected_rules(answers: TasteAnswers, questions: Sequence[TasteQuestion] = TASTE_QUESTIONS) -> list[TasteRule]:
    """Resolve answers to the rules they select. Unknown keys and options are ignored."""
    rules: list[TasteRule] = []
    for question in questions:
        option_ids = _selected_option_ids((answers or {}).get(question.id))
        if not question.multiple:
            option_ids = option_ids[:1]
        for option_id in option_ids:
            if option_id == NO_PREFERENCE:
                continue
            option = question.option(option_id)
            if option is None:
                logger.debug(f"Ignoring unknown option {option_id!r} for question {question.id!r}")
                continue
            rules.append(option.rule)
    return rules


def score_rule(rule: TasteRule, recipe: Recipe) -> int:
    score = 0
    tags = set(recipe.tags)

    if rule.include_tags:
        hits = sum(1 for tag in rule.include_tags if tag in tags)
        score += TAG_WEIGHT * min(hits, TAG_MATCH_CAP)

    if rule.exclude_tags and any(tag in tags for tag in rule.exclude_tags):
        score -= EXCLUDE_PENALTY

    minutes = recipe.cooking_time
    if minutes is not None and (rule.min_minutes is not None or rule.max_minutes is not None):
        low = rule.min_minutes if rule.min_minutes is not None else 0
        high = rule.max_minutes
        if minutes >= low and (high is None or minutes <= high):
            score += TIME_WEIGHT

    if rule.difficulty is not None and recipe.difficulty == rule.difficulty:
        score += DIFFICULTY_WEIGHT

    if rule.ingredients:
        hits = sum(
            1
            for ingredient in recipe.ingredients
            if any(ingredients_equivalent(keyword, ingredient.name) for keyword in rule.ingredients)
        )
        score += INGREDIENT_WEIGHT * min(hits, INGREDIENT_MATCH_CAP)

    return score


def score_recipes(
    answers: TasteAnswers,
    recipes: Iterable[Recipe],
    questions: Sequence[TasteQuestion] = TASTE_QUESTIONS,
) -> list[ScoredRecipe]:
    """Score every recipe against the answers, in input order."""
    rules = selected_rules(answers, questions)
    return [ScoredRecipe(recipe=recipe, score=sum(score_rule(rule, recipe) for rule in rules)) for recipe in recipes]


def recommend_by_taste(
    answers: TasteAnswers,
    recipes: Iterable[Recipe],
    limit: int = TASTE_RESULT_LIMIT,
    questions: Sequence[TasteQuestion] = TASTE_QUESTIONS,
) -> list[ScoredRecipe]:
    """Score, rank, then keep at most ``limit`` picks, and never more than five."""
    scored = score_recipes(answers, recipes, questions)
    return top(rank(scored), min(limit, MAX_TASTE_RESULTS))
