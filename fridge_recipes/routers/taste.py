from __future__ import annotations

from fastapi import APIRouter, Query, Request

from fridge_recipes.config import DEFAULT_LOCALE, TASTE_RESULT_LIMIT
from fridge_recipes.models import TasteQuestion, TasteRequest, TasteScoreItem
from fridge_recipes.services.taste import TASTE_QUESTIONS, recommend_by_taste

router = APIRouter(prefix="/api/v1/taste", tags=["taste"])


def _localize(text: dict[str, str], locale: str) -> str:
    return text.get(locale) or text.get(DEFAULT_LOCALE) or next(iter(text.values()), "")


def _question_view(question: TasteQuestion, locale: str) -> dict:
    return {
        "id": question.id,
        "prompt": _localize(question.prompt, locale),
        "multiple": question.multiple,
        "options": [{"id": opt.id, "label": _localize(opt.label, locale)} for opt in question.options],
    }


@router.get("/questions")
async def questions(locale: str = Query(default=DEFAULT_LOCALE)) -> dict:
    return {"data": {"questions": [_question_view(q, locale) for q in TASTE_QUESTIONS]}}


@router.post("/recommendations")
async def recommendations(
    payload: TasteRequest,
    request: Request,
    locale: str = Query(default=DEFAULT_LOCALE),
) -> dict:
    recipes = request.app.state.store.get_all_recipes()
    scored = recommend_by_taste(payload.answers, recipes, limit=TASTE_RESULT_LIMIT)
    items = [
        TasteScoreItem(recipe_id=s.recipe_id, title=s.recipe.display_title(locale), score=s.score).model_dump()
        for s in scored
    ]
    return {"data": {"items": items, "count": len(items)}}
