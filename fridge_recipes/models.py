from __future__ import annotations

from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from fridge_recipes.config import DEFAULT_LOCALE, DEFAULT_USER_ID


StorageType = Literal["refrigerated", "frozen", "room"]
PantryStatus = Literal["fresh", "expiring_soon", "expired"]
Difficulty = Literal["easy", "medium", "hard"]

# question id -> selected option id, or several option ids for multi-select questions.
# Values of any other shape read as "no preference".
TasteAnswers = dict[str, Any]


# ---------------------------------------------------------------------------
# Pantry
# ---------------------------------------------------------------------------


class PantryItem(BaseModel):
    id: str
    user_id: str
    name: str
    category: str = "etc"
    quantity: float
    unit: str = "ea"
    storage_type: StorageType = "refrigerated"
    purchased_at: str
    expires_at: str
    expiration_source: str
    # Relative to the day the item is read, never trusted from storage.
    status: PantryStatus = "fresh"
    days_remaining: Optional[int] = None
    created_at: str
    updated_at: str


class PantryCreateRequest(BaseModel):
    user_id: str = Field(default=DEFAULT_USER_ID)
    name: str = Field(..., min_length=1)
    category: str = "etc"
    quantity: float = Field(default=1.0, gt=0)
    unit: str = "ea"
    storage_type: StorageType = "refrigerated"
    purchased_at: Optional[str] = None
    product_shelf_life_days: Optional[int] = Field(default=None, ge=1)
    expires_at: Optional[str] = None


class PantryAdjustRequest(BaseModel):
    user_id: str = Field(default=DEFAULT_USER_ID)
    delta_quantity: float


class PantrySummaryModel(BaseModel):
    total_items: int
    fresh_count: int
    expiring_soon_count: int
    expired_count: int
    expiring_soon_names: list[str]


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------


class RecipeIngredient(BaseModel):
    name: str
    # Informational only; kept as given, so "2큰술" or "1/2" survive untouched.
    quantity: Union[float, str, None] = None
    unit: str = ""

    @field_validator("unit", mode="before")
    @classmethod
    def _unit_or_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class Recipe(BaseModel):
    id: str = Field(..., min_length=1)
    title: dict[str, str] = Field(default_factory=dict)
    description: dict[str, str] = Field(default_factory=dict)
    cooking_time: Optional[int] = Field(default=None, ge=0)
    difficulty: Optional[Difficulty] = None
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "description", mode="before")
    @classmethod
    def _localized(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, str):
            return {DEFAULT_LOCALE: value}
        return value

    @field_validator("ingredients", mode="before")
    @classmethod
    def _ingredient_rows(cls, value: Any) -> list:
        # A malformed ingredient list counts as a recipe with no ingredients.
        if not isinstance(value, list):
            return []
        rows: list = []
        for entry in value:
            if isinstance(entry, str):
                rows.append({"name": entry})
            elif isinstance(entry, RecipeIngredient):
                rows.append(entry)
            elif isinstance(entry, dict) and isinstance(entry.get("name"), str):
                rows.append(entry)
        return rows

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def display_title(self, locale: str = DEFAULT_LOCALE) -> str:
        if locale in self.title:
            return self.title[locale]
        if DEFAULT_LOCALE in self.title:
            return self.title[DEFAULT_LOCALE]
        return next(iter(self.title.values()), "")


class MatchResult(BaseModel):
    recipe: Recipe
    match_rate: int = Field(ge=0, le=100)
    matched_ingredients: list[str] = Field(default_factory=list)
    missing_ingredients: list[str] = Field(default_factory=list)

    @property
    def recipe_id(self) -> str:
        return self.recipe.id


class Recommendation(MatchResult):
    expiring_ingredient_count: int = 0
    score: int = 0


class ScoredRecipe(BaseModel):
    recipe: Recipe
    score: int = 0

    @property
    def recipe_id(self) -> str:
        return self.recipe.id


# ---------------------------------------------------------------------------
# Taste questionnaire
# ---------------------------------------------------------------------------


class TasteRule(BaseModel):
    include_tags: list[str] = Field(default_factory=list)
    exclude_tags: list[str] = Field(default_factory=list)
    min_minutes: Optional[int] = None
    max_minutes: Optional[int] = None
    difficulty: Optional[Difficulty] = None
    ingredients: list[str] = Field(default_factory=list)


class TasteOption(BaseModel):
    id: str
    label: dict[str, str]
    rule: TasteRule = Field(default_factory=TasteRule)


class TasteQuestion(BaseModel):
    id: str
    prompt: dict[str, str]
    options: list[TasteOption]
    multiple: bool = False

    def option(self, option_id: str) -> Optional[TasteOption]:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


class TasteRequest(BaseModel):
    answers: TasteAnswers = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Response items
# ---------------------------------------------------------------------------


class RecipeMatchItem(BaseModel):
    recipe_id: str
    title: str
    match_rate: int
    matched_ingredients: list[str]
    missing_ingredients: list[str]


class RecommendationItem(RecipeMatchItem):
    expiring_ingredient_count: int
    score: int


class TasteScoreItem(BaseModel):
    recipe_id: str
    title: str
    score: int
