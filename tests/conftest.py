import os
import tempfile

import pytest

os.environ.setdefault("FRIDGE_DATA_FILE", os.path.join(tempfile.mkdtemp(), "fridge_data.json"))

from fridge_recipes.models import Recipe  # noqa: E402


def make_recipe(recipe_id, ingredients=(), **fields):
    return Recipe(
        id=recipe_id,
        title={"ko": recipe_id, "en": recipe_id},
        ingredients=[{"name": name, "quantity": 1, "unit": "ea"} for name in ingredients],
        **fields,
    )


@pytest.fixture
def recipes():
    return [
        make_recipe("egg-rice", ["egg", "green onion", "soy sauce"], cooking_time=10, difficulty="easy", tags=["quick", "mild"]),
        make_recipe("kimchi-stew", ["김치", "돼지고기", "두부", "대파"], cooking_time=30, difficulty="medium", tags=["spicy", "soupy", "meat", "heavy"]),
        make_recipe("shrimp-pasta", ["pasta", "shrimp", "garlic", "olive oil"], cooking_time=25, difficulty="medium", tags=["seafood"]),
        make_recipe("empty", []),
    ]


@pytest.fixture
def recipe_factory():
    return make_recipe
