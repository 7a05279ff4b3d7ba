from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fridge_recipes.models import PantryItem, Recipe

logger = logging.getLogger(__name__)

PANTRY = "pantry"
RECIPES = "recipes"


class StoreError(RuntimeError):
    """The store file exists but cannot be read as a JSON object."""


class JsonStore:
    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write({PANTRY: {}, RECIPES: []})

    def _load(self) -> dict[str, Any]:
        try:
            with self.path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} does not hold a JSON object")
        return data

    def _read(self) -> dict[str, Any]:
        # Readers see a broken file as empty; writers go through _load and refuse to overwrite it.
        try:
            return self._load()
        except StoreError as e:
            logger.warning(str(e))
            return {}

    def _write(self, data: dict[str, Any]) -> None:
        with self.path.open("w", encoding="utf-8") as fp:
            json.dump(data, fp, ensure_ascii=False, indent=2)

    def get_user_list(self, namespace: str, user_id: str) -> list[dict[str, Any]]:
        with self.lock:
            data = self._read()
            ns = data.setdefault(namespace, {})
            rows = ns.get(user_id, []) if isinstance(ns, dict) else []
            if isinstance(rows, list):
                return rows
            return []

    def set_user_list(self, namespace: str, user_id: str, rows: list[dict[str, Any]]) -> None:
        with self.lock:
            data = self._load()
            ns = data.get(namespace)
            if not isinstance(ns, dict):
                ns = data[namespace] = {}
            ns[user_id] = rows
            self._write(data)

    def get_recipe_rows(self) -> list[dict[str, Any]]:
        with self.lock:
            rows = self._read().get(RECIPES, [])
            if isinstance(rows, list):
                return rows
            return []

    def add_recipe_row(self, row: dict[str, Any]) -> None:
        with self.lock:
            data = self._load()
            rows = data.get(RECIPES)
            if not isinstance(rows, list):
                rows = data[RECIPES] = []
            rows[:] = [r for r in rows if not (isinstance(r, dict) and str(r.get("id")) == row["id"])]
            rows.append(row)
            self._write(data)

    def get_user_pantry(self, user_id: str) -> list[PantryItem]:
        items: list[PantryItem] = []
        for row in self.get_user_list(PANTRY, user_id):
            try:
                items.append(PantryItem.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid pantry row for {user_id}: {e.error_count()} errors")
        return items

    def save_user_pantry(self, user_id: str, items: list[PantryItem]) -> None:
        self.set_user_list(PANTRY, user_id, [item.model_dump(exclude={"status", "days_remaining"}) for item in items])

    def get_all_recipes(self) -> list[Recipe]:
        recipes: list[Recipe] = []
        for index, row in enumerate(self.get_recipe_rows()):
            try:
                recipes.append(Recipe.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Skipping invalid recipe row #{index}: {e.error_count()} errors")
        return recipes
