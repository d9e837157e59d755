"""Load recipe catalogs and weekly plans from JSON, YAML or Markdown notes."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import frontmatter
import yaml

from family_meals.models import Ingredient, PlannedMeal, Recipe

logger = logging.getLogger(__name__)

DAYS_OF_WEEK = [
    "Poniedziałek",
    "Wtorek",
    "Środa",
    "Czwartek",
    "Piątek",
    "Sobota",
    "Niedziela",
]

MEAL_TYPES = ["Śniadanie", "Drugie Śniadanie", "Obiad", "Podwieczorek", "Kolacja"]


def _pick(data: dict, *names: str, default: object = None) -> object:
    """Return the first present key out of snake_case/camelCase aliases."""
    for name in names:
        if name in data and data[name] is not None:
            return data[name]
    return default


def _to_str(val: object) -> str:
    if val is None:
        return ""
    return str(val)


def _to_optional_str(val: object) -> str | None:
    if val is None or val == "":
        return None
    return str(val).strip()


def read_data_file(path: Path) -> object:
    """Read a .json, .yaml or .yml file."""
    suffix = path.suffix.lower()
    if suffix not in (".json", ".yaml", ".yml"):
        raise ValueError(
            f"Unsupported file format: '{path.name}'. Expected .json, .yaml or .yml"
        )
    with open(path, encoding="utf-8") as f:
        if suffix == ".json":
            return json.load(f)
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Cannot parse {path}: {e}") from e


def ingredient_from_dict(data: dict) -> Ingredient:
    if not isinstance(data, dict):
        raise ValueError(f"Invalid ingredient: {data!r}")
    return Ingredient(
        name=_to_str(data.get("name")),
        quantity=_to_str(data.get("quantity")),
        unit=_to_str(data.get("unit")),
        id=_to_optional_str(data.get("id")),
    )


def recipe_from_dict(data: dict, default_id: str | None = None) -> Recipe:
    """Build a Recipe from its stored form.

    ``category`` is accepted as an alias of ``category_name``.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Invalid recipe: {data!r}")

    recipe_id = _to_optional_str(data.get("id")) or default_id
    if not recipe_id:
        raise ValueError(f"Recipe without an id: {data.get('title', data)!r}")
    title = _to_optional_str(data.get("title"))
    if not title:
        raise ValueError(f"Recipe '{recipe_id}' has no title")

    tags = data.get("tags", []) or []
    if isinstance(tags, str):
        tags = [t.strip() for t in tags.split(",")]

    return Recipe(
        id=recipe_id,
        title=title,
        ingredients=[ingredient_from_dict(i) for i in data.get("ingredients", []) or []],
        category_id=_to_optional_str(_pick(data, "category_id", "categoryId")),
        category_name=_to_optional_str(_pick(data, "category_name", "categoryName", "category")),
        instructions=_to_str(data.get("instructions")),
        prep_time=_to_str(_pick(data, "prep_time", "prepTime")),
        tags=tags,
    )


def parse_recipe_file(file_path: Path) -> Recipe | None:
    """Parse a Markdown recipe note with YAML front matter.

    Notes must declare ``type: recipe``; id and title default to the file
    stem and the note body becomes the instructions.
    """
    try:
        post = frontmatter.load(file_path)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Cannot read recipe note %s: %s", file_path.name, e)
        return None

    meta = post.metadata
    if meta.get("type") != "recipe":
        return None

    data = dict(meta)
    data.setdefault("title", file_path.stem)
    if not data.get("instructions"):
        data["instructions"] = post.content.strip()
    return recipe_from_dict(data, default_id=file_path.stem)


def discover_recipe_files(recipes_path: Path) -> list[Path]:
    """Find all .md files in the recipes directory."""
    return sorted(recipes_path.glob("*.md"))


def load_recipes(path: Path) -> list[Recipe]:
    """Load a recipe catalog from a data file or a directory of notes.

    Data files hold a list of recipes or a mapping of id -> recipe.
    """
    if path.is_dir():
        recipes = []
        for f in discover_recipe_files(path):
            recipe = parse_recipe_file(f)
            if recipe is None:
                logger.debug("SKIP (not a recipe note): %s", f.name)
                continue
            recipes.append(recipe)
        logger.info("Loaded %d recipes from %s", len(recipes), path)
        return recipes

    data = read_data_file(path)
    if data is None:
        return []
    if isinstance(data, dict):
        recipes = [recipe_from_dict(value, default_id=str(key)) for key, value in data.items()]
    elif isinstance(data, list):
        recipes = [recipe_from_dict(value) for value in data]
    else:
        raise ValueError(f"Recipe file {path} must contain a list or a mapping")
    logger.info("Loaded %d recipes from %s", len(recipes), path.name)
    return recipes


def meal_from_dict(data: dict, day: str) -> PlannedMeal:
    if not isinstance(data, dict):
        raise ValueError(f"Invalid planned meal on {day}: {data!r}")

    servings = _pick(data, "servings", default=1)
    try:
        servings = int(servings)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid servings on {day}: {servings!r}") from e

    return PlannedMeal(
        day=_to_str(data.get("day")) or day,
        meal_type=_to_str(_pick(data, "meal_type", "mealType")),
        recipe_id=_to_optional_str(_pick(data, "recipe_id", "recipeId")),
        id=_to_optional_str(data.get("id")),
        custom_meal_name=_to_optional_str(_pick(data, "custom_meal_name", "customMealName")),
        servings=servings,
    )


def load_weekly_plan(path: Path) -> dict[str, list[PlannedMeal]]:
    """Load a weekly plan: a mapping of day label -> list of planned meals."""
    data = read_data_file(path)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Plan file {path} must map day names to lists of meals")

    plan: dict[str, list[PlannedMeal]] = {}
    for day, meals in data.items():
        day = str(day)
        if meals is None:
            meals = []
        if not isinstance(meals, list):
            raise ValueError(f"Meals for '{day}' must be a list")
        if day not in DAYS_OF_WEEK:
            logger.warning("Unknown day label in plan: %s", day)
        plan[day] = [meal_from_dict(m, day) for m in meals]
    return plan
