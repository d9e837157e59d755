"""Shopping list generation from a weekly meal plan."""

from __future__ import annotations

import json
import logging
import unicodedata
import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import asdict

from family_meals.categories import FALLBACK_CATEGORY, resolve_category
from family_meals.keys import build_key
from family_meals.models import Ingredient, Recipe, ShoppingListItem, WeeklyPlan
from family_meals.quantity import NOT_NUMERIC, format_number, parse_leading_number

logger = logging.getLogger(__name__)

# Joins quantities that could not be summed
FALLBACK_SEPARATOR = "; "

# Letters NFKD does not decompose, mapped to the letter they sort with
_BASE_LETTERS = str.maketrans({"ł": "l", "đ": "d", "ø": "o", "ħ": "h", "ı": "i"})


def new_item_id() -> str:
    return str(uuid.uuid4())


def index_recipes(recipes: Mapping[str, Recipe] | Iterable[Recipe]) -> Mapping[str, Recipe]:
    """Return recipes addressable by id. The first recipe with a given id wins."""
    if isinstance(recipes, Mapping):
        return recipes
    index: dict[str, Recipe] = {}
    for recipe in recipes:
        index.setdefault(recipe.id, recipe)
    return index


def _with_unit(text: str, unit: str) -> str:
    """Append the unit unless it is empty or already mentioned in text."""
    if unit and unit.lower() not in text.lower():
        return f"{text} {unit}".strip()
    return text.strip()


def _initial_quantity(ingredient: Ingredient, value: float | None, unit: str) -> str:
    if value is not NOT_NUMERIC:
        return f"{format_number(value)} {unit}".strip()
    return _with_unit(ingredient.quantity or "", unit)


def _merge_quantity(item: ShoppingListItem, ingredient: Ingredient, value: float | None) -> str:
    """Fold one more mention into an item's quantity string.

    The stored string is re-parsed on every merge. Once it holds a fallback
    concatenation it is never summed again, so no fragment is dropped.
    """
    unit = item.unit.strip()
    existing = NOT_NUMERIC
    if FALLBACK_SEPARATOR not in item.quantity:
        existing = parse_leading_number(item.quantity)

    if existing is not NOT_NUMERIC and value is not NOT_NUMERIC:
        return f"{format_number(existing + value)} {unit}".strip()

    logger.debug(
        "Cannot sum %r and %r for %s, concatenating",
        item.quantity,
        ingredient.quantity,
        item.name,
    )
    combined = f"{item.quantity}{FALLBACK_SEPARATOR}{ingredient.quantity or ''}"
    return _with_unit(combined, unit)


def aggregate(
    weekly_plan: WeeklyPlan,
    recipes: Mapping[str, Recipe] | Iterable[Recipe],
    id_factory: Callable[[], str] | None = None,
) -> list[ShoppingListItem]:
    """Aggregate the ingredients of every planned recipe into shopping list items.

    Args:
        weekly_plan: day label -> planned meals
        recipes: recipe catalog, by id or as a plain collection
        id_factory: returns a fresh id for each created item (default: UUID4)

    Returns:
        unsorted list of items, one per (name, unit) aggregation key

    Meals without a recipe, and meals whose recipe is no longer in the
    catalog, contribute nothing. Neither input is modified.
    """
    make_id = id_factory or new_item_id
    catalog = index_recipes(recipes)
    agg: dict[str, ShoppingListItem] = {}

    for day, meals in weekly_plan.items():
        for meal in meals:
            if meal.recipe_id is None:
                continue
            recipe = catalog.get(meal.recipe_id)
            if recipe is None:
                logger.debug(
                    "Skipping %s %s: recipe %s not found", day, meal.meal_type, meal.recipe_id
                )
                continue

            category = resolve_category(recipe)
            for ingredient in recipe.ingredients:
                key = build_key(ingredient.name, ingredient.unit)
                value = parse_leading_number(ingredient.quantity)
                item = agg.get(key)

                if item is None:
                    unit = (ingredient.unit or "").strip()
                    agg[key] = ShoppingListItem(
                        id=make_id(),
                        name=(ingredient.name or "").strip(),
                        quantity=_initial_quantity(ingredient, value, unit),
                        unit=unit,
                        category_id=category.id,
                        category_name=category.name,
                        checked=False,
                        recipe_sources=[recipe.title],
                    )
                    continue

                item.quantity = _merge_quantity(item, ingredient, value)
                if recipe.title not in item.recipe_sources:
                    item.recipe_sources.append(recipe.title)

    return list(agg.values())


def collation_key(text: str) -> tuple[str, str, str]:
    """Locale-style sort key: letters first, then accents, then case.

    "apple" < "Banana" < "cebula" regardless of case; case only breaks ties,
    lower case first, and "ł" sorts with "l" rather than after "z".
    """
    folded = text.casefold()
    decomposed = unicodedata.normalize("NFKD", folded.translate(_BASE_LETTERS))
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return (base, folded, text.swapcase())


def _display_key(item: ShoppingListItem):
    return (
        collation_key(item.category_name or FALLBACK_CATEGORY),
        collation_key(item.name),
        collation_key(item.unit),
        item.quantity,
        item.id,
    )


def sort_for_display(items: Iterable[ShoppingListItem]) -> list[ShoppingListItem]:
    """Order items by category name, then item name.

    Unit, quantity and id only break ties, so every permutation of the same
    items sorts to the same list.
    """
    return sorted(items, key=_display_key)


def generate_shopping_list(
    weekly_plan: WeeklyPlan,
    recipes: Mapping[str, Recipe] | Iterable[Recipe],
    id_factory: Callable[[], str] | None = None,
) -> list[ShoppingListItem]:
    """Build the display-ordered shopping list for a weekly plan."""
    items = sort_for_display(aggregate(weekly_plan, recipes, id_factory=id_factory))
    logger.debug("Shopping list has %d items", len(items))
    return items


def format_shopping_markdown(items: list[ShoppingListItem], config: dict) -> str:
    """Format a shopping list as markdown with checkboxes, grouped by category."""
    from family_meals.checklist import group_by_category

    display = config["display"]
    lines = [f"# {display['title']}", ""]

    grouped = group_by_category(
        items,
        category_order=display["category_order"],
        fallback_last=display["fallback_last"],
    )
    for category, entries in grouped.items():
        lines.append(f"## {category}")
        lines.append("")
        for entry in entries:
            box = "[x]" if entry.checked else "[ ]"
            qty_str = f" {entry.quantity}" if entry.quantity else ""
            sources = ""
            if display["show_sources"] and entry.recipe_sources:
                sources = f" ({', '.join(entry.recipe_sources)})"
            lines.append(f"- {box} {entry.name}{qty_str}{sources}".rstrip())
        lines.append("")

    return "\n".join(lines)


def format_shopping_json(items: list[ShoppingListItem]) -> str:
    """Format a shopping list as JSON."""
    return json.dumps([asdict(item) for item in items], indent=2, ensure_ascii=False)
