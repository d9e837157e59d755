"""Recipe category resolution and display ordering."""

from __future__ import annotations

from family_meals.models import CategoryRef, Recipe

# "Other": used when a recipe has no category association
FALLBACK_CATEGORY = "Inne"

RECIPE_CATEGORIES = [
    "Śniadanie",
    "Obiad",
    "Kolacja",
    "Deser",
    "Przekąska",
    "Napój",
    FALLBACK_CATEGORY,
]


def resolve_category(recipe: Recipe) -> CategoryRef:
    """Return the category a recipe's ingredients are listed under."""
    if recipe.category_id is None and not recipe.category_name:
        return CategoryRef(id=None, name=FALLBACK_CATEGORY)
    return CategoryRef(id=recipe.category_id, name=recipe.category_name or FALLBACK_CATEGORY)


def category_rank(name: str, order: list[str], fallback_last: bool = True) -> tuple[int, int]:
    """Sort rank for a category heading in grouped output.

    Known categories keep their position in ``order``; unknown ones come
    after them. With ``fallback_last`` the fallback label goes to the very
    end even when ``order`` lists it earlier.
    """
    if fallback_last and name == FALLBACK_CATEGORY:
        return (2, 0)
    if name in order:
        return (0, order.index(name))
    return (1, 0)
