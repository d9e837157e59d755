"""Edits a user makes to a generated shopping list.

Every function returns a new list and leaves its input untouched, so a
list handed out by ``generate_shopping_list`` can be kept as a snapshot.
Nothing here feeds back into the next generated list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from family_meals.categories import FALLBACK_CATEGORY, category_rank
from family_meals.models import ShoppingListItem
from family_meals.shopping import collation_key, new_item_id

logger = logging.getLogger(__name__)

MANUAL_SOURCE = "Dodane ręcznie"

EDITABLE_FIELDS = ("name", "quantity", "unit", "category_id", "category_name", "checked")


def _find(items: list[ShoppingListItem], item_id: str) -> int:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    raise ValueError(f"No shopping list item with id '{item_id}'")


def toggle_checked(items: list[ShoppingListItem], item_id: str) -> list[ShoppingListItem]:
    idx = _find(items, item_id)
    result = list(items)
    result[idx] = replace(items[idx], checked=not items[idx].checked)
    return result


def delete_item(items: list[ShoppingListItem], item_id: str) -> list[ShoppingListItem]:
    _find(items, item_id)
    return [item for item in items if item.id != item_id]


def clear(items: list[ShoppingListItem]) -> list[ShoppingListItem]:
    logger.debug("Clearing %d shopping list items", len(items))
    return []


def add_manual_item(
    items: list[ShoppingListItem],
    name: str,
    quantity: str,
    unit: str = "",
    category_name: str = FALLBACK_CATEGORY,
    source_label: str = MANUAL_SOURCE,
    id_factory: Callable[[], str] | None = None,
) -> list[ShoppingListItem]:
    """Append a hand-entered item. Name and quantity are required."""
    if not name.strip() or not quantity.strip():
        raise ValueError("Manual items need both a name and a quantity")

    item = ShoppingListItem(
        id=(id_factory or new_item_id)(),
        name=name.strip(),
        quantity=quantity.strip(),
        unit=unit.strip(),
        category_id=None,
        category_name=category_name or FALLBACK_CATEGORY,
        checked=False,
        recipe_sources=[source_label],
    )
    return [*items, item]


def parse_manual_item(raw: str) -> tuple[str, str, str]:
    """Parse "Name:quantity" or "Name:quantity:unit" into its parts."""
    parts = raw.split(":", maxsplit=2)
    if len(parts) < 2:
        raise ValueError(
            f"Invalid item format: '{raw}'. Expected 'Name:quantity' or 'Name:quantity:unit'"
        )
    name, quantity = parts[0].strip(), parts[1].strip()
    unit = parts[2].strip() if len(parts) == 3 else ""
    return name, quantity, unit


def update_item(
    items: list[ShoppingListItem], item_id: str, **changes: object
) -> list[ShoppingListItem]:
    """Replace editable fields of one item.

    Supported fields: name, quantity, unit, category_id, category_name,
    checked. Renaming the category without a new category_id drops the old id.
    """
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Cannot edit field(s): {', '.join(sorted(unknown))}")
    if "name" in changes and not str(changes["name"]).strip():
        raise ValueError("Item name cannot be empty")
    if "quantity" in changes and not str(changes["quantity"]).strip():
        raise ValueError("Item quantity cannot be empty")

    idx = _find(items, item_id)
    current = items[idx]
    if (
        "category_name" in changes
        and "category_id" not in changes
        and changes["category_name"] != current.category_name
    ):
        changes["category_id"] = None

    result = list(items)
    result[idx] = replace(current, **changes)
    return result


def group_by_category(
    items: list[ShoppingListItem],
    category_order: list[str] | None = None,
    fallback_last: bool = True,
) -> dict[str, list[ShoppingListItem]]:
    """Group items under category headings, in display order.

    Items keep their relative order within a heading. Headings follow
    ``category_order``; categories missing from it sort alphabetically
    after the known ones.
    """
    order = category_order or []
    groups: dict[str, list[ShoppingListItem]] = {}
    for item in items:
        groups.setdefault(item.category_name or FALLBACK_CATEGORY, []).append(item)

    names = sorted(
        groups,
        key=lambda name: (category_rank(name, order, fallback_last), collation_key(name)),
    )
    return {name: groups[name] for name in names}
