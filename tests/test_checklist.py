"""Unit tests for editing a generated shopping list."""

import pytest

from family_meals.categories import RECIPE_CATEGORIES
from family_meals.checklist import (
    MANUAL_SOURCE,
    add_manual_item,
    clear,
    delete_item,
    group_by_category,
    parse_manual_item,
    toggle_checked,
    update_item,
)
from family_meals.models import ShoppingListItem


@pytest.fixture
def items() -> list[ShoppingListItem]:
    return [
        ShoppingListItem(id="a", name="Mąka", quantity="500 g", unit="g",
                         category_name="Obiad", recipe_sources=["Pierogi"]),
        ShoppingListItem(id="b", name="Sól", quantity="do smaku", unit="",
                         category_name="Inne", recipe_sources=["Rosół"]),
    ]


class TestToggleChecked:
    def test_toggles_one_item(self, items):
        result = toggle_checked(items, "a")
        assert result[0].checked is True
        assert result[1].checked is False

    def test_toggle_twice(self, items):
        assert toggle_checked(toggle_checked(items, "a"), "a")[0].checked is False

    def test_original_untouched(self, items):
        toggle_checked(items, "a")
        assert items[0].checked is False

    def test_unknown_id(self, items):
        with pytest.raises(ValueError, match="No shopping list item"):
            toggle_checked(items, "zzz")


class TestDeleteAndClear:
    def test_delete(self, items):
        assert [i.id for i in delete_item(items, "a")] == ["b"]
        assert len(items) == 2

    def test_delete_unknown(self, items):
        with pytest.raises(ValueError, match="No shopping list item"):
            delete_item(items, "zzz")

    def test_clear(self, items):
        assert clear(items) == []
        assert len(items) == 2


class TestAddManualItem:
    def test_defaults(self, items):
        result = add_manual_item(items, "Chleb", "1", unit="szt", id_factory=lambda: "m1")
        added = result[-1]
        assert len(result) == 3
        assert added.id == "m1"
        assert added.category_name == "Inne"
        assert added.category_id is None
        assert added.recipe_sources == [MANUAL_SOURCE]
        assert added.checked is False

    def test_custom_category(self, items):
        added = add_manual_item(items, "Woda", "6 butelek", category_name="Napój")[-1]
        assert added.category_name == "Napój"

    def test_name_required(self, items):
        with pytest.raises(ValueError, match="name and a quantity"):
            add_manual_item(items, "  ", "1")

    def test_quantity_required(self, items):
        with pytest.raises(ValueError, match="name and a quantity"):
            add_manual_item(items, "Chleb", "")


class TestParseManualItem:
    def test_name_and_quantity(self):
        assert parse_manual_item("Chleb:1") == ("Chleb", "1", "")

    def test_with_unit(self):
        assert parse_manual_item(" Woda : 6 : butelek ") == ("Woda", "6", "butelek")

    def test_bad_format(self):
        with pytest.raises(ValueError, match="Invalid item format"):
            parse_manual_item("Chleb")


class TestUpdateItem:
    def test_edit_fields(self, items):
        result = update_item(items, "b", quantity="1 opakowanie", category_name="Przyprawy")
        assert result[1].quantity == "1 opakowanie"
        assert result[1].category_name == "Przyprawy"
        assert result[1].recipe_sources == ["Rosół"]
        assert items[1].quantity == "do smaku"

    def test_category_rename_drops_old_id(self, items):
        result = update_item(items, "a", category_name="Deser")
        assert result[0].category_name == "Deser"
        assert result[0].category_id is None

    def test_category_id_can_be_set(self, items):
        result = update_item(items, "a", category_name="Deser", category_id="c-deser")
        assert result[0].category_id == "c-deser"

    def test_same_category_keeps_id(self):
        items = [ShoppingListItem(id="a", name="Mąka", quantity="1", unit="", category_id="c1",
                                  category_name="Obiad", recipe_sources=["x"])]
        assert update_item(items, "a", category_name="Obiad")[0].category_id == "c1"

    def test_unknown_field(self, items):
        with pytest.raises(ValueError, match="Cannot edit field"):
            update_item(items, "a", recipe_sources=[])

    def test_empty_name(self, items):
        with pytest.raises(ValueError, match="name cannot be empty"):
            update_item(items, "a", name=" ")

    def test_unknown_id(self, items):
        with pytest.raises(ValueError, match="No shopping list item"):
            update_item(items, "zzz", name="X")


class TestGroupByCategory:
    def _items(self, *categories):
        return [
            ShoppingListItem(id=str(i), name=f"item{i}", quantity="1", unit="",
                             category_name=c, recipe_sources=["x"])
            for i, c in enumerate(categories)
        ]

    def test_configured_order_with_fallback_last(self):
        grouped = group_by_category(
            self._items("Inne", "Obiad", "Zupy", "Śniadanie"), RECIPE_CATEGORIES
        )
        assert list(grouped) == ["Śniadanie", "Obiad", "Zupy", "Inne"]

    def test_fallback_in_configured_position(self):
        grouped = group_by_category(
            self._items("Inne", "Obiad", "Zupy", "Śniadanie"),
            RECIPE_CATEGORIES,
            fallback_last=False,
        )
        assert list(grouped) == ["Śniadanie", "Obiad", "Inne", "Zupy"]

    def test_items_keep_order_within_group(self):
        grouped = group_by_category(self._items("Obiad", "Deser", "Obiad"), RECIPE_CATEGORIES)
        assert [i.id for i in grouped["Obiad"]] == ["0", "2"]

    def test_no_order_sorts_alphabetically(self):
        grouped = group_by_category(self._items("Obiad", "Deser", "Inne"))
        assert list(grouped) == ["Deser", "Obiad", "Inne"]

    def test_blank_category_goes_to_fallback(self):
        grouped = group_by_category(self._items(""), RECIPE_CATEGORIES)
        assert list(grouped) == ["Inne"]
