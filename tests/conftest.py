import itertools

import pytest

from family_meals.models import Ingredient, Recipe


@pytest.fixture
def id_factory():
    """Deterministic item ids: item-1, item-2, ..."""
    counter = itertools.count(1)
    return lambda: f"item-{next(counter)}"


@pytest.fixture
def sample_recipes() -> list[Recipe]:
    """Small recipe catalog for unit tests."""
    return [
        Recipe(
            id="r1", title="Naleśniki", category_id="c-deser", category_name="Deser",
            ingredients=[
                Ingredient(name="Mąka", quantity="200", unit="g"),
                Ingredient(name="Mleko", quantity="0,5", unit="l"),
                Ingredient(name="Jajka", quantity="2", unit="szt"),
            ],
        ),
        Recipe(
            id="r2", title="Pierogi", category_id="c-obiad", category_name="Obiad",
            ingredients=[
                Ingredient(name="Mąka", quantity="300", unit="g"),
                Ingredient(name="Sól", quantity="do smaku", unit=""),
            ],
        ),
        Recipe(
            id="r3", title="Zupa pomidorowa",
            ingredients=[
                Ingredient(name="Pomidory", quantity="1", unit="kg"),
                Ingredient(name="Sól", quantity="1 szczypta", unit=""),
            ],
        ),
        Recipe(id="r4", title="Herbata", ingredients=[]),
    ]
