"""Shared data models for the meal planner and its shopping list."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field


@dataclass
class Ingredient:
    name: str
    quantity: str  # free text: "200", "1,5 kg", "do smaku"
    unit: str = ""
    id: str | None = None


@dataclass
class Recipe:
    id: str
    title: str
    ingredients: list[Ingredient] = field(default_factory=list)
    category_id: str | None = None
    category_name: str | None = None
    # Descriptive fields, not used by the shopping list
    instructions: str = ""
    prep_time: str = ""
    tags: list[str] = field(default_factory=list)


@dataclass
class PlannedMeal:
    day: str
    meal_type: str
    recipe_id: str | None = None  # None for custom, recipe-less meals
    id: str | None = None
    custom_meal_name: str | None = None
    servings: int = 1


# Day label -> meals planned for that day
WeeklyPlan = Mapping[str, Sequence[PlannedMeal]]


@dataclass
class CategoryRef:
    id: str | None
    name: str


@dataclass
class ShoppingListItem:
    id: str
    name: str
    quantity: str
    unit: str
    category_id: str | None = None
    category_name: str = ""
    checked: bool = False
    recipe_sources: list[str] = field(default_factory=list)
