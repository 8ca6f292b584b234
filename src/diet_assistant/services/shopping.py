"""Shopping list aggregation across a menu's meals."""

from collections.abc import Iterable
from dataclasses import dataclass

from diet_assistant.domain.menus import MealRecord, ShoppingListItem


@dataclass
class _Accumulator:
    name: str
    unit: str
    category: str
    quantity: float
    estimated_cost: float


def aggregate_shopping_list(meals: Iterable[MealRecord]) -> list[ShoppingListItem]:
    """Sum ingredient quantities and costs per exact (name, unit) pair.

    Items keep the order in which each pair first appears.
    """
    totals: dict[tuple[str, str], _Accumulator] = {}
    for meal in meals:
        for ingredient in meal.ingredients:
            key = (ingredient.name, ingredient.unit)
            existing = totals.get(key)
            if existing is None:
                totals[key] = _Accumulator(
                    name=ingredient.name,
                    unit=ingredient.unit,
                    category=ingredient.category or "Other",
                    quantity=ingredient.quantity,
                    estimated_cost=ingredient.estimated_cost or 0.0,
                )
                continue
            existing.quantity += ingredient.quantity
            existing.estimated_cost += ingredient.estimated_cost or 0.0
    return [
        ShoppingListItem(
            name=entry.name,
            unit=entry.unit,
            category=entry.category,
            quantity=entry.quantity,
            estimated_cost=entry.estimated_cost,
        )
        for entry in totals.values()
    ]
