"""Tests for shopping list aggregation."""

from uuid import uuid4

from diet_assistant.domain.menus import IngredientRecord, MealRecord, MealType
from diet_assistant.services.shopping import aggregate_shopping_list


def _meal(*ingredients: tuple[str, float, str, float]) -> MealRecord:
    meal_id = uuid4()
    return MealRecord(
        id=meal_id,
        menu_id=uuid4(),
        name="Meal",
        meal_type=MealType.LUNCH,
        day_number=1,
        calories=0,
        protein=0,
        carbs=0,
        fat=0,
        fiber=0,
        prep_time_minutes=30,
        cooking_method="Mixed",
        instructions="",
        ingredients=[
            IngredientRecord(
                id=uuid4(),
                meal_id=meal_id,
                name=name,
                quantity=quantity,
                unit=unit,
                category="grain",
                estimated_cost=cost,
            )
            for name, quantity, unit, cost in ingredients
        ],
    )


def test_quantities_are_summed_per_name_and_unit() -> None:
    items = aggregate_shopping_list(
        [
            _meal(("rice", 100, "g", 0.5), ("eggs", 2, "piece", 1.0)),
            _meal(("rice", 50, "g", 0.25)),
        ]
    )

    assert [(item.name, item.quantity) for item in items] == [
        ("rice", 150),
        ("eggs", 2),
    ]
    assert items[0].estimated_cost == 0.75
    assert items[0].category == "grain"


def test_names_and_units_are_matched_exactly() -> None:
    items = aggregate_shopping_list(
        [_meal(("Rice", 100, "g", 0), ("rice", 100, "g", 0), ("rice", 1, "cup", 0))]
    )

    assert [(item.name, item.unit) for item in items] == [
        ("Rice", "g"),
        ("rice", "g"),
        ("rice", "cup"),
    ]


def test_empty_menu_yields_empty_list() -> None:
    assert aggregate_shopping_list([]) == []
