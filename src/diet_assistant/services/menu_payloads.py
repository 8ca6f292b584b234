"""Validation and coercion of model-generated menu plans."""

from collections.abc import Mapping

from diet_assistant.domain.errors import MenuStructureError
from diet_assistant.domain.menus import IngredientLine, MealType, MenuPlan, PlannedMeal
from diet_assistant.services.fallbacks import with_totals
from diet_assistant.services.json_extraction import parse_json_object
from diet_assistant.services.normalization import round_half_up, to_number


def parse_menu_response(response: str) -> dict[str, object]:
    """Strictly decode a model response and require a ``meals`` array."""
    data = parse_json_object(response)
    if not isinstance(data.get("meals"), list):
        raise MenuStructureError("Invalid menu structure: missing meals array")
    return data


def menu_plan_from_payload(
    data: Mapping[str, object], *, days: int, budget: float | None
) -> MenuPlan:
    """Coerce a decoded menu into a plan whose totals match its meals."""
    meals = [
        _planned_meal(item)
        for item in data.get("meals") or []
        if isinstance(item, Mapping)
    ]
    days_count = round_half_up(to_number(data.get("days_count"))) or days
    return with_totals(
        MenuPlan(
            title=_text(data.get("title"), f"{days_count}-Day Menu"),
            description=_text(data.get("description"), ""),
            days_count=days_count,
            estimated_cost=to_number(data.get("estimated_cost")) or budget or 0.0,
            dietary_category=_text(data.get("dietary_category"), "BALANCED"),
            prep_time_minutes=round_half_up(to_number(data.get("prep_time_minutes")))
            or 30,
            difficulty_level=round_half_up(to_number(data.get("difficulty_level")))
            or 2,
            meals=meals,
        )
    )


def _planned_meal(data: Mapping[str, object]) -> PlannedMeal:
    ingredients = [
        _ingredient(item)
        for item in data.get("ingredients") or []
        if isinstance(item, Mapping)
    ]
    return PlannedMeal(
        name=_text(data.get("name"), "Meal"),
        meal_type=_meal_type(data.get("meal_type")),
        day_number=max(1, round_half_up(to_number(data.get("day_number")))),
        calories=to_number(data.get("calories")),
        protein=to_number(data.get("protein")),
        carbs=to_number(data.get("carbs")),
        fat=to_number(data.get("fat")),
        fiber=to_number(data.get("fiber")),
        prep_time_minutes=round_half_up(to_number(data.get("prep_time_minutes")))
        or 30,
        cooking_method=_text(data.get("cooking_method"), "Mixed"),
        instructions=_text(data.get("instructions"), ""),
        ingredients=ingredients,
    )


def _ingredient(data: Mapping[str, object]) -> IngredientLine:
    return IngredientLine(
        name=_text(data.get("name"), "Unknown ingredient"),
        quantity=to_number(data.get("quantity")),
        unit=_text(data.get("unit"), ""),
        category=_text(data.get("category"), "Other"),
        estimated_cost=to_number(data.get("estimated_cost")),
    )


def _meal_type(value: object) -> MealType:
    if isinstance(value, str):
        try:
            return MealType(value.strip().upper())
        except ValueError:
            return MealType.SNACK
    return MealType.SNACK


def _text(value: object, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value
    return default
