"""Deterministic results used when the model is unavailable or unusable."""

from dataclasses import dataclass

from diet_assistant.domain.language import Language
from diet_assistant.domain.menus import (
    IngredientLine,
    MealReplacement,
    MealType,
    MenuPlan,
    MenuRequest,
    PlannedMeal,
)
from diet_assistant.domain.nutrition import IngredientNutrition, NutritionRecord
from diet_assistant.services.normalization import round_half_up

ANALYSIS_FALLBACK_CONFIDENCE = 60
UPDATE_FALLBACK_CONFIDENCE = 65
DEFAULT_MENU_COST = 50.0


@dataclass(frozen=True)
class QuantityRule:
    """Keywords that scale a meal's macros by a fixed multiplier."""

    keywords: tuple[str, ...]
    multiplier: float

    def matches(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)


# Checked in order; the first matching rule wins.
QUANTITY_RULES: tuple[QuantityRule, ...] = (
    QuantityRule(keywords=("half", "חצי"), multiplier=0.5),
    QuantityRule(keywords=("double", "כפול"), multiplier=2.0),
)

# Values assumed when the original record has no (or a zero) value.
UPDATE_BASELINES: dict[str, float] = {
    "calories": 400.0,
    "protein_g": 20.0,
    "carbs_g": 45.0,
    "fat_g": 15.0,
    "fiber_g": 5.0,
    "sugar_g": 8.0,
    "sodium_mg": 500.0,
}

MEALS_PER_DAY: dict[str, int] = {
    "2_main": 2,
    "3_main": 3,
    "3_plus_2_snacks": 5,
    "2_plus_1_intermediate": 3,
}

_SLOT_TYPES = (MealType.BREAKFAST, MealType.LUNCH, MealType.DINNER)


def quantity_multiplier(update_text: str) -> float:
    """Multiplier implied by quantity keywords in the update text."""
    for rule in QUANTITY_RULES:
        if rule.matches(update_text or ""):
            return rule.multiplier
    return 1.0


def fallback_analysis(language: Language | str) -> NutritionRecord:
    """Generic analysis returned without calling the model."""
    hebrew = Language.parse(language).is_hebrew
    return NutritionRecord(
        name="ארוחה מנותחת" if hebrew else "Analyzed Meal",
        description="ניתוח בסיסי של הארוחה" if hebrew else "Basic meal analysis",
        calories=400,
        protein_g=20,
        carbs_g=45,
        fat_g=15,
        fiber_g=5,
        sugar_g=8,
        sodium_mg=500,
        confidence=ANALYSIS_FALLBACK_CONFIDENCE,
        ingredients=[
            IngredientNutrition(
                name="מרכיבים מעורבים" if hebrew else "Mixed ingredients",
                calories=400,
                protein_g=20,
                carbs_g=45,
                fat_g=15,
                fiber_g=5,
                sugar_g=8,
                sodium_mg=500,
            )
        ],
        serving_size="מנה אחת" if hebrew else "1 serving",
        cooking_method="מעורב" if hebrew else "Mixed",
        health_notes=(
            "ניתוח בסיסי - הוסף מפתח OpenAI לניתוח מדויק יותר"
            if hebrew
            else "Basic analysis - add OpenAI API key for more accurate analysis"
        ),
    )


def fallback_update(
    original: NutritionRecord, update_text: str, language: Language | str
) -> NutritionRecord:
    """Apply quantity keywords to an existing analysis without the model.

    Calories and the three main macros are multiplied by the matching
    ``QUANTITY_RULES`` entry. Fiber, sugar and sodium follow the ratio between
    updated and original calories.
    """
    hebrew = Language.parse(language).is_hebrew
    multiplier = quantity_multiplier(update_text)
    base = {
        name: getattr(original, name) or baseline
        for name, baseline in UPDATE_BASELINES.items()
    }
    calories = base["calories"] * multiplier
    ratio = calories / base["calories"]
    notes_prefix = "עודכן" if hebrew else "Updated"
    return NutritionRecord(
        name=original.name or ("ארוחה מעודכנת" if hebrew else "Updated Meal"),
        description="ארוחה מעודכנת" if hebrew else "Updated meal",
        calories=round_half_up(calories),
        protein_g=round_half_up(base["protein_g"] * multiplier),
        carbs_g=round_half_up(base["carbs_g"] * multiplier),
        fat_g=round_half_up(base["fat_g"] * multiplier),
        fiber_g=round_half_up(base["fiber_g"] * ratio),
        sugar_g=round_half_up(base["sugar_g"] * ratio),
        sodium_mg=round_half_up(base["sodium_mg"] * ratio),
        confidence=UPDATE_FALLBACK_CONFIDENCE,
        ingredients=list(original.ingredients),
        serving_size=original.serving_size or ("מנה אחת" if hebrew else "1 serving"),
        cooking_method=original.cooking_method or ("מעורב" if hebrew else "Mixed"),
        health_notes=f"{notes_prefix}: {update_text}",
    )


def meals_per_day_count(meals_per_day: str | None) -> int:
    return MEALS_PER_DAY.get(meals_per_day or "", 3)


def fallback_meal_templates() -> list[PlannedMeal]:
    """Breakfast, lunch and dinner used to fill fallback plans."""
    return [
        PlannedMeal(
            name="Protein Breakfast Bowl",
            meal_type=MealType.BREAKFAST,
            calories=350,
            protein=25,
            carbs=30,
            fat=15,
            fiber=8,
            prep_time_minutes=15,
            cooking_method="Mixed",
            instructions="Combine eggs, oats, and fruits for a balanced breakfast",
            ingredients=[
                IngredientLine(
                    name="eggs", quantity=2, unit="piece", category="protein"
                ),
                IngredientLine(name="oats", quantity=50, unit="g", category="grain"),
                IngredientLine(
                    name="banana", quantity=1, unit="piece", category="fruit"
                ),
            ],
        ),
        PlannedMeal(
            name="Balanced Lunch Plate",
            meal_type=MealType.LUNCH,
            calories=450,
            protein=35,
            carbs=40,
            fat=18,
            fiber=10,
            prep_time_minutes=25,
            cooking_method="Grilled",
            instructions="Grill chicken, steam vegetables, serve with quinoa",
            ingredients=[
                IngredientLine(
                    name="chicken breast", quantity=150, unit="g", category="protein"
                ),
                IngredientLine(name="quinoa", quantity=80, unit="g", category="grain"),
                IngredientLine(
                    name="mixed vegetables",
                    quantity=200,
                    unit="g",
                    category="vegetable",
                ),
            ],
        ),
        PlannedMeal(
            name="Light Dinner",
            meal_type=MealType.DINNER,
            calories=400,
            protein=30,
            carbs=35,
            fat=16,
            fiber=7,
            prep_time_minutes=20,
            cooking_method="Baked",
            instructions="Bake fish with vegetables and serve with rice",
            ingredients=[
                IngredientLine(
                    name="fish fillet", quantity=120, unit="g", category="protein"
                ),
                IngredientLine(
                    name="brown rice", quantity=60, unit="g", category="grain"
                ),
                IngredientLine(
                    name="broccoli", quantity=150, unit="g", category="vegetable"
                ),
            ],
        ),
    ]


def fallback_meals(days: int, meals_per_day: str | None) -> list[PlannedMeal]:
    """Cycle the templates over every slot of every day."""
    templates = fallback_meal_templates()
    slots = meals_per_day_count(meals_per_day)
    meals: list[PlannedMeal] = []
    for day in range(1, days + 1):
        for slot in range(slots):
            template = templates[slot % len(templates)]
            meal_type = _SLOT_TYPES[slot] if slot < len(_SLOT_TYPES) else MealType.SNACK
            meals.append(
                template.model_copy(
                    update={
                        "name": f"{template.name} - Day {day}",
                        "meal_type": meal_type,
                        "day_number": day,
                    },
                    deep=True,
                )
            )
    return meals


def fallback_menu(request: MenuRequest) -> MenuPlan:
    """Personalized plan built from the fixed templates."""
    days = request.days or 7
    return with_totals(
        MenuPlan(
            title=f"{days}-Day Personalized Menu",
            description="AI-generated meal plan tailored to your preferences",
            days_count=days,
            estimated_cost=request.budget or DEFAULT_MENU_COST,
            meals=fallback_meals(days, request.meals_per_day),
        )
    )


def fallback_custom_menu(request: MenuRequest) -> MenuPlan:
    """Custom plan built from the fixed templates."""
    days = request.days or 7
    return with_totals(
        MenuPlan(
            title=f"Custom {days}-Day Menu",
            description=request.custom_request
            or "Custom meal plan based on your request",
            days_count=days,
            estimated_cost=request.budget or DEFAULT_MENU_COST,
            meals=fallback_meals(days, request.meals_per_day),
        )
    )


def with_totals(plan: MenuPlan) -> MenuPlan:
    """Return the plan with totals recomputed from its meals."""
    return plan.model_copy(
        update={
            "total_calories": sum(meal.calories for meal in plan.meals),
            "total_protein": sum(meal.protein for meal in plan.meals),
            "total_carbs": sum(meal.carbs for meal in plan.meals),
            "total_fat": sum(meal.fat for meal in plan.meals),
            "total_fiber": sum(meal.fiber for meal in plan.meals),
        }
    )


REPLACEMENT_MEALS: tuple[MealReplacement, ...] = (
    MealReplacement(
        name="Grilled Chicken Salad",
        calories=380,
        protein=35,
        carbs=15,
        fat=18,
        fiber=8,
        prep_time_minutes=20,
        cooking_method="Grilled",
        instructions="Grill chicken, prepare fresh salad, combine with dressing",
    ),
    MealReplacement(
        name="Quinoa Power Bowl",
        calories=420,
        protein=18,
        carbs=55,
        fat=15,
        fiber=12,
        prep_time_minutes=25,
        cooking_method="Boiled",
        instructions="Cook quinoa, add vegetables and protein, dress with tahini",
    ),
    MealReplacement(
        name="Baked Salmon with Vegetables",
        calories=450,
        protein=32,
        carbs=25,
        fat=22,
        fiber=6,
        prep_time_minutes=30,
        cooking_method="Baked",
        instructions="Bake salmon with seasonal vegetables and herbs",
    ),
)
