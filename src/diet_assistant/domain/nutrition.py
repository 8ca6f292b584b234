"""Nutrition analysis models."""

from pydantic import BaseModel, Field


class IngredientNutrition(BaseModel):
    """Nutrition values for a single detected ingredient."""

    name: str = "Unknown ingredient"
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    cholesterol_mg: float = 0.0
    saturated_fats_g: float = 0.0
    polyunsaturated_fats_g: float = 0.0
    monounsaturated_fats_g: float = 0.0
    omega_3_g: float = 0.0
    omega_6_g: float = 0.0
    soluble_fiber_g: float = 0.0
    insoluble_fiber_g: float = 0.0
    alcohol_g: float = 0.0
    caffeine_mg: float = 0.0
    serving_size_g: float = 0.0
    glycemic_index: float | None = None
    insulin_index: float | None = None
    vitamins: dict[str, object] = Field(default_factory=dict)
    micronutrients: dict[str, object] = Field(default_factory=dict)
    allergens: dict[str, object] = Field(default_factory=dict)


class NutritionRecord(BaseModel):
    """Fully populated nutrition analysis of a meal."""

    name: str = "Unknown Meal"
    description: str = ""
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    fiber_g: float = 0.0
    sugar_g: float = 0.0
    sodium_mg: float = 0.0
    cholesterol_mg: float = 0.0
    saturated_fats_g: float = 0.0
    polyunsaturated_fats_g: float = 0.0
    monounsaturated_fats_g: float = 0.0
    omega_3_g: float = 0.0
    omega_6_g: float = 0.0
    soluble_fiber_g: float = 0.0
    insoluble_fiber_g: float = 0.0
    alcohol_g: float = 0.0
    caffeine_mg: float = 0.0
    liquids_ml: float = 0.0
    serving_size_g: float = 0.0
    confidence: int = Field(default=75, ge=1, le=100)
    vitamins: dict[str, object] = Field(default_factory=dict)
    micronutrients: dict[str, object] = Field(default_factory=dict)
    allergens: dict[str, object] = Field(default_factory=dict)
    additives: dict[str, object] = Field(default_factory=dict)
    glycemic_index: float | None = None
    insulin_index: float | None = None
    serving_size: str = "1 serving"
    cooking_method: str = "Mixed"
    health_notes: str = ""
    food_category: str = ""
    processing_level: str = ""
    ingredients: list[IngredientNutrition] = Field(default_factory=list)
