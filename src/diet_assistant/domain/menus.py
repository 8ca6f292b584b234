"""Domain models for recommended menus."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class MealType(StrEnum):
    """Slot a meal occupies within a day."""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACK = "SNACK"

    @property
    def sort_order(self) -> int:
        return list(MealType).index(self)


class IngredientLine(BaseModel):
    """Ingredient with a quantity inside a planned meal."""

    name: str
    quantity: float = 0.0
    unit: str = ""
    category: str = "Other"
    estimated_cost: float = 0.0


class PlannedMeal(BaseModel):
    """Meal inside a menu plan before it is persisted."""

    name: str
    meal_type: MealType
    day_number: int = Field(default=1, ge=1)
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    prep_time_minutes: int = 30
    cooking_method: str = "Mixed"
    instructions: str = ""
    ingredients: list[IngredientLine] = Field(default_factory=list)


class MenuPlan(BaseModel):
    """Multi-day menu plan with aggregate totals."""

    title: str
    description: str = ""
    total_calories: float = 0.0
    total_protein: float = 0.0
    total_carbs: float = 0.0
    total_fat: float = 0.0
    total_fiber: float = 0.0
    days_count: int = 7
    estimated_cost: float = 0.0
    dietary_category: str = "BALANCED"
    prep_time_minutes: int = 30
    difficulty_level: int = 2
    meals: list[PlannedMeal] = Field(default_factory=list)


@dataclass(frozen=True)
class MenuRequest:
    """Parameters for generating a menu."""

    user_id: UUID
    days: int = 7
    meals_per_day: str = "3_main"
    meal_change_frequency: str | None = None
    include_leftovers: bool = False
    same_meal_times: bool = True
    target_calories: float | None = None
    dietary_preferences: list[str] = field(default_factory=list)
    excluded_ingredients: list[str] = field(default_factory=list)
    budget: float | None = None
    custom_request: str | None = None


@dataclass(frozen=True)
class MealReplacement:
    """Nutrition and metadata used to replace a planned meal."""

    name: str
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    prep_time_minutes: int
    cooking_method: str
    instructions: str


@dataclass(frozen=True)
class IngredientRecord:
    """Persisted ingredient row."""

    id: UUID
    meal_id: UUID
    name: str
    quantity: float
    unit: str
    category: str
    estimated_cost: float


@dataclass(frozen=True)
class MealRecord:
    """Persisted meal row with ingredients."""

    id: UUID
    menu_id: UUID
    name: str
    meal_type: MealType
    day_number: int
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    prep_time_minutes: int
    cooking_method: str
    instructions: str
    ingredients: list[IngredientRecord] = field(default_factory=list)


@dataclass(frozen=True)
class MenuRecord:
    """Persisted menu with meals."""

    id: UUID
    user_id: UUID
    title: str
    description: str
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    total_fiber: float
    days_count: int
    dietary_category: str
    estimated_cost: float
    prep_time_minutes: int
    difficulty_level: int
    is_active: bool
    meals: list[MealRecord] = field(default_factory=list)


@dataclass(frozen=True)
class ShoppingListItem:
    """Aggregated ingredient for a shopping list."""

    name: str
    unit: str
    category: str
    quantity: float
    estimated_cost: float


@dataclass(frozen=True)
class ShoppingList:
    """Shopping list for a whole menu."""

    menu_id: UUID
    items: list[ShoppingListItem]
    total_estimated_cost: float
    generated_at: datetime
