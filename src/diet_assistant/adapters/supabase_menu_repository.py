"""Supabase repository for recommended menus."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_assistant.domain.menus import (
    IngredientLine,
    IngredientRecord,
    MealRecord,
    MealReplacement,
    MealType,
    MenuPlan,
    MenuRecord,
    PlannedMeal,
)
from diet_assistant.services.menus import MenuRepository

_MENU_COLUMNS = (
    "id, user_id, title, description, total_calories, total_protein, "
    "total_carbs, total_fat, total_fiber, days_count, dietary_category, "
    "estimated_cost, prep_time_minutes, difficulty_level, is_active"
)
_MEAL_COLUMNS = (
    "id, menu_id, name, meal_type, day_number, calories, protein, carbs, fat, "
    "fiber, prep_time_minutes, cooking_method, instructions"
)
_INGREDIENT_COLUMNS = "id, meal_id, name, quantity, unit, category, estimated_cost"


@dataclass
class SupabaseMenuRepository(MenuRepository):
    """Supabase implementation for recommended menus."""

    client: Client

    def create_menu(self, user_id: UUID, plan: MenuPlan) -> UUID:
        """Create a menu row and return its id."""
        response = (
            self.client.table("recommended_menus")
            .insert(
                {
                    "user_id": str(user_id),
                    "title": plan.title,
                    "description": plan.description,
                    "total_calories": plan.total_calories,
                    "total_protein": plan.total_protein,
                    "total_carbs": plan.total_carbs,
                    "total_fat": plan.total_fat,
                    "total_fiber": plan.total_fiber,
                    "days_count": plan.days_count,
                    "dietary_category": plan.dietary_category,
                    "estimated_cost": plan.estimated_cost,
                    "prep_time_minutes": plan.prep_time_minutes,
                    "difficulty_level": plan.difficulty_level,
                    "is_active": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create menu")
        return UUID(response.data[0]["id"])

    def create_meal(self, menu_id: UUID, meal: PlannedMeal) -> UUID:
        """Create a meal row and return its id."""
        response = (
            self.client.table("recommended_meals")
            .insert(
                {
                    "menu_id": str(menu_id),
                    "name": meal.name,
                    "meal_type": meal.meal_type.value,
                    "day_number": meal.day_number,
                    "calories": meal.calories,
                    "protein": meal.protein,
                    "carbs": meal.carbs,
                    "fat": meal.fat,
                    "fiber": meal.fiber,
                    "prep_time_minutes": meal.prep_time_minutes,
                    "cooking_method": meal.cooking_method,
                    "instructions": meal.instructions,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return UUID(response.data[0]["id"])

    def create_ingredients(
        self, meal_id: UUID, ingredients: list[IngredientLine]
    ) -> None:
        """Create ingredient rows for a meal, keeping their order in ``position``."""
        payload = [
            {
                "meal_id": str(meal_id),
                "name": ingredient.name,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit,
                "category": ingredient.category or "Other",
                "estimated_cost": ingredient.estimated_cost,
                "position": position,
            }
            for position, ingredient in enumerate(ingredients)
        ]
        if payload:
            self.client.table("recommended_ingredients").insert(payload).execute()

    def get_menu(
        self, menu_id: UUID, user_id: UUID | None = None
    ) -> MenuRecord | None:
        """Return a menu with meals ordered by day and meal type."""
        query = (
            self.client.table("recommended_menus")
            .select(_MENU_COLUMNS)
            .eq("id", str(menu_id))
        )
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        response = query.limit(1).execute()
        if not response.data:
            return None
        row = response.data[0]
        meals = self._list_meals(menu_id)
        return MenuRecord(
            id=UUID(row["id"]),
            user_id=UUID(row["user_id"]),
            title=str(row.get("title") or ""),
            description=str(row.get("description") or ""),
            total_calories=float(row.get("total_calories") or 0.0),
            total_protein=float(row.get("total_protein") or 0.0),
            total_carbs=float(row.get("total_carbs") or 0.0),
            total_fat=float(row.get("total_fat") or 0.0),
            total_fiber=float(row.get("total_fiber") or 0.0),
            days_count=int(row.get("days_count") or 0),
            dietary_category=str(row.get("dietary_category") or "BALANCED"),
            estimated_cost=float(row.get("estimated_cost") or 0.0),
            prep_time_minutes=int(row.get("prep_time_minutes") or 30),
            difficulty_level=int(row.get("difficulty_level") or 2),
            is_active=bool(row.get("is_active", True)),
            meals=meals,
        )

    def get_meal(
        self, meal_id: UUID, menu_id: UUID, user_id: UUID
    ) -> MealRecord | None:
        """Return a meal if it belongs to the user's menu."""
        owner = (
            self.client.table("recommended_menus")
            .select("id")
            .eq("id", str(menu_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not owner.data:
            return None
        response = (
            self.client.table("recommended_meals")
            .select(_MEAL_COLUMNS)
            .eq("id", str(meal_id))
            .eq("menu_id", str(menu_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0], self._list_ingredients([meal_id]))

    def update_meal(self, meal_id: UUID, replacement: MealReplacement) -> MealRecord:
        """Overwrite a meal's nutrition and metadata."""
        response = (
            self.client.table("recommended_meals")
            .update(
                {
                    "name": replacement.name,
                    "calories": replacement.calories,
                    "protein": replacement.protein,
                    "carbs": replacement.carbs,
                    "fat": replacement.fat,
                    "fiber": replacement.fiber,
                    "prep_time_minutes": replacement.prep_time_minutes,
                    "cooking_method": replacement.cooking_method,
                    "instructions": replacement.instructions,
                }
            )
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal")
        return _parse_meal(response.data[0], self._list_ingredients([meal_id]))

    def record_feedback(
        self,
        user_id: UUID,
        meal_id: UUID,
        *,
        is_favorite: bool | None = None,
        liked: bool | None = None,
    ) -> None:
        """Store a favorite flag or like/dislike for a meal."""
        payload: dict[str, object] = {"user_id": str(user_id), "meal_id": str(meal_id)}
        if is_favorite is not None:
            payload["is_favorite"] = is_favorite
        if liked is not None:
            payload["liked"] = liked
        self.client.table("meal_feedback").upsert(
            payload, on_conflict="user_id,meal_id"
        ).execute()

    def _list_meals(self, menu_id: UUID) -> list[MealRecord]:
        response = (
            self.client.table("recommended_meals")
            .select(_MEAL_COLUMNS)
            .eq("menu_id", str(menu_id))
            .execute()
        )
        rows = response.data or []
        ingredients = self._list_ingredients([UUID(row["id"]) for row in rows])
        meals = [_parse_meal(row, ingredients) for row in rows]
        return sorted(
            meals, key=lambda meal: (meal.day_number, meal.meal_type.sort_order)
        )

    def _list_ingredients(self, meal_ids: list[UUID]) -> list[IngredientRecord]:
        if not meal_ids:
            return []
        response = (
            self.client.table("recommended_ingredients")
            .select(_INGREDIENT_COLUMNS)
            .in_("meal_id", [str(meal_id) for meal_id in meal_ids])
            .order("position", desc=False)
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]


def _parse_meal(
    row: dict[str, object], ingredients: list[IngredientRecord]
) -> MealRecord:
    meal_id = UUID(row["id"])
    meal_type = str(row.get("meal_type") or MealType.SNACK.value).upper()
    return MealRecord(
        id=meal_id,
        menu_id=UUID(row["menu_id"]),
        name=str(row.get("name") or ""),
        meal_type=MealType(meal_type)
        if meal_type in MealType.__members__
        else MealType.SNACK,
        day_number=int(row.get("day_number") or 1),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        fiber=float(row.get("fiber") or 0.0),
        prep_time_minutes=int(row.get("prep_time_minutes") or 30),
        cooking_method=str(row.get("cooking_method") or "Mixed"),
        instructions=str(row.get("instructions") or ""),
        ingredients=[item for item in ingredients if item.meal_id == meal_id],
    )


def _parse_ingredient(row: dict[str, object]) -> IngredientRecord:
    return IngredientRecord(
        id=UUID(row["id"]),
        meal_id=UUID(row["meal_id"]),
        name=str(row.get("name") or ""),
        quantity=float(row.get("quantity") or 0.0),
        unit=str(row.get("unit") or ""),
        category=str(row.get("category") or "Other"),
        estimated_cost=float(row.get("estimated_cost") or 0.0),
    )
