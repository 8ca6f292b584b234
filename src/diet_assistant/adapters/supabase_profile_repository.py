"""Supabase repository for questionnaires and nutrition goals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from diet_assistant.domain.profile import Questionnaire
from diet_assistant.services.menus import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_latest_questionnaire(self, user_id: UUID) -> Questionnaire | None:
        """Return the most recently completed questionnaire."""
        response = (
            self.client.table("user_questionnaires")
            .select(
                "age, weight_kg, height_cm, gender, physical_activity_level, "
                "main_goal, dietary_style, allergies, cooking_preference"
            )
            .eq("user_id", str(user_id))
            .order("date_completed", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        allergies = row.get("allergies")
        return Questionnaire(
            age=_optional_float(row.get("age")),
            weight_kg=_optional_float(row.get("weight_kg")),
            height_cm=_optional_float(row.get("height_cm")),
            gender=row.get("gender"),
            physical_activity_level=row.get("physical_activity_level"),
            main_goal=row.get("main_goal"),
            dietary_style=row.get("dietary_style"),
            allergies=[str(item) for item in allergies]
            if isinstance(allergies, list)
            else [],
            cooking_preference=row.get("cooking_preference"),
        )

    def get_goal_calories(self, user_id: UUID) -> float | None:
        """Return the calorie goal of the latest nutrition plan."""
        response = (
            self.client.table("nutrition_plans")
            .select("goal_calories")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _optional_float(response.data[0].get("goal_calories"))


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None
