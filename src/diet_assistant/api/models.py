"""Pydantic request models for the HTTP API."""

from uuid import UUID

from pydantic import BaseModel, Field

from diet_assistant.domain.menus import MenuRequest


class AnalyzeMealRequest(BaseModel):
    """Photo analysis request with a base64 image or data URL."""

    image_base64: str
    language: str = "english"
    update_text: str | None = None
    edited_ingredients: list[dict[str, object] | str] = Field(default_factory=list)


class UpdateAnalysisRequest(BaseModel):
    """Revision of a previous analysis."""

    original: dict[str, object]
    update_text: str
    language: str = "english"


class GenerateMenuRequest(BaseModel):
    """Menu generation parameters."""

    user_id: UUID
    days: int = Field(default=7, ge=1, le=31)
    meals_per_day: str = "3_main"
    meal_change_frequency: str | None = None
    include_leftovers: bool = False
    same_meal_times: bool = True
    target_calories: float | None = Field(default=None, gt=0)
    dietary_preferences: list[str] = Field(default_factory=list)
    excluded_ingredients: list[str] = Field(default_factory=list)
    budget: float | None = Field(default=None, ge=0)
    custom_request: str | None = None

    def to_domain(self) -> MenuRequest:
        return MenuRequest(
            user_id=self.user_id,
            days=self.days,
            meals_per_day=self.meals_per_day,
            meal_change_frequency=self.meal_change_frequency,
            include_leftovers=self.include_leftovers,
            same_meal_times=self.same_meal_times,
            target_calories=self.target_calories,
            dietary_preferences=list(self.dietary_preferences),
            excluded_ingredients=list(self.excluded_ingredients),
            budget=self.budget,
            custom_request=self.custom_request,
        )


class ReplaceMealRequest(BaseModel):
    """Meal replacement request."""

    user_id: UUID
    preferences: dict[str, object] = Field(default_factory=dict)


class FavoriteRequest(BaseModel):
    """Favorite flag for a meal."""

    user_id: UUID
    is_favorite: bool


class FeedbackRequest(BaseModel):
    """Like or dislike for a meal."""

    user_id: UUID
    liked: bool
