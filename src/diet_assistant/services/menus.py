"""Recommended menu generation, meal replacement and shopping lists."""

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from diet_assistant.domain.errors import (
    MealNotFoundError,
    MenuNotFoundError,
    QuestionnaireNotFoundError,
)
from diet_assistant.domain.menus import (
    IngredientLine,
    MealRecord,
    MealReplacement,
    MenuPlan,
    MenuRecord,
    MenuRequest,
    PlannedMeal,
    ShoppingList,
)
from diet_assistant.domain.profile import Questionnaire
from diet_assistant.services.calories import calculate_default_calories
from diet_assistant.services.completions import CompletionClient
from diet_assistant.services.fallbacks import (
    REPLACEMENT_MEALS,
    fallback_custom_menu,
    fallback_menu,
)
from diet_assistant.services.menu_payloads import (
    menu_plan_from_payload,
    parse_menu_response,
)
from diet_assistant.services.prompts import custom_menu_prompt, menu_prompt
from diet_assistant.services.replacements import (
    MealSelectionPolicy,
    RandomSelectionPolicy,
)
from diet_assistant.services.shopping import aggregate_shopping_list

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Read access to questionnaire answers and nutrition goals."""

    def get_latest_questionnaire(self, user_id: UUID) -> Questionnaire | None:
        """Return the most recently completed questionnaire."""

    def get_goal_calories(self, user_id: UUID) -> float | None:
        """Return the calorie goal of the latest nutrition plan, if any."""


class MenuRepository(Protocol):
    """Persistence interface for recommended menus."""

    def create_menu(self, user_id: UUID, plan: MenuPlan) -> UUID:
        """Create a menu row and return its id."""

    def create_meal(self, menu_id: UUID, meal: PlannedMeal) -> UUID:
        """Create a meal row and return its id."""

    def create_ingredients(
        self, meal_id: UUID, ingredients: list[IngredientLine]
    ) -> None:
        """Create ingredient rows for a meal."""

    def get_menu(
        self, menu_id: UUID, user_id: UUID | None = None
    ) -> MenuRecord | None:
        """Return a menu with meals and ingredients, optionally scoped to a user."""

    def get_meal(
        self, meal_id: UUID, menu_id: UUID, user_id: UUID
    ) -> MealRecord | None:
        """Return a meal if it belongs to the user's menu."""

    def update_meal(self, meal_id: UUID, replacement: MealReplacement) -> MealRecord:
        """Overwrite a meal's fields and return the updated row."""

    def record_feedback(
        self,
        user_id: UUID,
        meal_id: UUID,
        *,
        is_favorite: bool | None = None,
        liked: bool | None = None,
    ) -> None:
        """Store a favorite flag or like/dislike for a meal."""


@dataclass
class RecommendedMenuService:
    """Builds menu plans with the model or fixed fallbacks and stores them."""

    profile_repository: ProfileRepository
    repository: MenuRepository
    client: CompletionClient | None
    model: str
    max_tokens: int = 2000
    temperature: float = 0.7
    selection_policy: MealSelectionPolicy = field(
        default_factory=RandomSelectionPolicy
    )

    async def generate_personalized_menu(self, request: MenuRequest) -> MenuRecord:
        """Generate and persist a plan tailored to the user's questionnaire."""
        _logger.info("Generating personalized menu for user %s", request.user_id)
        questionnaire = self._require_questionnaire(request.user_id)
        target_calories = (
            request.target_calories
            or self.profile_repository.get_goal_calories(request.user_id)
            or calculate_default_calories(questionnaire)
        )
        plan = await self._plan_with_model(
            request,
            prompt=menu_prompt(request, questionnaire, target_calories),
            fallback=lambda: fallback_menu(request),
        )
        return await self._save_menu(request.user_id, plan)

    async def generate_custom_menu(self, request: MenuRequest) -> MenuRecord:
        """Generate and persist a plan following a free-text request."""
        _logger.info("Generating custom menu for user %s", request.user_id)
        questionnaire = self._require_questionnaire(request.user_id)
        plan = await self._plan_with_model(
            request,
            prompt=custom_menu_prompt(request, questionnaire),
            fallback=lambda: fallback_custom_menu(request),
        )
        return await self._save_menu(request.user_id, plan)

    async def replace_meal(
        self,
        user_id: UUID,
        menu_id: UUID,
        meal_id: UUID,
        preferences: Mapping[str, object] | None = None,
    ) -> MealRecord:
        """Swap a meal for one chosen by the selection policy."""
        meal = self.repository.get_meal(meal_id, menu_id, user_id)
        if meal is None:
            raise MealNotFoundError()
        replacement = self.selection_policy.select(
            meal, preferences or {}, REPLACEMENT_MEALS
        )
        _logger.info("Replacing meal %s with %s", meal_id, replacement.name)
        return self.repository.update_meal(meal_id, replacement)

    async def generate_shopping_list(
        self, user_id: UUID, menu_id: UUID
    ) -> ShoppingList:
        """Aggregate every ingredient of a menu into a shopping list."""
        menu = self.repository.get_menu(menu_id, user_id)
        if menu is None:
            raise MenuNotFoundError()
        items = aggregate_shopping_list(menu.meals)
        return ShoppingList(
            menu_id=menu_id,
            items=items,
            total_estimated_cost=sum(item.estimated_cost for item in items),
            generated_at=datetime.now(tz=UTC),
        )

    async def mark_meal_as_favorite(
        self, user_id: UUID, menu_id: UUID, meal_id: UUID, is_favorite: bool
    ) -> None:
        """Record whether the user marked a meal as a favorite."""
        if self.repository.get_meal(meal_id, menu_id, user_id) is None:
            raise MealNotFoundError()
        self.repository.record_feedback(user_id, meal_id, is_favorite=is_favorite)

    async def give_meal_feedback(
        self, user_id: UUID, menu_id: UUID, meal_id: UUID, liked: bool
    ) -> None:
        """Record whether the user liked a meal."""
        if self.repository.get_meal(meal_id, menu_id, user_id) is None:
            raise MealNotFoundError()
        self.repository.record_feedback(user_id, meal_id, liked=liked)

    def _require_questionnaire(self, user_id: UUID) -> Questionnaire:
        questionnaire = self.profile_repository.get_latest_questionnaire(user_id)
        if questionnaire is None:
            raise QuestionnaireNotFoundError()
        return questionnaire

    async def _plan_with_model(
        self,
        request: MenuRequest,
        *,
        prompt: str,
        fallback: Callable[[], MenuPlan],
    ) -> MenuPlan:
        """Ask the model for a plan, using the fallback on any failure."""
        if self.client is None:
            _logger.info("No model client configured, using fallback menu")
            return fallback()
        try:
            response = await self.client.complete(
                model=self.model,
                system_prompt=None,
                user_prompt=prompt,
                image_data_url=None,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            data = parse_menu_response(response)
            return menu_plan_from_payload(
                data, days=request.days, budget=request.budget
            )
        except Exception:
            _logger.exception("Model menu generation failed, using fallback menu")
            return fallback()

    async def _save_menu(self, user_id: UUID, plan: MenuPlan) -> MenuRecord:
        """Persist the plan, writing sibling meals and ingredients concurrently."""
        try:
            menu_id = await asyncio.to_thread(
                self.repository.create_menu, user_id, plan
            )
            meal_ids = await asyncio.gather(
                *(
                    asyncio.to_thread(self.repository.create_meal, menu_id, meal)
                    for meal in plan.meals
                )
            )
            await asyncio.gather(
                *(
                    asyncio.to_thread(
                        self.repository.create_ingredients, meal_id, meal.ingredients
                    )
                    for meal_id, meal in zip(meal_ids, plan.meals, strict=True)
                    if meal.ingredients
                )
            )
            menu = await asyncio.to_thread(self.repository.get_menu, menu_id)
        except Exception:
            _logger.exception("Failed to save menu for user %s", user_id)
            raise
        if menu is None:
            raise MenuNotFoundError()
        _logger.info("Saved menu %s with %s meals", menu_id, len(menu.meals))
        return menu
