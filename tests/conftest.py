"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from diet_assistant.config import Settings
from diet_assistant.containers import AppContainer
from diet_assistant.domain.menus import (
    IngredientLine,
    IngredientRecord,
    MealRecord,
    MealReplacement,
    MenuPlan,
    MenuRecord,
    PlannedMeal,
)
from diet_assistant.domain.profile import Questionnaire
from diet_assistant.services.analysis import MealAnalysisService
from diet_assistant.services.completions import CompletionClient
from diet_assistant.services.menus import (
    MenuRepository,
    ProfileRepository,
    RecommendedMenuService,
)


@dataclass
class FakeCompletionClient(CompletionClient):
    """Fake completion client returning a fixed response or raising."""

    response: str = ""
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str | None,
        user_prompt: str,
        image_data_url: str | None,
        max_tokens: int,
        temperature: float,
    ) -> str:
        self.calls.append(
            {
                "model": model,
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "image_data_url": image_data_url,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return self.response


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory questionnaire and goal storage for tests."""

    questionnaires: dict[UUID, Questionnaire] = field(default_factory=dict)
    goals: dict[UUID, float] = field(default_factory=dict)

    def get_latest_questionnaire(self, user_id: UUID) -> Questionnaire | None:
        return self.questionnaires.get(user_id)

    def get_goal_calories(self, user_id: UUID) -> float | None:
        return self.goals.get(user_id)


@dataclass
class InMemoryMenuRepository(MenuRepository):
    """In-memory menu repository for tests."""

    menus: dict[UUID, dict[str, object]] = field(default_factory=dict)
    meals: dict[UUID, MealRecord] = field(default_factory=dict)
    ingredients: dict[UUID, IngredientRecord] = field(default_factory=dict)
    feedback: list[dict[str, object]] = field(default_factory=list)
    fail_on_meal_insert: bool = False

    def create_menu(self, user_id: UUID, plan: MenuPlan) -> UUID:
        menu_id = uuid4()
        self.menus[menu_id] = {"user_id": user_id, "plan": plan}
        return menu_id

    def create_meal(self, menu_id: UUID, meal: PlannedMeal) -> UUID:
        if self.fail_on_meal_insert:
            raise RuntimeError("insert failed")
        meal_id = uuid4()
        self.meals[meal_id] = MealRecord(
            id=meal_id,
            menu_id=menu_id,
            name=meal.name,
            meal_type=meal.meal_type,
            day_number=meal.day_number,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            fiber=meal.fiber,
            prep_time_minutes=meal.prep_time_minutes,
            cooking_method=meal.cooking_method,
            instructions=meal.instructions,
        )
        return meal_id

    def create_ingredients(
        self, meal_id: UUID, ingredients: list[IngredientLine]
    ) -> None:
        for ingredient in ingredients:
            ingredient_id = uuid4()
            self.ingredients[ingredient_id] = IngredientRecord(
                id=ingredient_id,
                meal_id=meal_id,
                name=ingredient.name,
                quantity=ingredient.quantity,
                unit=ingredient.unit,
                category=ingredient.category,
                estimated_cost=ingredient.estimated_cost,
            )

    def get_menu(
        self, menu_id: UUID, user_id: UUID | None = None
    ) -> MenuRecord | None:
        stored = self.menus.get(menu_id)
        if stored is None:
            return None
        if user_id is not None and stored["user_id"] != user_id:
            return None
        plan: MenuPlan = stored["plan"]  # type: ignore[assignment]
        meals = sorted(
            (
                self._with_ingredients(meal)
                for meal in self.meals.values()
                if meal.menu_id == menu_id
            ),
            key=lambda meal: (meal.day_number, meal.meal_type.sort_order),
        )
        return MenuRecord(
            id=menu_id,
            user_id=stored["user_id"],  # type: ignore[arg-type]
            title=plan.title,
            description=plan.description,
            total_calories=plan.total_calories,
            total_protein=plan.total_protein,
            total_carbs=plan.total_carbs,
            total_fat=plan.total_fat,
            total_fiber=plan.total_fiber,
            days_count=plan.days_count,
            dietary_category=plan.dietary_category,
            estimated_cost=plan.estimated_cost,
            prep_time_minutes=plan.prep_time_minutes,
            difficulty_level=plan.difficulty_level,
            is_active=True,
            meals=meals,
        )

    def get_meal(
        self, meal_id: UUID, menu_id: UUID, user_id: UUID
    ) -> MealRecord | None:
        meal = self.meals.get(meal_id)
        stored = self.menus.get(menu_id)
        if meal is None or stored is None:
            return None
        if meal.menu_id != menu_id or stored["user_id"] != user_id:
            return None
        return self._with_ingredients(meal)

    def update_meal(self, meal_id: UUID, replacement: MealReplacement) -> MealRecord:
        meal = self.meals[meal_id]
        updated = MealRecord(
            id=meal.id,
            menu_id=meal.menu_id,
            name=replacement.name,
            meal_type=meal.meal_type,
            day_number=meal.day_number,
            calories=replacement.calories,
            protein=replacement.protein,
            carbs=replacement.carbs,
            fat=replacement.fat,
            fiber=replacement.fiber,
            prep_time_minutes=replacement.prep_time_minutes,
            cooking_method=replacement.cooking_method,
            instructions=replacement.instructions,
        )
        self.meals[meal_id] = updated
        return self._with_ingredients(updated)

    def record_feedback(
        self,
        user_id: UUID,
        meal_id: UUID,
        *,
        is_favorite: bool | None = None,
        liked: bool | None = None,
    ) -> None:
        self.feedback.append(
            {
                "user_id": user_id,
                "meal_id": meal_id,
                "is_favorite": is_favorite,
                "liked": liked,
            }
        )

    def _with_ingredients(self, meal: MealRecord) -> MealRecord:
        items = [item for item in self.ingredients.values() if item.meal_id == meal.id]
        return MealRecord(
            id=meal.id,
            menu_id=meal.menu_id,
            name=meal.name,
            meal_type=meal.meal_type,
            day_number=meal.day_number,
            calories=meal.calories,
            protein=meal.protein,
            carbs=meal.carbs,
            fat=meal.fat,
            fiber=meal.fiber,
            prep_time_minutes=meal.prep_time_minutes,
            cooking_method=meal.cooking_method,
            instructions=meal.instructions,
            ingredients=items,
        )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        openai_api_key=None,
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def profile_repository(user_id: UUID) -> InMemoryProfileRepository:
    repository = InMemoryProfileRepository()
    repository.questionnaires[user_id] = Questionnaire(
        age=30,
        weight_kg=70,
        height_cm=175,
        gender="male",
        physical_activity_level="MODERATE",
        main_goal="MAINTENANCE",
        dietary_style="Mediterranean",
        allergies=["peanuts"],
        cooking_preference="quick",
    )
    return repository


@pytest.fixture
def menu_repository() -> InMemoryMenuRepository:
    return InMemoryMenuRepository()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryProfileRepository,
    menu_repository: InMemoryMenuRepository,
) -> AppContainer:
    analysis_service = MealAnalysisService(client=None, model=settings.openai_model)
    menu_service = RecommendedMenuService(
        profile_repository=profile_repository,
        repository=menu_repository,
        client=None,
        model=settings.openai_model,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        menu_service=menu_service,
        close_resources=close_resources,
    )
