"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from diet_assistant.adapters.openai_completion_client import OpenAICompletionClient
from diet_assistant.adapters.supabase_menu_repository import SupabaseMenuRepository
from diet_assistant.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_assistant.config import Settings
from diet_assistant.services.analysis import MealAnalysisService
from diet_assistant.services.menus import RecommendedMenuService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    analysis_service: MealAnalysisService
    menu_service: RecommendedMenuService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The OpenAI client is only built when a key is configured; services fall
    back to deterministic results otherwise.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    completion_client = (
        OpenAICompletionClient.create(resolved_settings.openai_api_key)
        if resolved_settings.ai_enabled
        else None
    )
    analysis_service = MealAnalysisService(
        client=completion_client,
        model=resolved_settings.openai_model,
        analysis_max_tokens=resolved_settings.analysis_max_tokens,
        update_max_tokens=resolved_settings.update_max_tokens,
        temperature=resolved_settings.analysis_temperature,
    )
    menu_service = RecommendedMenuService(
        profile_repository=SupabaseProfileRepository(supabase_client),
        repository=SupabaseMenuRepository(supabase_client),
        client=completion_client,
        model=resolved_settings.openai_model,
        max_tokens=resolved_settings.menu_max_tokens,
        temperature=resolved_settings.menu_temperature,
    )

    async def close_resources() -> None:
        if completion_client is not None:
            await completion_client.close()

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        menu_service=menu_service,
        close_resources=close_resources,
    )
