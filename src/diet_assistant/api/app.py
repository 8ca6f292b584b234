"""FastAPI application factory."""

import base64
import binascii
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from diet_assistant.api.models import (
    AnalyzeMealRequest,
    FavoriteRequest,
    FeedbackRequest,
    GenerateMenuRequest,
    ReplaceMealRequest,
    UpdateAnalysisRequest,
)
from diet_assistant.app_logging import configure_logging
from diet_assistant.containers import AppContainer
from diet_assistant.domain.errors import NotFoundError
from diet_assistant.domain.nutrition import NutritionRecord
from diet_assistant.services.normalization import normalize_analysis


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, exc: NotFoundError) -> JSONResponse:
        logger.info("Lookup failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/meals/analyze")
    async def analyze_meal(
        payload: AnalyzeMealRequest, request: Request
    ) -> NutritionRecord:
        """Analyze a meal photo."""
        state_container: AppContainer = request.app.state.container
        image_bytes = _decode_image(payload.image_base64)
        return await state_container.analysis_service.analyze_meal_photo(
            image_bytes,
            language=payload.language,
            update_text=payload.update_text,
            edited_ingredients=payload.edited_ingredients,
        )

    @app.post("/meals/analysis/update")
    async def update_analysis(
        payload: UpdateAnalysisRequest, request: Request
    ) -> NutritionRecord:
        """Revise an existing analysis with free-text instructions."""
        state_container: AppContainer = request.app.state.container
        original = normalize_analysis(payload.original, payload.language)
        return await state_container.analysis_service.update_meal_analysis(
            original, payload.update_text, payload.language
        )

    @app.post("/menus/personalized")
    async def personalized_menu(
        payload: GenerateMenuRequest, request: Request
    ) -> dict[str, object]:
        """Generate a menu from the user's questionnaire."""
        state_container: AppContainer = request.app.state.container
        menu = await state_container.menu_service.generate_personalized_menu(
            payload.to_domain()
        )
        return {"menu": menu}

    @app.post("/menus/custom")
    async def custom_menu(
        payload: GenerateMenuRequest, request: Request
    ) -> dict[str, object]:
        """Generate a menu from a free-text request."""
        state_container: AppContainer = request.app.state.container
        menu = await state_container.menu_service.generate_custom_menu(
            payload.to_domain()
        )
        return {"menu": menu}

    @app.post("/menus/{menu_id}/meals/{meal_id}/replace")
    async def replace_meal(
        menu_id: UUID, meal_id: UUID, payload: ReplaceMealRequest, request: Request
    ) -> dict[str, object]:
        """Replace a meal in a menu."""
        state_container: AppContainer = request.app.state.container
        meal = await state_container.menu_service.replace_meal(
            payload.user_id, menu_id, meal_id, payload.preferences
        )
        return {"meal": meal}

    @app.post("/menus/{menu_id}/meals/{meal_id}/favorite")
    async def favorite_meal(
        menu_id: UUID, meal_id: UUID, payload: FavoriteRequest, request: Request
    ) -> dict[str, str]:
        """Mark or unmark a meal as a favorite."""
        state_container: AppContainer = request.app.state.container
        await state_container.menu_service.mark_meal_as_favorite(
            payload.user_id, menu_id, meal_id, payload.is_favorite
        )
        return {"status": "ok"}

    @app.post("/menus/{menu_id}/meals/{meal_id}/feedback")
    async def meal_feedback(
        menu_id: UUID, meal_id: UUID, payload: FeedbackRequest, request: Request
    ) -> dict[str, str]:
        """Record a like or dislike for a meal."""
        state_container: AppContainer = request.app.state.container
        await state_container.menu_service.give_meal_feedback(
            payload.user_id, menu_id, meal_id, payload.liked
        )
        return {"status": "ok"}

    @app.get("/menus/{menu_id}/shopping-list")
    async def shopping_list(
        menu_id: UUID, user_id: UUID, request: Request
    ) -> dict[str, object]:
        """Return the aggregated shopping list for a menu."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.menu_service.generate_shopping_list(
            user_id, menu_id
        )
        return {
            "menu_id": result.menu_id,
            "items": result.items,
            "total_estimated_cost": result.total_estimated_cost,
            "generated_at": result.generated_at,
        }

    return app


def _decode_image(value: str) -> bytes:
    """Decode base64 image data, accepting a data URL prefix."""
    encoded = value.partition(",")[2] if value.startswith("data:") else value
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid base64 image",
        ) from exc
