"""Meal photo analysis backed by a vision model with deterministic fallbacks."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from diet_assistant.domain.language import Language
from diet_assistant.domain.nutrition import NutritionRecord
from diet_assistant.services.completions import CompletionClient, to_data_url
from diet_assistant.services.fallbacks import fallback_analysis, fallback_update
from diet_assistant.services.json_extraction import (
    extract_clean_json,
    parse_partial_json,
)
from diet_assistant.services.normalization import normalize_analysis
from diet_assistant.services.prompts import (
    analysis_system_prompt,
    analysis_user_prompt,
    update_system_prompt,
    update_user_prompt,
)

_logger = logging.getLogger(__name__)


@dataclass
class MealAnalysisService:
    """Analyzes meal photos and revises analyses.

    ``client`` is ``None`` when no model credential is configured, in which
    case every call returns the deterministic fallback.
    """

    client: CompletionClient | None
    model: str
    analysis_max_tokens: int = 2000
    update_max_tokens: int = 1500
    temperature: float = 0.1

    async def analyze_meal_photo(
        self,
        image_bytes: bytes,
        language: Language | str = Language.ENGLISH,
        update_text: str | None = None,
        edited_ingredients: Sequence[object] | None = None,
    ) -> NutritionRecord:
        """Return a nutrition record for the photo. Never raises."""
        resolved = Language.parse(language)
        if self.client is None:
            _logger.info("No model client configured, using fallback analysis")
            return fallback_analysis(resolved)
        try:
            content = await self.client.complete(
                model=self.model,
                system_prompt=analysis_system_prompt(resolved),
                user_prompt=analysis_user_prompt(
                    resolved, update_text, edited_ingredients
                ),
                image_data_url=to_data_url(image_bytes),
                max_tokens=self.analysis_max_tokens,
                temperature=self.temperature,
            )
        except Exception:
            _logger.exception("Meal analysis call failed, using fallback analysis")
            return fallback_analysis(resolved)

        if not content or not content.strip():
            _logger.warning("Empty analysis response, using fallback analysis")
            return fallback_analysis(resolved)

        data = parse_partial_json(extract_clean_json(content))
        if not data:
            _logger.warning("Unparseable analysis response, using fallback analysis")
            return fallback_analysis(resolved)
        record = normalize_analysis(data, resolved)
        _logger.info(
            "Meal analysis completed: name=%s calories=%s confidence=%s ingredients=%s",
            record.name,
            record.calories,
            record.confidence,
            len(record.ingredients),
        )
        return record

    async def update_meal_analysis(
        self,
        original: NutritionRecord,
        update_text: str,
        language: Language | str = Language.ENGLISH,
    ) -> NutritionRecord:
        """Return a new record revised by the update text. Never raises."""
        resolved = Language.parse(language)
        if self.client is None:
            _logger.info("No model client configured, using fallback update")
            return fallback_update(original, update_text, resolved)
        try:
            content = await self.client.complete(
                model=self.model,
                system_prompt=update_system_prompt(resolved),
                user_prompt=update_user_prompt(original, update_text, resolved),
                image_data_url=None,
                max_tokens=self.update_max_tokens,
                temperature=self.temperature,
            )
        except Exception:
            _logger.exception("Meal update call failed, using fallback update")
            return fallback_update(original, update_text, resolved)

        data = parse_partial_json(extract_clean_json(content or ""))
        if not data:
            _logger.warning("Unusable update response, using fallback update")
            return fallback_update(original, update_text, resolved)
        return normalize_analysis(data, resolved)
