"""Normalization of loosely-typed model output into nutrition records."""

import math
from collections.abc import Mapping

from diet_assistant.domain.language import Language
from diet_assistant.domain.nutrition import IngredientNutrition, NutritionRecord

DEFAULT_CONFIDENCE = 75

# Canonical field -> accepted input keys, in order of preference.
NUMERIC_ALIASES: dict[str, tuple[str, ...]] = {
    "calories": ("calories",),
    "protein_g": ("protein_g", "protein"),
    "carbs_g": ("carbs_g", "carbs"),
    "fat_g": ("fat_g", "fats_g", "fat"),
    "fiber_g": ("fiber_g", "fiber"),
    "sugar_g": ("sugar_g", "sugar"),
    "sodium_mg": ("sodium_mg", "sodium"),
    "cholesterol_mg": ("cholesterol_mg", "cholesterol"),
    "saturated_fats_g": ("saturated_fats_g", "saturated_fat_g"),
    "polyunsaturated_fats_g": ("polyunsaturated_fats_g", "polyunsaturated_fat_g"),
    "monounsaturated_fats_g": ("monounsaturated_fats_g", "monounsaturated_fat_g"),
    "omega_3_g": ("omega_3_g",),
    "omega_6_g": ("omega_6_g",),
    "soluble_fiber_g": ("soluble_fiber_g",),
    "insoluble_fiber_g": ("insoluble_fiber_g",),
    "alcohol_g": ("alcohol_g",),
    "caffeine_mg": ("caffeine_mg",),
    "serving_size_g": ("serving_size_g",),
}

# Only whole-meal records carry these.
RECORD_ONLY_NUMERIC_ALIASES: dict[str, tuple[str, ...]] = {
    "liquids_ml": ("liquids_ml",),
}

MAP_ALIASES: dict[str, tuple[str, ...]] = {
    "vitamins": ("vitamins_json", "vitamins"),
    "micronutrients": ("micronutrients_json", "micronutrients"),
    "allergens": ("allergens_json", "allergens"),
    "additives": ("additives_json", "additives"),
}

TEXT_ALIASES: dict[str, tuple[str, ...]] = {
    "serving_size": ("servingSize", "serving_size"),
    "cooking_method": ("cookingMethod", "cooking_method"),
    "health_notes": ("healthNotes", "health_notes", "health_risk_notes"),
    "food_category": ("food_category",),
    "processing_level": ("processing_level",),
}

TEXT_DEFAULTS: dict[str, str] = {
    "serving_size": "1 serving",
    "cooking_method": "Mixed",
    "health_notes": "",
    "food_category": "",
    "processing_level": "",
}

HEBREW_TEXT_DEFAULTS: dict[str, str] = {
    **TEXT_DEFAULTS,
    "serving_size": "מנה אחת",
    "cooking_method": "מעורב",
}


def normalize_analysis(
    data: object, language: Language | str = Language.ENGLISH
) -> NutritionRecord:
    """Build a fully populated record from any decoded object.

    Missing or unparseable numbers become 0, text fields fall back to
    defaults in the requested language and a non-list ``ingredients`` becomes
    empty.
    """
    defaults = (
        HEBREW_TEXT_DEFAULTS if Language.parse(language).is_hebrew else TEXT_DEFAULTS
    )
    source: Mapping[str, object] = data if isinstance(data, Mapping) else {}

    fields: dict[str, object] = {
        "name": _text(source, ("name",), "Unknown Meal"),
        "description": _text(source, ("description",), ""),
        "confidence": coerce_confidence(source.get("confidence")),
        "glycemic_index": optional_number(source.get("glycemic_index")),
        "insulin_index": optional_number(source.get("insulin_index")),
        "ingredients": normalize_ingredients(source.get("ingredients")),
    }
    for name, keys in {**NUMERIC_ALIASES, **RECORD_ONLY_NUMERIC_ALIASES}.items():
        fields[name] = first_number(source, keys)
    for name, keys in MAP_ALIASES.items():
        fields[name] = _mapping(source, keys)
    for name, keys in TEXT_ALIASES.items():
        fields[name] = _text(source, keys, defaults[name])
    return NutritionRecord(**fields)


def normalize_ingredients(value: object) -> list[IngredientNutrition]:
    """Normalize an ingredients array, skipping entries that are not objects."""
    if not isinstance(value, list):
        return []
    return [normalize_ingredient(item) for item in value if isinstance(item, Mapping)]


def normalize_ingredient(data: Mapping[str, object]) -> IngredientNutrition:
    fields: dict[str, object] = {
        "name": _text(data, ("name",), "Unknown ingredient"),
        "glycemic_index": optional_number(data.get("glycemic_index")),
        "insulin_index": optional_number(data.get("insulin_index")),
    }
    for name, keys in NUMERIC_ALIASES.items():
        fields[name] = first_number(data, keys)
    for name in ("vitamins", "micronutrients", "allergens"):
        fields[name] = _mapping(data, MAP_ALIASES[name])
    return IngredientNutrition(**fields)


def to_number(value: object) -> float:
    """Coerce a value to a non-negative finite float, or 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def first_number(data: Mapping[str, object], keys: tuple[str, ...]) -> float:
    """Return the first positive number among the accepted keys."""
    for key in keys:
        number = to_number(data.get(key))
        if number > 0:
            return number
    return 0.0


def optional_number(value: object) -> float | None:
    number = to_number(value)
    return number if number > 0 else None


def coerce_confidence(value: object) -> int:
    """Confidence as an integer in 1..100, defaulting to 75."""
    number = to_number(value)
    if number <= 0:
        return DEFAULT_CONFIDENCE
    return max(1, min(100, round_half_up(number)))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _text(data: Mapping[str, object], keys: tuple[str, ...], default: str) -> str:
    for key in keys:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
    return default


def _mapping(data: Mapping[str, object], keys: tuple[str, ...]) -> dict[str, object]:
    for key in keys:
        value = data.get(key)
        if isinstance(value, Mapping):
            return dict(value)
    return {}
