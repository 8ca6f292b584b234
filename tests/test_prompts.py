"""Tests for prompt construction."""

from uuid import uuid4

from diet_assistant.domain.language import Language
from diet_assistant.domain.menus import MenuRequest
from diet_assistant.domain.nutrition import NutritionRecord
from diet_assistant.domain.profile import Questionnaire
from diet_assistant.services.prompts import (
    analysis_system_prompt,
    analysis_user_prompt,
    custom_menu_prompt,
    menu_prompt,
    update_system_prompt,
    update_user_prompt,
)


def test_unknown_language_uses_english() -> None:
    assert analysis_system_prompt("klingon") == analysis_system_prompt("english")
    assert Language.parse(None) is Language.ENGLISH
    assert Language.parse("HEBREW") is Language.HEBREW


def test_system_prompt_declares_json_shape() -> None:
    prompt = analysis_system_prompt(Language.ENGLISH)

    assert "Return JSON in this format only" in prompt
    assert '"ingredients"' in prompt
    assert '"confidence"' in prompt


def test_hebrew_prompts_are_localized() -> None:
    assert "מומחה תזונה" in analysis_system_prompt("hebrew")
    assert "מומחה תזונה" in update_system_prompt("hebrew")
    assert analysis_user_prompt("hebrew").startswith("נתח")


def test_user_prompt_appends_context() -> None:
    prompt = analysis_user_prompt(
        "english",
        update_text="it was a large portion",
        edited_ingredients=[{"name": "rice"}, "chicken", {"grams": 10}],
    )

    assert "Additional user information: it was a large portion" in prompt
    assert "User-identified ingredients: rice, chicken" in prompt


def test_user_prompt_without_context_is_bare() -> None:
    prompt = analysis_user_prompt("english")

    assert prompt == (
        "Analyze this food image and provide detailed nutritional analysis."
    )


def test_update_prompt_embeds_original_values() -> None:
    original = NutritionRecord(
        name="Burger", calories=700, protein_g=35, carbs_g=50, fat_g=40
    )

    prompt = update_user_prompt(original, "no bun", "english")

    assert "- Name: Burger" in prompt
    assert "- Calories: 700" in prompt
    assert "- Protein: 35g" in prompt
    assert "Update request: no bun" in prompt


def test_menu_prompt_includes_profile_and_budget() -> None:
    request = MenuRequest(
        user_id=uuid4(),
        days=3,
        meals_per_day="3_plus_2_snacks",
        budget=25,
        excluded_ingredients=["mushrooms"],
    )
    questionnaire = Questionnaire(age=28, weight_kg=62.5, allergies=["nuts"])

    prompt = menu_prompt(request, questionnaire, 1850)

    assert prompt.startswith("Generate a 3-day meal plan")
    assert "- Age: 28" in prompt
    assert "- Weight: 62.5kg" in prompt
    assert "- Allergies: nuts" in prompt
    assert "- Target calories: 1850 per day" in prompt
    assert "- Budget: $25 per day" in prompt
    assert "- Exclude ingredients: mushrooms" in prompt
    assert '"meals"' in prompt


def test_custom_menu_prompt_defaults() -> None:
    request = MenuRequest(user_id=uuid4(), custom_request="high protein vegan")

    prompt = custom_menu_prompt(request, Questionnaire())

    assert '"high protein vegan"' in prompt
    assert "- Budget: Flexible" in prompt
    assert "- Allergies: None" in prompt
    assert "- 7 days" in prompt
