"""Prompt construction for meal analysis and menu planning."""

from collections.abc import Sequence

from diet_assistant.domain.language import Language
from diet_assistant.domain.menus import MenuRequest
from diet_assistant.domain.nutrition import NutritionRecord
from diet_assistant.domain.profile import Questionnaire

_ANALYSIS_SHAPE_EN = """{
  "name": "meal name",
  "description": "brief description",
  "calories": number,
  "protein_g": number,
  "carbs_g": number,
  "fat_g": number,
  "fiber_g": number,
  "sugar_g": number,
  "sodium_mg": number,
  "confidence": number (1-100),
  "ingredients": [{"name": "name", "calories": number, "protein_g": number, "carbs_g": number, "fat_g": number}],
  "servingSize": "serving size",
  "cookingMethod": "cooking method",
  "healthNotes": "health notes"
}"""

_ANALYSIS_SHAPE_HE = """{
  "name": "שם הארוחה",
  "description": "תיאור קצר",
  "calories": מספר,
  "protein_g": מספר,
  "carbs_g": מספר,
  "fat_g": מספר,
  "fiber_g": מספר,
  "sugar_g": מספר,
  "sodium_mg": מספר,
  "confidence": מספר (1-100),
  "ingredients": [{"name": "שם", "calories": מספר, "protein_g": מספר, "carbs_g": מספר, "fat_g": מספר}],
  "servingSize": "גודל מנה",
  "cookingMethod": "שיטת הכנה",
  "healthNotes": "הערות בריאות"
}"""

MENU_SHAPE = """{
  "title": "Menu title",
  "description": "Menu description",
  "total_calories": total calories for all days,
  "total_protein": total protein,
  "total_carbs": total carbs,
  "total_fat": total fat,
  "days_count": number of days,
  "estimated_cost": estimated cost,
  "meals": [
    {
      "name": "Meal name",
      "meal_type": "BREAKFAST/LUNCH/DINNER/SNACK",
      "day_number": 1-7,
      "calories": number,
      "protein": number,
      "carbs": number,
      "fat": number,
      "fiber": number,
      "prep_time_minutes": number,
      "cooking_method": "method",
      "instructions": "cooking instructions",
      "ingredients": [
        {
          "name": "ingredient name",
          "quantity": number,
          "unit": "g/ml/cup/etc",
          "category": "protein/vegetable/grain/etc",
          "estimated_cost": number
        }
      ]
    }
  ]
}"""


def analysis_system_prompt(language: Language | str) -> str:
    """Instructions for analyzing a food photo."""
    if Language.parse(language).is_hebrew:
        return (
            "אתה מומחה תזונה מקצועי המנתח תמונות אוכל. "
            "נתח את התמונה ותן ניתוח תזונתי מדויק.\n\n"
            f"החזר JSON בפורמט הזה בלבד:\n{_ANALYSIS_SHAPE_HE}\n\n"
            "הנחיות:\n"
            "- זהה את כל המרכיבים הנראים\n"
            "- חשב ערכים תזונתיים מדויקים\n"
            "- תן ציון ביטחון מ-1 עד 100\n"
            "- כלול הערות בריאות רלוונטיות"
        )
    return (
        "You are a professional nutrition expert analyzing food images. "
        "Analyze the image and provide accurate nutritional analysis.\n\n"
        f"Return JSON in this format only:\n{_ANALYSIS_SHAPE_EN}\n\n"
        "Guidelines:\n"
        "- Identify all visible ingredients\n"
        "- Calculate accurate nutritional values\n"
        "- Provide confidence score from 1-100\n"
        "- Include relevant health notes"
    )


def analysis_user_prompt(
    language: Language | str,
    update_text: str | None = None,
    edited_ingredients: Sequence[object] | None = None,
) -> str:
    """Task description for a photo analysis with optional user context."""
    hebrew = Language.parse(language).is_hebrew
    prompt = (
        "נתח את תמונת האוכל הזו ותן ניתוח תזונתי מפורט."
        if hebrew
        else "Analyze this food image and provide detailed nutritional analysis."
    )
    if update_text:
        label = "מידע נוסף מהמשתמש" if hebrew else "Additional user information"
        prompt += f"\n\n{label}: {update_text}"
    names = ingredient_names(edited_ingredients or [])
    if names:
        label = "מרכיבים שהמשתמש זיהה" if hebrew else "User-identified ingredients"
        prompt += f"\n\n{label}: {', '.join(names)}"
    return prompt


def update_system_prompt(language: Language | str) -> str:
    """Instructions for revising an existing analysis."""
    if Language.parse(language).is_hebrew:
        return (
            "אתה מומחה תזונה המעדכן ניתוח ארוחות. "
            "קבל ניתוח קיים ועדכן אותו לפי הבקשה.\n\n"
            f"החזר JSON בפורמט הזה:\n{_ANALYSIS_SHAPE_HE}"
        )
    return (
        "You are a nutrition expert updating meal analysis. "
        "Take existing analysis and update it based on the request.\n\n"
        f"Return JSON in this format:\n{_ANALYSIS_SHAPE_EN}"
    )


def update_user_prompt(
    original: NutritionRecord, update_text: str, language: Language | str
) -> str:
    """Describe the current analysis and the requested change."""
    if Language.parse(language).is_hebrew:
        return (
            "עדכן את הניתוח הבא:\n\n"
            "ניתוח קיים:\n"
            f"- שם: {original.name}\n"
            f"- קלוריות: {_fmt(original.calories)}\n"
            f"- חלבון: {_fmt(original.protein_g)}ג\n"
            f"- פחמימות: {_fmt(original.carbs_g)}ג\n"
            f"- שומן: {_fmt(original.fat_g)}ג\n\n"
            f"בקשת עדכון: {update_text}\n\n"
            "עדכן את הניתוח בהתאם לבקשה. "
            "אם הבקשה מתייחסת לכמות, עדכן את כל הערכים התזונתיים באופן יחסי."
        )
    return (
        "Update the following analysis:\n\n"
        "Current analysis:\n"
        f"- Name: {original.name}\n"
        f"- Calories: {_fmt(original.calories)}\n"
        f"- Protein: {_fmt(original.protein_g)}g\n"
        f"- Carbs: {_fmt(original.carbs_g)}g\n"
        f"- Fat: {_fmt(original.fat_g)}g\n\n"
        f"Update request: {update_text}\n\n"
        "Update the analysis according to the request. If the request refers "
        "to quantity, update all nutritional values proportionally."
    )


def menu_prompt(
    request: MenuRequest, questionnaire: Questionnaire, target_calories: float
) -> str:
    """Prompt for a personalized multi-day plan."""
    budget = f"${_fmt(request.budget)} per day" if request.budget else "Moderate"
    lines = [
        f"Generate a {request.days}-day meal plan with the following requirements:",
        "",
        "USER PROFILE:",
        f"- Age: {_profile_value(questionnaire.age)}",
        f"- Weight: {_profile_value(questionnaire.weight_kg)}kg",
        f"- Height: {_profile_value(questionnaire.height_cm)}cm",
        f"- Goal: {_profile_value(questionnaire.main_goal)}",
        f"- Activity Level: {_profile_value(questionnaire.physical_activity_level)}",
        f"- Dietary Style: {_profile_value(questionnaire.dietary_style)}",
        f"- Allergies: {_join_or_none(questionnaire.allergies)}",
        "",
        "MENU REQUIREMENTS:",
        f"- {request.meals_per_day} meals per day",
        f"- Target calories: {_fmt(target_calories)} per day",
        f"- Days: {request.days}",
        f"- Budget: {budget}",
    ]
    lines.extend(_preference_lines(request))
    lines.extend(["", f"Return a JSON object with this structure:\n{MENU_SHAPE}"])
    return "\n".join(lines)


def custom_menu_prompt(request: MenuRequest, questionnaire: Questionnaire) -> str:
    """Prompt for a plan driven by a free-text custom request."""
    budget = f"${_fmt(request.budget)} per day" if request.budget else "Flexible"
    lines = [
        "Create a custom meal plan based on this request: "
        f'"{request.custom_request or ""}"',
        "",
        "USER CONTEXT:",
        f"- Dietary Style: {_profile_value(questionnaire.dietary_style)}",
        f"- Allergies: {_join_or_none(questionnaire.allergies)}",
        f"- Cooking Preference: {_profile_value(questionnaire.cooking_preference)}",
        f"- Budget: {budget}",
        "",
        "REQUIREMENTS:",
        f"- {request.days} days",
        f"- {request.meals_per_day} meals per day",
        "- Follow the custom request closely",
        "- Ensure nutritional balance",
    ]
    lines.extend(_preference_lines(request))
    lines.extend(["", f"Return a JSON object with this structure:\n{MENU_SHAPE}"])
    return "\n".join(lines)


def ingredient_names(edited_ingredients: Sequence[object]) -> list[str]:
    """Names of user-edited ingredients given as dicts or plain strings."""
    names: list[str] = []
    for ingredient in edited_ingredients:
        if isinstance(ingredient, dict):
            name = ingredient.get("name")
            if name:
                names.append(str(name))
        elif ingredient:
            names.append(str(ingredient))
    return names


def _preference_lines(request: MenuRequest) -> list[str]:
    lines: list[str] = []
    if request.dietary_preferences:
        lines.append(
            f"- Dietary preferences: {', '.join(request.dietary_preferences)}"
        )
    if request.excluded_ingredients:
        lines.append(
            f"- Exclude ingredients: {', '.join(request.excluded_ingredients)}"
        )
    if request.meal_change_frequency:
        lines.append(f"- Meal change frequency: {request.meal_change_frequency}")
    if request.include_leftovers:
        lines.append("- Reuse leftovers from previous meals where sensible")
    if not request.same_meal_times:
        lines.append("- Meal times may vary between days")
    return lines


def _profile_value(value: object) -> str:
    if value is None or value == "":
        return "Not specified"
    if isinstance(value, float):
        return _fmt(value)
    return str(value)


def _join_or_none(values: list[str]) -> str:
    return ", ".join(values) if values else "None"


def _fmt(value: float | None) -> str:
    """Render numbers without a trailing .0."""
    if value is None:
        return "0"
    if float(value).is_integer():
        return str(int(value))
    return str(round(value, 1))
