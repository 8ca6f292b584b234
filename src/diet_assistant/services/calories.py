"""Daily calorie targets from questionnaire answers."""

from diet_assistant.domain.profile import Questionnaire
from diet_assistant.services.normalization import round_half_up

MIN_CALORIES = 1200
MAX_CALORIES = 4000

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "NONE": 1.2,
    "LIGHT": 1.375,
    "MODERATE": 1.55,
    "HIGH": 1.725,
}

GOAL_ADJUSTMENTS: dict[str, float] = {
    "WEIGHT_LOSS": -500.0,
    "WEIGHT_GAIN": 300.0,
}


def calculate_default_calories(questionnaire: Questionnaire) -> int:
    """Harris-Benedict TDEE adjusted for the goal, clamped to a safe range."""
    weight = questionnaire.weight_kg or 70
    height = questionnaire.height_cm or 170
    age = questionnaire.age or 30
    gender = (questionnaire.gender or "male").strip().lower()

    if gender == "male":
        bmr = 88.362 + 13.397 * weight + 4.799 * height - 5.677 * age
    else:
        bmr = 447.593 + 9.247 * weight + 3.098 * height - 4.33 * age

    activity = (questionnaire.physical_activity_level or "MODERATE").upper()
    tdee = bmr * ACTIVITY_MULTIPLIERS.get(activity, ACTIVITY_MULTIPLIERS["MODERATE"])
    target = tdee + GOAL_ADJUSTMENTS.get((questionnaire.main_goal or "").upper(), 0.0)
    return round_half_up(max(MIN_CALORIES, min(MAX_CALORIES, target)))
