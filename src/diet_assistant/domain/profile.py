"""User profile models used for menu planning."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Questionnaire:
    """Latest questionnaire answers for a user."""

    age: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    gender: str | None = None
    physical_activity_level: str | None = None
    main_goal: str | None = None
    dietary_style: str | None = None
    allergies: list[str] = field(default_factory=list)
    cooking_preference: str | None = None
