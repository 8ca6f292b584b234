"""Domain exceptions."""


class DietAssistantError(Exception):
    """Base error for the diet assistant."""


class MenuStructureError(DietAssistantError, ValueError):
    """Raised when a model response is not a usable menu plan."""


class NotFoundError(DietAssistantError, LookupError):
    """Raised when a referenced entity does not exist."""


class QuestionnaireNotFoundError(NotFoundError):
    """Raised when a user has not completed the questionnaire."""

    def __init__(self) -> None:
        super().__init__(
            "User questionnaire not found. Please complete the questionnaire first."
        )


class MenuNotFoundError(NotFoundError):
    """Raised when a menu is missing or owned by another user."""

    def __init__(self) -> None:
        super().__init__("Menu not found")


class MealNotFoundError(NotFoundError):
    """Raised when a meal is missing or owned by another user."""

    def __init__(self) -> None:
        super().__init__("Meal not found")
