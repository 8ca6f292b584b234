"""Supported response languages."""

from enum import StrEnum


class Language(StrEnum):
    """Language used for prompts and fallback text."""

    ENGLISH = "english"
    HEBREW = "hebrew"

    @classmethod
    def parse(cls, value: object) -> "Language":
        """Return the matching language, treating anything unknown as English."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.HEBREW.value:
            return cls.HEBREW
        return cls.ENGLISH

    @property
    def is_hebrew(self) -> bool:
        return self is Language.HEBREW
