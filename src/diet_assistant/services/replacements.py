"""Selection policies for replacing a planned meal."""

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from diet_assistant.domain.menus import MealRecord, MealReplacement


class MealSelectionPolicy(Protocol):
    """Chooses a replacement for a meal among candidates."""

    def select(
        self,
        meal: MealRecord,
        preferences: Mapping[str, object],
        candidates: Sequence[MealReplacement],
    ) -> MealReplacement:
        """Return one of the candidates."""


@dataclass
class RandomSelectionPolicy(MealSelectionPolicy):
    """Uniform random choice that ignores preferences."""

    rng: random.Random = field(default_factory=random.Random)

    def select(
        self,
        meal: MealRecord,
        preferences: Mapping[str, object],
        candidates: Sequence[MealReplacement],
    ) -> MealReplacement:
        if not candidates:
            raise ValueError("No replacement candidates available")
        return self.rng.choice(list(candidates))
