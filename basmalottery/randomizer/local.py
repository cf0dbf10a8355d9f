from __future__ import annotations

import random
from typing import Optional

from .base import Randomizer


class LocalRandomizer(Randomizer):
    """Uniform pseudo-random numbers from a ``random.Random`` instance."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    @classmethod
    def seeded(cls, seed: int) -> "LocalRandomizer":
        return cls(random.Random(seed))

    def generate(self, minimum: int, maximum: int) -> int:
        return self._rng.randint(minimum, maximum)
