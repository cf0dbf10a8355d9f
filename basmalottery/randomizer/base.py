from __future__ import annotations

import abc


class Randomizer(abc.ABC):
    """Abstract number source."""

    @abc.abstractmethod
    def generate(self, minimum: int, maximum: int) -> int:
        """Return one integer in ``[minimum, maximum]``, both inclusive.

        Implementations should raise `RandomizerUnavailableError` if a
        number cannot be produced.
        """

    def close(self) -> None:
        """Optional hook for randomizers that hold resources."""
        return None
