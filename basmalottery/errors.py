from __future__ import annotations

from decimal import Decimal
from typing import List, Sequence, Tuple


class LotteryError(Exception):
    """Base class for every error raised by the lottery core."""


class ValidationError(LotteryError):
    """A ticket was rejected. ``errors`` holds ``(field, message)`` pairs."""

    def __init__(self, errors: Sequence[Tuple[str, str]]) -> None:
        self.errors: List[Tuple[str, str]] = list(errors)
        super().__init__("; ".join(f"{field}: {message}" for field, message in self.errors))

    @property
    def fields(self) -> List[str]:
        seen: List[str] = []
        for field, _ in self.errors:
            if field not in seen:
                seen.append(field)
        return seen


class TicketIndexError(LotteryError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"No ticket at index {index} (holding {size} tickets)")


class InsufficientFundsError(LotteryError):
    def __init__(self, balance: Decimal, required: Decimal) -> None:
        self.balance = balance
        self.required = required
        super().__init__(f"Balance {balance} is less than the ticket subtotal {required}")


class RandomizerUnavailableError(LotteryError):
    """The configured randomizer could not produce a number."""


class ConfigurationError(LotteryError):
    def __init__(self, errors: Sequence[str]) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors: List[str] = list(errors)
        super().__init__("; ".join(self.errors))
