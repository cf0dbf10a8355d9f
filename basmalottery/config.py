from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError
from .types import RandomizerKind

RANDOM_ORG_INTEGERS_URL = "https://www.random.org/integers/"


def _int_from_env(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {value!r}") from exc


def _decimal_from_env(key: str, default: Decimal) -> Decimal:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ConfigurationError(f"{key} must be a decimal amount, got {value!r}") from exc


def _randomizer_from_env(key: str, default: RandomizerKind) -> RandomizerKind:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    try:
        return RandomizerKind(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(kind.value for kind in RandomizerKind)
        raise ConfigurationError(f"{key} must be one of {choices}, got {value!r}") from exc


@dataclass(frozen=True)
class ExternalRandomizerSettings:
    url: str = RANDOM_ORG_INTEGERS_URL
    timeout_seconds: int = 10


@dataclass(frozen=True)
class LotterySettings:
    max_numbers_per_ticket: int = 4
    max_player_tickets: int = 10
    player_starting_money: Decimal = Decimal("10.00")
    ticket_cost: Decimal = Decimal("2.00")
    ticket_minimum_number: int = 1
    ticket_maximum_number: int = 10
    randomizer: RandomizerKind = RandomizerKind.LOCAL
    external_randomizer: ExternalRandomizerSettings = field(default_factory=ExternalRandomizerSettings)

    def __post_init__(self) -> None:
        # Money is kept exact; floats go through str so 2.1 stays 2.1.
        for name in ("player_starting_money", "ticket_cost"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                try:
                    value = Decimal(str(value))
                except InvalidOperation as exc:
                    raise ConfigurationError(f"{name} must be a decimal amount, got {value!r}") from exc
                object.__setattr__(self, name, value)
            if not value.is_finite():
                raise ConfigurationError(f"{name} must be a finite amount, got {value!r}")
        if not isinstance(self.randomizer, RandomizerKind):
            object.__setattr__(self, "randomizer", RandomizerKind(self.randomizer))

    def copy(self, **updates) -> "LotterySettings":
        return replace(self, **updates)

    @property
    def number_range_size(self) -> int:
        return max(self.ticket_maximum_number - self.ticket_minimum_number + 1, 0)

    def validate(self) -> "LotterySettings":
        errors: List[str] = []
        if self.max_numbers_per_ticket < 1:
            errors.append("max_numbers_per_ticket must be at least 1")
        if self.max_player_tickets < 1:
            errors.append("max_player_tickets must be at least 1")
        if self.player_starting_money < 0:
            errors.append("player_starting_money must not be negative")
        if self.ticket_cost < 0:
            errors.append("ticket_cost must not be negative")
        if self.ticket_minimum_number > self.ticket_maximum_number:
            errors.append("ticket_minimum_number must not exceed ticket_maximum_number")
        elif self.max_numbers_per_ticket > self.number_range_size:
            errors.append(
                f"max_numbers_per_ticket ({self.max_numbers_per_ticket}) exceeds the "
                f"{self.number_range_size} distinct numbers available"
            )
        if self.external_randomizer.timeout_seconds <= 0:
            errors.append("external randomizer timeout must be positive")
        if errors:
            raise ConfigurationError(errors)
        return self


def load_from_environment() -> LotterySettings:
    defaults = LotterySettings()
    external = ExternalRandomizerSettings(
        url=os.getenv("RANDOMIZER__URL") or RANDOM_ORG_INTEGERS_URL,
        timeout_seconds=_int_from_env("RANDOMIZER__TIMEOUT_SECONDS", 10),
    )
    return LotterySettings(
        max_numbers_per_ticket=_int_from_env(
            "LOTTERY_MAX_NUMBERS_PER_TICKET", defaults.max_numbers_per_ticket
        ),
        max_player_tickets=_int_from_env("LOTTERY_MAX_PLAYER_TICKETS", defaults.max_player_tickets),
        player_starting_money=_decimal_from_env(
            "LOTTERY_PLAYER_STARTING_MONEY", defaults.player_starting_money
        ),
        ticket_cost=_decimal_from_env("LOTTERY_TICKET_COST", defaults.ticket_cost),
        ticket_minimum_number=_int_from_env(
            "LOTTERY_TICKET_MINIMUM_NUMBER", defaults.ticket_minimum_number
        ),
        ticket_maximum_number=_int_from_env(
            "LOTTERY_TICKET_MAXIMUM_NUMBER", defaults.ticket_maximum_number
        ),
        randomizer=_randomizer_from_env("LOTTERY_RANDOMIZER", defaults.randomizer),
        external_randomizer=external,
    )


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> LotterySettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        default_path = pathlib.Path(".env")
        if default_path.exists():
            load_dotenv(default_path)
    return load_from_environment()
