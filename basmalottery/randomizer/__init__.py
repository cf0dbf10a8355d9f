from __future__ import annotations

from ..config import LotterySettings
from ..types import RandomizerKind
from .base import Randomizer
from .http_api import HttpRandomizer, HttpRandomizerConfig
from .local import LocalRandomizer


def build_randomizer(settings: LotterySettings) -> Randomizer:
    if settings.randomizer is RandomizerKind.EXTERNAL:
        external = settings.external_randomizer
        return HttpRandomizer(
            HttpRandomizerConfig(url=external.url, timeout_seconds=external.timeout_seconds)
        )
    return LocalRandomizer()


__all__ = [
    "Randomizer",
    "LocalRandomizer",
    "HttpRandomizer",
    "HttpRandomizerConfig",
    "build_randomizer",
]
