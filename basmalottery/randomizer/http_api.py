from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..errors import RandomizerUnavailableError
from .base import Randomizer


@dataclass(frozen=True)
class HttpRandomizerConfig:
    """Where to fetch numbers from. The endpoint speaks random.org's plain format."""

    url: str
    timeout_seconds: int = 10


class HttpRandomizer(Randomizer):
    """Fetch single integers from a random.org-style HTTP endpoint."""

    def __init__(self, config: HttpRandomizerConfig, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    def generate(self, minimum: int, maximum: int) -> int:
        text = self._get_text(self._params(minimum, maximum))
        value = self._parse_number(text)
        if not minimum <= value <= maximum:
            raise RandomizerUnavailableError(
                f"Randomizer returned {value}, outside [{minimum}, {maximum}]"
            )
        return value

    def close(self) -> None:
        self._session.close()

    @staticmethod
    def _params(minimum: int, maximum: int) -> Dict[str, Any]:
        return {
            "num": 1,
            "min": minimum,
            "max": maximum,
            "col": 1,
            "base": 10,
            "format": "plain",
            "rnd": "new",
        }

    def _get_text(self, params: Dict[str, Any]) -> str:
        try:
            resp = self._session.get(
                self._config.url, params=params, timeout=self._config.timeout_seconds
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise RandomizerUnavailableError(f"Randomizer request failed: {exc}") from exc
        return resp.text

    @staticmethod
    def _parse_number(raw: str) -> int:
        stripped = raw.strip()
        try:
            return int(stripped.splitlines()[0])
        except (IndexError, ValueError) as exc:
            raise RandomizerUnavailableError(f"Randomizer returned a non-integer payload: {stripped!r}") from exc
