from __future__ import annotations

import logging
import threading
from collections import deque
from decimal import Decimal
from typing import Any, Callable, Deque, Dict, List, TypeVar

from flask import current_app

from basmalottery.engine import LotteryEngine
from basmalottery.types import Ticket

EXTENSION_KEY = "basmalottery"
RECENT_CHANGES = 50

T = TypeVar("T")


def _to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Ticket):
        return list(value.numbers)
    if isinstance(value, (list, tuple)):
        return [_to_json(item) for item in value]
    return value


class GameSession:
    """One engine shared by every request, plus the change feed it emits.

    Flask may serve requests from several threads; each engine call runs
    under one lock so a hook and the set that triggered it stay atomic.
    """

    def __init__(self, engine: LotteryEngine, logger: logging.Logger) -> None:
        self.engine = engine
        self._lock = threading.Lock()
        self._changes: Deque[Dict[str, Any]] = deque(maxlen=RECENT_CHANGES)
        self._logger = logger
        engine.subscribe(self._record_change)

    def call(self, operation: Callable[..., T], *args: Any) -> T:
        with self._lock:
            return operation(*args)

    def recent_changes(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._changes)

    def _record_change(self, key: str, value: Any) -> None:
        self._logger.debug("state change %s -> %r", key, value)
        self._changes.append({"key": key, "value": _to_json(value)})


def get_game() -> GameSession:
    return current_app.extensions[EXTENSION_KEY]
