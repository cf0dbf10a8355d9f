from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

Listener = Callable[[str, Any], None]


class PropertyStore:
    """Keyed property bag that notifies observers whenever a value is set.

    Every non-silent ``set`` emits two notifications, both delivered inline
    before ``set`` returns:

    * the per-key event ``changed:<key>``, which first runs the hooks bound to
      ``key`` (in registration order) and then any ``on(key, ...)`` listeners;
    * the general change notification to every ``subscribe``d observer.

    Hooks may call ``set`` again; the nested call is handled synchronously.
    Callers must not bind hooks that feed back into their own key.
    """

    def __init__(
        self,
        initial: Optional[Mapping[str, Any]] = None,
        hooks: Optional[Mapping[str, Sequence[Listener]]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._properties: Dict[str, Any] = dict(initial or {})
        self._hooks: Dict[str, List[Listener]] = {
            key: list(callbacks) for key, callbacks in (hooks or {}).items()
        }
        self._key_listeners: Dict[str, List[Listener]] = {}
        self._listeners: List[Listener] = []
        self._logger = logger or logging.getLogger("basmalottery.store")

    @staticmethod
    def event_name(key: str) -> str:
        return f"changed:{key}"

    def get(self, key: str, default: Any = None) -> Any:
        return self._properties.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self._properties

    def keys(self) -> List[str]:
        return list(self._properties)

    def set(self, key: str, value: Any, silent: bool = False, silent_hooks: bool = False) -> Any:
        self._properties[key] = value
        self._logger.debug("set %s (silent=%s, silent_hooks=%s)", key, silent, silent_hooks)
        if silent:
            return value
        if not silent_hooks:
            self._emit_key_event(key, value)
        for listener in list(self._listeners):
            listener(key, value)
        return value

    def bind_hook(self, key: str, callback: Listener) -> None:
        self._hooks.setdefault(key, []).append(callback)

    def on(self, key: str, callback: Listener) -> None:
        self._key_listeners.setdefault(key, []).append(callback)

    def subscribe(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def _emit_key_event(self, key: str, value: Any) -> None:
        hooks = self._hooks.get(key, ())
        if hooks:
            self._logger.debug("%s: running %d hook(s)", self.event_name(key), len(hooks))
        for hook in list(hooks):
            hook(key, value)
        for listener in list(self._key_listeners.get(key, ())):
            listener(key, value)
