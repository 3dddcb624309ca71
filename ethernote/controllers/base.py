"""Change-notification plumbing shared by the controllers."""
from __future__ import annotations

from typing import Any, Callable, List

Listener = Callable[[Any], None]


class Observable:
    """Keeps subscribers and hands each of them the latest snapshot."""

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def snapshot(self) -> Any:  # pragma: no cover - overridden
        raise NotImplementedError

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
