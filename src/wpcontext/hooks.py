"""
Lifecycle Hook Registry

A minimal in-process stand-in for the WordPress plugin API. The host fires
named checkpoints synchronously; callbacks run by ascending priority, then in
registration order.
"""

import logging
import sys
from collections import defaultdict
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10
LOWEST_PRIORITY = -sys.maxsize - 1  # PHP_INT_MIN: runs before anything else

Callback = Callable[..., Any]


class HookRegistry:
    """Named callback slots keyed by hook name and priority."""

    def __init__(self) -> None:
        self._actions: dict[str, dict[int, list[Callback]]] = defaultdict(dict)
        self._fired: dict[str, int] = defaultdict(int)

    def add_action(self, hook: str, callback: Callback, priority: int = DEFAULT_PRIORITY) -> None:
        self._actions[hook].setdefault(priority, []).append(callback)

    def remove_action(
        self, hook: str, callback: Callback, priority: int = DEFAULT_PRIORITY
    ) -> bool:
        """Unregister a callback. Returns False when it was not registered."""
        callbacks = self._actions.get(hook, {}).get(priority)
        if not callbacks or callback not in callbacks:
            return False

        callbacks.remove(callback)
        if not callbacks:
            del self._actions[hook][priority]
        if not self._actions[hook]:
            del self._actions[hook]
        return True

    def has_action(self, hook: str, callback: Optional[Callback] = None) -> bool:
        by_priority = self._actions.get(hook, {})
        if callback is None:
            return any(by_priority.values())
        return any(callback in callbacks for callbacks in by_priority.values())

    def do_action(self, hook: str, *args: Any) -> None:
        """Fire a checkpoint, passing `args` to every registered callback."""
        self._fired[hook] += 1

        # Snapshot: callbacks may add or remove hooks while running.
        queue = [
            callback
            for priority in sorted(self._actions.get(hook, {}))
            for callback in list(self._actions[hook][priority])
        ]
        logger.debug("Firing %s (%d callbacks)", hook, len(queue))

        for callback in queue:
            if self.has_action(hook, callback):
                callback(*args)

    def did_action(self, hook: str) -> int:
        return self._fired.get(hook, 0)

    def reset(self) -> None:
        self._actions.clear()
        self._fired.clear()

