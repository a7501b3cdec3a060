"""Explicit extension-point registry for lifecycle actions and filters.

Components register handlers against a ``HookRegistry`` instance that is
handed to them; nothing is wired through module-level globals.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PRIORITY = 10


class HookEvent(StrEnum):
    """Lifecycle events the host platform fires."""

    INIT = "init"
    ADMIN_BOOTSTRAP = "admin_bootstrap"
    MENU_BUILD = "menu_build"
    LINK_RESOLVE = "link_resolve"


class HookRegistry:
    """Priority-ordered handlers keyed by event name.

    Actions are called for their side effects; filters receive the
    current value as their first argument and return the new value.
    Handlers with equal priority run in registration order.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[tuple[int, int, Callable[..., Any]]]] = {}
        self._counter = 0

    def _add(self, event: str, handler: Callable[..., Any], priority: int) -> None:
        self._counter += 1
        bucket = self._handlers.setdefault(str(event), [])
        bucket.append((priority, self._counter, handler))
        bucket.sort(key=lambda item: (item[0], item[1]))

    def add_action(
        self, event: str, handler: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> None:
        self._add(event, handler, priority)

    def add_filter(
        self, event: str, handler: Callable[..., Any], priority: int = DEFAULT_PRIORITY
    ) -> None:
        self._add(event, handler, priority)

    def handlers(self, event: str) -> list[Callable[..., Any]]:
        """Return the handlers for an event in call order."""
        return [h for _, _, h in self._handlers.get(str(event), [])]

    def has(self, event: str) -> bool:
        return bool(self._handlers.get(str(event)))

    def do_action(self, event: str, *args: Any) -> None:
        """Call every handler registered for ``event``.

        Exceptions propagate to the caller; a failed handler stops the
        remaining ones, as it would abort the host request.
        """
        for handler in self.handlers(event):
            logger.debug("Action %s -> %s", event, getattr(handler, "__qualname__", handler))
            handler(*args)

    def apply_filters(self, event: str, value: Any, *args: Any) -> Any:
        """Thread ``value`` through every filter registered for ``event``."""
        for handler in self.handlers(event):
            value = handler(value, *args)
        return value
