"""
Ordered registry of pre-launch middleware.

One pipeline is built per process and handed to whoever registers or runs
hooks. Registration is append-only; a launch runs against a snapshot taken
when it starts, so a patch registered mid-launch only affects later launches.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, FrozenSet, List, Tuple

from .errors import DuplicateMiddlewareError, MutationFailure
from .request import LaunchRequest, LaunchSide

logger = logging.getLogger(__name__)

BOTH_SIDES: FrozenSet[LaunchSide] = frozenset({LaunchSide.CLIENT, LaunchSide.SERVER})
CLIENT_ONLY: FrozenSet[LaunchSide] = frozenset({LaunchSide.CLIENT})

DEFAULT_PRIORITY = 100

BeforeLaunchHook = Callable[[LaunchRequest], None]


@dataclass(frozen=True)
class Middleware:
    """A named hook run against every launch request of a matching side."""
    name: str
    on_before_launch: BeforeLaunchHook
    sides: FrozenSet[LaunchSide] = BOTH_SIDES
    priority: int = DEFAULT_PRIORITY

    def applies_to(self, request: LaunchRequest) -> bool:
        return request.side in self.sides


class MiddlewarePipeline:
    """Runs registered middleware in ``(priority, registration order)``."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: List[Tuple[int, int, Middleware]] = []
        self._sequence = 0

    def register(self, middleware: Middleware) -> None:
        with self._lock:
            if any(m.name == middleware.name for _, _, m in self._entries):
                raise DuplicateMiddlewareError(f"middleware '{middleware.name}' is already registered")
            self._entries.append((middleware.priority, self._sequence, middleware))
            self._entries.sort(key=lambda e: (e[0], e[1]))
            self._sequence += 1
        logger.info(f"Registered middleware {middleware.name} (priority {middleware.priority})")

    def snapshot(self) -> Tuple[Middleware, ...]:
        with self._lock:
            return tuple(m for _, _, m in self._entries)

    def names(self) -> List[str]:
        return [m.name for m in self.snapshot()]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def run(self, request: LaunchRequest) -> LaunchRequest:
        """
        Apply every matching middleware to ``request`` in place.

        Raises:
            MutationFailure: a hook raised; later hooks are not run
        """
        for middleware in self.snapshot():
            if not middleware.applies_to(request):
                continue
            try:
                middleware.on_before_launch(request)
            except Exception as e:
                logger.error(f"Middleware {middleware.name} failed: {e}")
                raise MutationFailure(middleware.name, e) from e
        return request
