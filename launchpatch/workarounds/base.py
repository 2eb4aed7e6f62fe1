"""
Base workaround interface and registration.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, FrozenSet
import logging

from ..context import LauncherContext, get_logger
from ..gate import GateDecision, evaluate_gate
from ..pipeline import BOTH_SIDES, DEFAULT_PRIORITY, BeforeLaunchHook, Middleware
from ..request import LaunchSide

logger = logging.getLogger(__name__)


class Workaround(ABC):
    """A conditionally applicable pre-launch patch."""

    name: str = ""
    scope: str = ""
    os_families: FrozenSet[str] = frozenset({"windows", "osx", "linux"})
    sides: FrozenSet[LaunchSide] = BOTH_SIDES
    priority: int = DEFAULT_PRIORITY
    probes_host: bool = False

    async def probe(self, context: LauncherContext) -> Any:
        """
        Inspect the host once. Only called when ``probes_host`` is set; the
        result is handed to ``matches``.
        """
        return True

    def matches(self, result: Any) -> bool:
        """Decide applicability from the probe result."""
        return bool(result)

    @abstractmethod
    def build(self, context: LauncherContext, log: logging.Logger) -> BeforeLaunchHook:
        """Return the hook mutating a launch request."""
        pass

    def logger(self) -> logging.Logger:
        return get_logger(self.scope or self.name)


async def register_workaround(context: LauncherContext, workaround: Workaround) -> GateDecision:
    """
    Evaluate the workaround's gate once and, if it applies, register its hook.

    A decision already recorded for this name is returned as is; the probe is
    never run a second time, even after a failure.

    Args:
        context: Launcher context holding the pipeline and probes
        workaround: Workaround to register

    Returns:
        The gate decision, also recorded in ``context.decisions``
    """
    cached = context.decisions.get(workaround.name)
    if cached is not None:
        return cached

    log = workaround.logger()

    async def run_probe() -> Any:
        return await workaround.probe(context)

    decision = await evaluate_gate(
        workaround.name,
        context.platform,
        os_families=workaround.os_families,
        probe=run_probe if workaround.probes_host else None,
        predicate=workaround.matches,
        log=log,
    )
    context.decisions[workaround.name] = decision
    if not decision.applicable:
        return decision

    context.pipeline.register(Middleware(
        name=workaround.name,
        on_before_launch=workaround.build(context, log),
        sides=workaround.sides,
        priority=workaround.priority,
    ))
    return decision

