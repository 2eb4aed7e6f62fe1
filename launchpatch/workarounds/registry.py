"""
Registry of built-in workarounds and startup installation.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Sequence

from ..context import LauncherContext
from ..gate import GateDecision
from .amd_gpu import AMDGPUWorkaround
from .base import Workaround, register_workaround
from .rtss import RTSSWorkaround

logger = logging.getLogger(__name__)


AVAILABLE_WORKAROUNDS: List[Workaround] = [
    AMDGPUWorkaround(),
    RTSSWorkaround(),
]


def list_available_workarounds() -> List[str]:
    """List all built-in workaround names."""
    return [w.name for w in AVAILABLE_WORKAROUNDS]


async def install_workarounds(
    context: LauncherContext,
    workarounds: Optional[Sequence[Workaround]] = None,
) -> List[GateDecision]:
    """
    Probe every workaround concurrently and register the applicable ones.

    Hook order comes from each workaround's priority, not from which probe
    finished first.

    Args:
        context: Launcher context built at startup
        workarounds: Workarounds to consider; defaults to the built-ins

    Returns:
        One GateDecision per workaround, in the given order
    """
    if workarounds is None:
        workarounds = AVAILABLE_WORKAROUNDS

    decisions: List[Optional[GateDecision]] = [None] * len(workarounds)
    pending = []
    seen = set()
    for i, workaround in enumerate(workarounds):
        cached = context.decisions.get(workaround.name)
        if cached is not None:
            decisions[i] = cached
        elif workaround.name in seen:
            logger.warning(f"Workaround {workaround.name} listed twice; probing once")
            pending.append((i, None))
        elif context.settings.is_disabled(workaround.name):
            logger.info(f"Workaround {workaround.name} disabled by configuration")
            decision = GateDecision(workaround.name, False, "disabled by configuration")
            context.decisions[workaround.name] = decision
            decisions[i] = decision
        else:
            seen.add(workaround.name)
            pending.append((i, register_workaround(context, workaround)))

    results = await asyncio.gather(*(coro for _, coro in pending if coro is not None))
    for i, coro in pending:
        if coro is not None:
            decisions[i] = results.pop(0)
    for i, coro in pending:
        if coro is None:
            decisions[i] = context.decisions[workarounds[i].name]

    applied = [d.name for d in decisions if d and d.applicable]
    logger.info(f"Installed {len(applied)} of {len(workarounds)} workarounds: {applied}")
    return [d for d in decisions if d is not None]
