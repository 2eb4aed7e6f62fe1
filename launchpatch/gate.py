"""
One-time applicability checks for workarounds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Collection, Optional

from .errors import ProbeFailure
from .probes import PlatformInfo

logger = logging.getLogger(__name__)

Probe = Callable[[], Awaitable[Any]]
Predicate = Callable[[Any], bool]


@dataclass(frozen=True)
class GateDecision:
    name: str
    applicable: bool
    reason: str
    failure: Optional[ProbeFailure] = None


async def evaluate_gate(
    name: str,
    platform: PlatformInfo,
    *,
    os_families: Collection[str],
    probe: Optional[Probe] = None,
    predicate: Optional[Predicate] = None,
    log: Optional[logging.Logger] = None,
) -> GateDecision:
    """
    Decide whether workaround ``name`` applies to this process.

    The platform check runs first and short-circuits the probe. A probe or
    predicate that raises resolves to "not applicable"; it is never retried.

    Args:
        name: Workaround name, used in the decision and log lines
        platform: Host platform
        os_families: OS families the workaround targets
        probe: Optional coroutine function run once to inspect the host
        predicate: Maps the probe result to a bool; defaults to ``bool``
        log: Scoped logger for the decision record

    Returns:
        GateDecision
    """
    log = log or logger

    if platform.os not in os_families:
        decision = GateDecision(name, False, f"platform {platform.os} not targeted")
        log.debug(f"{name}: not applicable ({decision.reason})")
        return decision

    if probe is None:
        decision = GateDecision(name, True, f"platform {platform.os} targeted")
        log.info(f"{name}: applicable ({decision.reason})")
        return decision

    try:
        result = await probe()
        matched = predicate(result) if predicate else bool(result)
    except Exception as e:
        failure = ProbeFailure(name, e)
        log.warning(f"{name}: not applicable ({failure})")
        return GateDecision(name, False, "probe failed", failure=failure)

    if matched:
        decision = GateDecision(name, True, "probe condition matched")
        log.info(f"{name}: applicable ({decision.reason})")
    else:
        decision = GateDecision(name, False, "probe condition not matched")
        log.info(f"{name}: not applicable ({decision.reason})")
    return decision
