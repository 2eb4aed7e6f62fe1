"""
Environment composition for the spawned game process.

Layers, lowest precedence first: the inherited parent environment, whatever
env map the spawn options already carry, and the overrides a workaround
forces. Keys are compared exactly as given; on Windows ``os.environ`` itself
is case-insensitive, so pass it through the platform layer rather than
folding case here.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"


@dataclass
class ComposedEnvironment:
    env: Dict[str, str]
    added: List[str] = field(default_factory=list)
    overridden: List[str] = field(default_factory=list)


def compose_environment(
    inherited: Optional[Mapping[str, str]],
    prior: Optional[Mapping[str, str]],
    overrides: Mapping[str, str],
) -> ComposedEnvironment:
    merged: Dict[str, str] = {}
    # prior is None when the spawn options had no env map; inherited seeds it
    for source in (inherited or {}, prior or {}):
        for k, v in source.items():
            merged[k] = v

    added: List[str] = []
    overridden: List[str] = []
    for k, v in overrides.items():
        if k not in merged:
            added.append(k)
        elif merged[k] != v:
            overridden.append(k)
        merged[k] = v

    return ComposedEnvironment(env=merged, added=added, overridden=overridden)


def apply_overrides(
    prior: Optional[Mapping[str, str]],
    overrides: Mapping[str, str],
    inherited: Optional[Mapping[str, str]] = None,
) -> ComposedEnvironment:
    """Compose against ``os.environ`` unless an inherited map is given, and log key names."""
    if inherited is None:
        inherited = os.environ
    result = compose_environment(inherited, prior, overrides)
    logger.debug(
        f"Environment composed: {len(result.env)} keys, "
        f"added={result.added}, overridden={result.overridden}"
    )
    return result


def redact_environment(env: Optional[Mapping[str, str]]) -> Dict[str, str]:
    return {k: REDACTED for k in (env or {})}
