"""
Process-wide launcher state built once at startup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from .config import Settings
from .gate import GateDecision
from .pipeline import MiddlewarePipeline
from .probes import HardwareProbe, PlatformInfo, ProcessProbe


def get_logger(scope: str) -> logging.Logger:
    """Scoped diagnostic sink for a workaround."""
    return logging.getLogger(f"launchpatch.workaround.{scope}")


@dataclass
class LauncherContext:
    """Everything a workaround needs to probe the host and register a hook."""
    platform: PlatformInfo
    pipeline: MiddlewarePipeline
    hardware: HardwareProbe
    processes: ProcessProbe
    settings: Settings = field(default_factory=Settings)
    decisions: Dict[str, GateDecision] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        platform: Optional[PlatformInfo] = None,
        settings: Optional[Settings] = None,
    ) -> "LauncherContext":
        platform = platform or PlatformInfo.detect()
        return cls(
            platform=platform,
            pipeline=MiddlewarePipeline(),
            hardware=HardwareProbe(),
            processes=ProcessProbe(platform),
            settings=settings or Settings.from_env(),
        )
