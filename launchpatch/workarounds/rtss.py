"""
RivaTuner Statistics Server (RTSS) compatibility workaround.

RTSS, usually running alongside MSI Afterburner, injects hooks into new
processes. That can freeze Java/LWJGL initialization right after LWJGL loads.
The child environment is given the overlay-exclusion variables RTSS and the
GPU vendor Vulkan layers honour.
"""

from __future__ import annotations

import logging

from ..context import LauncherContext
from ..environment import apply_overrides
from ..pipeline import CLIENT_ONLY, BeforeLaunchHook
from ..request import LaunchRequest, LaunchSide
from .base import Workaround

RTSS_IMAGE = "RTSS.exe"

OVERLAY_EXCLUSION_ENV = {
    "RTSS_EXCLUDE": "1",
    "NoHook": "1",
    "NOHOOKEX": "1",
    "DISABLE_RTSS_LAYER": "1",
    "DISABLE_OVERLAY_INJECTION": "1",
    "DISABLE_VK_LAYER_AMD_switchable_graphics_1": "1",
    "DISABLE_VK_LAYER_NVIDIA_optimus_1": "1",
}


class RTSSWorkaround(Workaround):
    name = "rtss-workaround"
    scope = "RTSSWorkaround"
    os_families = frozenset({"windows"})
    sides = CLIENT_ONLY
    priority = 20
    probes_host = True

    async def probe(self, context: LauncherContext) -> bool:
        return await context.processes.is_running(RTSS_IMAGE)

    def build(self, context: LauncherContext, log: logging.Logger) -> BeforeLaunchHook:
        log.info("Detected RTSS running. Applying compatibility workaround.")

        def on_before_launch(request: LaunchRequest) -> None:
            if request.side == LaunchSide.SERVER:
                return

            log.info("RTSS workaround middleware triggered")

            options = request.ensure_spawn_options()
            composed = apply_overrides(options.env, OVERLAY_EXCLUSION_ENV)
            options.env = composed.env

            log.info(
                f"Added overlay exclusion environment variables (count: {len(OVERLAY_EXCLUSION_ENV)}, "
                f"new: {len(composed.added)}, overridden: {len(composed.overridden)})"
            )

        return on_before_launch
