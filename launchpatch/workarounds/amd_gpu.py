"""
AMD GPU workaround for invisible blocks with Sodium on Windows.

AMD drivers 25.10.2 and newer break rendering when LWJGL, JNA or Netty extract
their natives at runtime. Dropping the extraction-path properties makes them
fall back to the pre-extracted natives on ``-Djava.library.path``.

See https://github.com/CaffeineMC/sodium/issues/3318
"""

from __future__ import annotations

import logging

from ..context import LauncherContext
from ..pipeline import CLIENT_ONLY, BeforeLaunchHook
from ..probes import AMD_VENDOR_ID, GpuInventory
from ..request import LaunchRequest, LaunchSide
from ..sanitize import strip_prefixed, strip_prefixed_structured
from .base import Workaround

NATIVE_EXTRACTION_PROPERTIES = (
    "-Djna.tmpdir=",
    "-Dorg.lwjgl.system.SharedLibraryExtractPath=",
    "-Dio.netty.native.workdir=",
)


class AMDGPUWorkaround(Workaround):
    name = "amd-gpu-workaround"
    scope = "AMDGPUWorkaround"
    os_families = frozenset({"windows"})
    sides = CLIENT_ONLY
    priority = 10
    probes_host = True

    async def probe(self, context: LauncherContext) -> GpuInventory:
        return await context.hardware.query_gpu_inventory()

    def matches(self, inventory: GpuInventory) -> bool:
        return inventory.has_vendor(AMD_VENDOR_ID)

    def build(self, context: LauncherContext, log: logging.Logger) -> BeforeLaunchHook:
        log.info("Detected AMD GPU on Windows. Applying workaround for driver version 25.10.2+ Sodium compatibility.")

        def on_before_launch(request: LaunchRequest) -> None:
            if request.side == LaunchSide.SERVER:
                return

            log.info("AMD GPU workaround middleware triggered")

            extra = strip_prefixed(request.ensure_extra_jvm_args(), NATIVE_EXTRACTION_PROPERTIES)
            request.extra_jvm_args = extra.entries

            removed_version = 0
            arguments = request.version.arguments
            if arguments is not None and arguments.jvm:
                version = strip_prefixed_structured(arguments.jvm, NATIVE_EXTRACTION_PROPERTIES)
                arguments.jvm = version.entries
                removed_version = version.removed

            if removed_version:
                log.info(f"Removed {removed_version} runtime native extraction properties from version JVM args")
            if extra.removed:
                log.info(f"Removed {extra.removed} runtime native extraction properties from extra JVM args")
            if not extra.removed and not removed_version:
                log.info("No problematic properties found to remove")

        return on_before_launch
