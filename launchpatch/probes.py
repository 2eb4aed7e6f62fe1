"""
Host environment probes: OS family, GPU inventory and running processes.

Probes shell out with ``asyncio.create_subprocess_exec`` so they never block
the rest of startup. Any failure is raised as ``ProbeError``; deciding what a
failure means is up to the gate that called the probe.
"""

from __future__ import annotations

import asyncio
import logging
import re
import sys
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .errors import ProbeError

logger = logging.getLogger(__name__)

AMD_VENDOR_ID = 0x1002  # 4098
NVIDIA_VENDOR_ID = 0x10DE

PNP_VENDOR = re.compile(r"VEN_([0-9A-Fa-f]{4})")

GPU_QUERY = [
    "powershell", "-NoProfile", "-NonInteractive", "-Command",
    "Get-CimInstance Win32_VideoController | "
    "ForEach-Object { $_.PNPDeviceID + '|' + $_.Name }",
]


@dataclass
class PlatformInfo:
    """Static platform identification."""
    os: str  # "windows" | "osx" | "linux"

    @classmethod
    def detect(cls, platform: Optional[str] = None) -> "PlatformInfo":
        platform = platform or sys.platform
        if platform.startswith("win") or platform == "cygwin":
            return cls(os="windows")
        if platform == "darwin":
            return cls(os="osx")
        return cls(os="linux")


@dataclass
class GpuDevice:
    vendor_id: int
    name: str = ""


@dataclass
class GpuInventory:
    devices: List[GpuDevice] = field(default_factory=list)

    def has_vendor(self, vendor_id: int) -> bool:
        return any(d.vendor_id == vendor_id for d in self.devices)


async def run_command(cmd: Sequence[str]) -> str:
    """Run ``cmd`` and return its stdout; raise ProbeError on any failure."""
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise ProbeError(f"cannot run {cmd[0]}: {e}") from e
    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        detail = stderr.decode(errors="ignore").strip()
        raise ProbeError(f"{cmd[0]} exited with status {proc.returncode}: {detail}")
    return stdout.decode(errors="ignore")


def parse_gpu_inventory(output: str) -> GpuInventory:
    """Parse ``PNPDeviceID|Name`` lines into a GpuInventory."""
    devices: List[GpuDevice] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        device_id, _, name = line.partition("|")
        m = PNP_VENDOR.search(device_id)
        if not m:
            # non-PCI adapters (e.g. remote display drivers) carry no vendor
            continue
        devices.append(GpuDevice(vendor_id=int(m.group(1), 16), name=name.strip()))
    if not devices and output.strip():
        raise ProbeError("unrecognized GPU inventory output")
    return GpuInventory(devices=devices)


class HardwareProbe:
    """Queries the GPU adapters present on the host."""

    def __init__(self, command: Optional[Sequence[str]] = None):
        self.command = list(command or GPU_QUERY)

    async def query_gpu_inventory(self) -> GpuInventory:
        output = await run_command(self.command)
        inventory = parse_gpu_inventory(output)
        logger.debug(f"GPU inventory: {[hex(d.vendor_id) for d in inventory.devices]}")
        return inventory


class ProcessProbe:
    """Checks whether an executable is currently running on the host."""

    def __init__(self, platform: PlatformInfo):
        self.platform = platform

    def _command(self, image_name: str) -> List[str]:
        if self.platform.os == "windows":
            return ["tasklist", "/FI", f"IMAGENAME eq {image_name}", "/NH"]
        return ["ps", "-A", "-o", "comm="]

    async def is_running(self, image_name: str) -> bool:
        output = await run_command(self._command(image_name))
        needle = image_name.lower()
        if self.platform.os == "windows":
            return needle in output.lower()
        for line in output.splitlines():
            name = line.strip().rsplit("/", 1)[-1].lower()
            if name == needle:
                return True
        return False
