"""
Tests for host probes and their output parsing.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from launchpatch.errors import ProbeError
from launchpatch.probes import (
    AMD_VENDOR_ID,
    NVIDIA_VENDOR_ID,
    HardwareProbe,
    PlatformInfo,
    ProcessProbe,
    parse_gpu_inventory,
    run_command,
)


def test_platform_detection():
    assert PlatformInfo.detect("win32").os == "windows"
    assert PlatformInfo.detect("darwin").os == "osx"
    assert PlatformInfo.detect("linux").os == "linux"


def test_parse_gpu_inventory():
    output = (
        "PCI\\VEN_1002&DEV_73BF&SUBSYS_23181458&REV_C1\\6&1A2B|AMD Radeon RX 6800 XT\r\n"
        "PCI\\VEN_10DE&DEV_2484&SUBSYS_00000000\\4&3C|NVIDIA GeForce RTX 3070\r\n"
        "ROOT\\DISPLAY\\0000|Remote Display Adapter\r\n"
    )
    inventory = parse_gpu_inventory(output)
    assert [d.vendor_id for d in inventory.devices] == [AMD_VENDOR_ID, NVIDIA_VENDOR_ID]
    assert inventory.devices[0].name == "AMD Radeon RX 6800 XT"
    assert inventory.has_vendor(4098)


def test_parse_gpu_inventory_empty_output():
    assert parse_gpu_inventory("").devices == []


def test_parse_gpu_inventory_garbage_raises():
    with pytest.raises(ProbeError):
        parse_gpu_inventory("Get-CimInstance : access denied")


def test_hardware_probe_uses_command_output():
    probe = HardwareProbe()
    with patch("launchpatch.probes.run_command", AsyncMock(return_value="PCI\\VEN_1002&DEV_1|Radeon\n")):
        inventory = asyncio.run(probe.query_gpu_inventory())
    assert inventory.has_vendor(AMD_VENDOR_ID)


def test_windows_process_probe():
    probe = ProcessProbe(PlatformInfo(os="windows"))
    running = "RTSS.exe                      1234 Console                    1     12,345 K\r\n"
    with patch("launchpatch.probes.run_command", AsyncMock(return_value=running)) as cmd:
        assert asyncio.run(probe.is_running("RTSS.exe")) is True
    assert cmd.call_args[0][0][0] == "tasklist"

    missing = "INFO: No tasks are running which match the specified criteria.\r\n"
    with patch("launchpatch.probes.run_command", AsyncMock(return_value=missing)):
        assert asyncio.run(probe.is_running("RTSS.exe")) is False


def test_posix_process_probe_matches_basename():
    probe = ProcessProbe(PlatformInfo(os="linux"))
    output = "/usr/lib/systemd/systemd\nbash\n/opt/rtss/RTSS.exe\n"
    with patch("launchpatch.probes.run_command", AsyncMock(return_value=output)):
        assert asyncio.run(probe.is_running("rtss.exe")) is True
        assert asyncio.run(probe.is_running("java")) is False


def test_run_command_missing_executable_raises():
    with pytest.raises(ProbeError):
        asyncio.run(run_command(["launchpatch-definitely-not-a-real-binary"]))
