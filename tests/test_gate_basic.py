"""
Tests for one-time applicability gates.
"""

import asyncio

from launchpatch.errors import ProbeError, ProbeFailure
from launchpatch.gate import evaluate_gate
from launchpatch.probes import PlatformInfo

WINDOWS = PlatformInfo(os="windows")
LINUX = PlatformInfo(os="linux")


def run(coro):
    return asyncio.run(coro)


def test_platform_mismatch_skips_probe():
    calls = []

    async def probe():
        calls.append(1)
        return True

    decision = run(evaluate_gate("amd", LINUX, os_families={"windows"}, probe=probe))
    assert decision.applicable is False
    assert "linux" in decision.reason
    assert calls == []


def test_platform_only_gate_applies():
    decision = run(evaluate_gate("any", WINDOWS, os_families={"windows"}))
    assert decision.applicable is True


def test_probe_result_drives_decision():
    async def yes():
        return True

    async def no():
        return False

    assert run(evaluate_gate("g", WINDOWS, os_families={"windows"}, probe=yes)).applicable is True
    assert run(evaluate_gate("g", WINDOWS, os_families={"windows"}, probe=no)).applicable is False


def test_predicate_maps_probe_result():
    async def inventory():
        return [4098, 4318]

    decision = run(evaluate_gate(
        "amd", WINDOWS, os_families={"windows"}, probe=inventory, predicate=lambda ids: 4098 in ids,
    ))
    assert decision.applicable is True


def test_probe_failure_is_not_applicable(caplog):
    async def broken():
        raise ProbeError("tasklist not found")

    decision = run(evaluate_gate("rtss", WINDOWS, os_families={"windows"}, probe=broken))

    assert decision.applicable is False
    assert decision.reason == "probe failed"
    assert isinstance(decision.failure, ProbeFailure)
    assert isinstance(decision.failure.cause, ProbeError)
    assert "rtss" in caplog.text


def test_unexpected_shape_is_not_applicable():
    async def weird():
        return None

    decision = run(evaluate_gate(
        "amd", WINDOWS, os_families={"windows"}, probe=weird, predicate=lambda inv: inv.has_vendor(4098),
    ))
    assert decision.applicable is False
    assert decision.failure is not None


def test_probe_runs_once():
    calls = []

    async def probe():
        calls.append(1)
        return True

    run(evaluate_gate("g", WINDOWS, os_families={"windows"}, probe=probe))
    assert calls == [1]
