"""
Exception types raised by the launch pipeline and its probes.
"""

from typing import Optional


class LaunchPatchError(Exception):
    """Base class for launchpatch errors."""


class ProbeError(LaunchPatchError):
    """An environment probe (GPU inventory, process list) could not complete."""


class ProbeFailure(LaunchPatchError):
    """Recorded by a gate when its probe failed; the workaround is not applied."""

    def __init__(self, gate_name: str, cause: BaseException):
        super().__init__(f"probe for '{gate_name}' failed: {cause}")
        self.gate_name = gate_name
        self.cause = cause


class MutationFailure(LaunchPatchError):
    """A middleware hook raised while mutating a launch request."""

    def __init__(self, middleware_name: str, cause: Optional[BaseException] = None):
        message = f"middleware '{middleware_name}' failed"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
        self.middleware_name = middleware_name
        self.cause = cause


class DuplicateMiddlewareError(LaunchPatchError, ValueError):
    """A middleware with the same name is already registered."""
