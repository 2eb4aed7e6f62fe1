"""
Built-in pre-launch workarounds.
"""

from .base import Workaround, register_workaround
from .registry import AVAILABLE_WORKAROUNDS, install_workarounds, list_available_workarounds

__all__ = [
    "Workaround",
    "register_workaround",
    "AVAILABLE_WORKAROUNDS",
    "install_workarounds",
    "list_available_workarounds",
]
