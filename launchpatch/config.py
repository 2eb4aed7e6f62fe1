"""
Runtime settings read from LAUNCHPATCH_* environment variables.
"""

import logging
import os
from typing import List, Mapping, Optional

from pydantic import BaseModel, field_validator


class Settings(BaseModel):
    disabled: List[str] = []
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ
        disabled = [
            name.strip()
            for name in environ.get("LAUNCHPATCH_DISABLED", "").split(",")
            if name.strip()
        ]
        return cls(
            disabled=disabled,
            log_level=environ.get("LAUNCHPATCH_LOG_LEVEL", "INFO"),
        )

    def is_disabled(self, name: str) -> bool:
        return name in self.disabled
