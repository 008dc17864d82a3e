"""
Service settings.

Settings is immutable; from_env() reads overrides from MARKER_BALANCE_* variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Mapping, Optional, Tuple

from .rules import DEFAULT_CLOSING, DEFAULT_MAX_UPLOAD_BYTES, DEFAULT_OPENING
from .validation import ArgumentError, must_be_greater_than_zero

ENV_PREFIX = "MARKER_BALANCE_"


@dataclass(frozen=True)
class Settings:
    """
    Attributes:
        default_opening: Opening markers used when a request omits them.
        default_closing: Closing markers, index-aligned with default_opening.
        max_upload_bytes: Largest accepted upload for /balance/file.
        log_level: Root logging level name.
    """
    default_opening: Tuple[str, ...] = field(default=DEFAULT_OPENING)
    default_closing: Tuple[str, ...] = field(default=DEFAULT_CLOSING)
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    log_level: str = "INFO"

    def __post_init__(self):
        must_be_greater_than_zero("max_upload_bytes", self.max_upload_bytes)
        # getLevelName maps known names to ints, unknown ones to "Level X"
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ArgumentError("log_level", f"unknown logging level {self.log_level!r}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        raw_max = env.get(ENV_PREFIX + "MAX_UPLOAD_BYTES")
        max_upload_bytes = DEFAULT_MAX_UPLOAD_BYTES
        if raw_max is not None:
            try:
                max_upload_bytes = int(raw_max)
            except ValueError:
                raise ArgumentError("max_upload_bytes", f"not an integer: {raw_max!r}") from None

        return cls(
            max_upload_bytes=max_upload_bytes,
            log_level=env.get(ENV_PREFIX + "LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
