from __future__ import annotations

import os
from dataclasses import dataclass


def _getenv_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return default if value is None else value


def _getenv_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return int(value)


def _getenv_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _clamp(value: int, *, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, value))


@dataclass(frozen=True)
class EngineConfig:
    WELLPULSE_LOG_LEVEL: str
    WELLPULSE_FLEET_MAX_WORKERS: int
    WELLPULSE_FLEET_PARALLEL_MIN: int
    WELLPULSE_LAYOUT_WARNINGS: bool


def load_config() -> EngineConfig:
    return EngineConfig(
        WELLPULSE_LOG_LEVEL=_getenv_str("WELLPULSE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        WELLPULSE_FLEET_MAX_WORKERS=_clamp(
            _getenv_int("WELLPULSE_FLEET_MAX_WORKERS", 4), min_value=1, max_value=32
        ),
        WELLPULSE_FLEET_PARALLEL_MIN=max(0, _getenv_int("WELLPULSE_FLEET_PARALLEL_MIN", 8)),
        WELLPULSE_LAYOUT_WARNINGS=_getenv_bool("WELLPULSE_LAYOUT_WARNINGS", True),
    )
