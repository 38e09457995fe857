from __future__ import annotations

import os
from dataclasses import dataclass

from growth_coach.ranking import MAX_INSIGHTS


ENV_PREFIX = "GROWTH_COACH_"
DEFAULT_OUTPUT_DIR = "Growth Coach Reports"
TRUE_VALUES = {"1", "true", "yes", "on"}


def _env(key: str, default: str = "") -> str:
    """Read ``GROWTH_COACH_<key>``.

    Blank values and a leftover ``.env`` template line (``NAME=``) count as unset.
    """
    name = f"{ENV_PREFIX}{key}"
    value = os.environ.get(name, "").strip()
    if value.strip("'\"").strip().upper() == f"{name}=":
        value = ""
    return value or default


def _env_int(key: str, default: int) -> int:
    raw = _env(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{ENV_PREFIX}{key} must be an integer, got {raw!r}") from exc


def _env_bool(key: str, default: bool) -> bool:
    raw = _env(key)
    return raw.lower() in TRUE_VALUES if raw else default


@dataclass(frozen=True)
class CoachConfig:
    data_path: str
    max_insights: int
    demo_fallback_enabled: bool
    output_dir: str
    log_level: str

    @classmethod
    def from_env(cls) -> "CoachConfig":
        return cls(
            data_path=_env("DATA_PATH"),
            max_insights=max(1, _env_int("MAX_INSIGHTS", MAX_INSIGHTS)),
            demo_fallback_enabled=_env_bool("DEMO_FALLBACK", True),
            output_dir=_env("OUTPUT_DIR", DEFAULT_OUTPUT_DIR),
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
