from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping


INSIGHT_WARNING = "warning"
INSIGHT_SUCCESS = "success"
INSIGHT_OPPORTUNITY = "opportunity"
INSIGHT_TYPES = (INSIGHT_WARNING, INSIGHT_SUCCESS, INSIGHT_OPPORTUNITY)


def _to_float(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


def _series(raw: Any) -> tuple[float, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(_to_float(item) for item in raw)


def _int_series(raw: Any) -> tuple[int, ...]:
    return tuple(int(value) for value in _series(raw))


def _sources(raw: Any) -> dict[str, float]:
    if not isinstance(raw, Mapping):
        return {}
    out: dict[str, float] = {}
    for key, value in raw.items():
        number = _to_float(value, default=-1.0)
        if number < 0:
            continue
        out[str(key)] = number
    return out


def _pick(payload: Mapping[str, Any], *names: str) -> Any:
    for name in names:
        if name in payload:
            return payload[name]
    return None


def _duration(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return max(0.0, number)


@dataclass(frozen=True)
class MetricsSnapshot:
    sessions: tuple[int, ...] = ()
    users: tuple[int, ...] = ()
    bounce_rate: tuple[float, ...] = ()
    sources: Mapping[str, float] = field(default_factory=dict, hash=False)
    avg_session_duration: float | None = None
    conversion_rate: float | None = None

    def __post_init__(self) -> None:
        # Non-finite series values become 0, bad source counts are dropped, sources are read-only.
        object.__setattr__(self, "sessions", _int_series(self.sessions))
        object.__setattr__(self, "users", _int_series(self.users))
        object.__setattr__(self, "bounce_rate", _series(self.bounce_rate))
        object.__setattr__(self, "sources", MappingProxyType(_sources(self.sources)))
        if self.avg_session_duration is not None:
            object.__setattr__(self, "avg_session_duration", _duration(self.avg_session_duration))
        if self.conversion_rate is not None:
            object.__setattr__(self, "conversion_rate", _to_float(self.conversion_rate))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "MetricsSnapshot":
        """Build a snapshot from an extension-style (camelCase) or snake_case dict.

        Bad series entries become 0 so the days stay aligned; bad source
        counts are dropped. A missing or unusable session duration stays
        ``None`` and the short-session rule skips it.
        """
        if not isinstance(payload, Mapping):
            return cls()

        return cls(
            sessions=payload.get("sessions") or (),
            users=payload.get("users") or (),
            bounce_rate=_pick(payload, "bounceRate", "bounce_rate") or (),
            sources=payload.get("sources") or {},
            avg_session_duration=_pick(payload, "avgSessionDuration", "avg_session_duration"),
            conversion_rate=_pick(payload, "conversionRate", "conversion_rate"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "sessions": list(self.sessions),
            "users": list(self.users),
            "bounceRate": list(self.bounce_rate),
            "sources": dict(self.sources),
        }
        if self.avg_session_duration is not None:
            payload["avgSessionDuration"] = self.avg_session_duration
        if self.conversion_rate is not None:
            payload["conversionRate"] = self.conversion_rate
        return payload

    @property
    def total_sessions(self) -> int:
        return sum(self.sessions)

    @property
    def total_source_traffic(self) -> float:
        return sum(self.sources.values())


@dataclass(frozen=True)
class TrendResult:
    session_trend_pct: float
    bounce_trend_pct: float
    recent_sessions_avg: float = 0.0
    previous_sessions_avg: float = 0.0
    avg_bounce_rate: float = 0.0
    recent_bounce_rate: float = 0.0


@dataclass(frozen=True)
class Insight:
    type: str
    title: str
    message: str
    action: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


InsightSet = tuple[Insight, ...]


@dataclass(frozen=True)
class CoachReport:
    raw: MetricsSnapshot
    insights: InsightSet
    generated_at: datetime
    is_mock_data: bool = False
