from __future__ import annotations

import math
from typing import Any

from growth_coach.models import MetricsSnapshot


# The Reporting API query does not return a usable per-channel duration yet.
PLACEHOLDER_SESSION_DURATION = 150.0


def _metric_value(row: dict[str, Any], index: int) -> float | None:
    metrics = row.get("metrics", [])
    if not isinstance(metrics, list) or not metrics or not isinstance(metrics[0], dict):
        return None
    values = metrics[0].get("values", [])
    if not isinstance(values, list) or index >= len(values):
        return None
    raw = values[index]
    if raw in (None, ""):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None
    return value if math.isfinite(value) else None


def _dimension(row: dict[str, Any], index: int) -> str:
    dims = row.get("dimensions", [])
    if not isinstance(dims, list) or index >= len(dims):
        return ""
    return str(dims[index] or "").strip()


def parse_ga_report(payload: Any) -> MetricsSnapshot:
    """Turn a Reporting API v4 ``reports:batchGet`` response into a snapshot.

    Rows are ``ga:date x ga:channelGrouping`` with metrics
    ``[sessions, users, bounceRate, avgSessionDuration]``; each row's sessions
    also count towards its channel in ``sources``.
    """
    if not isinstance(payload, dict):
        raise RuntimeError("GA report payload is not a JSON object.")
    reports = payload.get("reports")
    if not isinstance(reports, list) or not reports or not isinstance(reports[0], dict):
        raise RuntimeError("GA report payload has no reports.")

    data = reports[0].get("data") or {}
    rows = data.get("rows") if isinstance(data, dict) else None

    sessions: list[int] = []
    users: list[int] = []
    bounce_rate: list[float] = []
    sources: dict[str, float] = {}

    for row in rows or []:
        if not isinstance(row, dict):
            continue
        row_sessions = int(_metric_value(row, 0) or 0)
        sessions.append(row_sessions)
        users.append(int(_metric_value(row, 1) or 0))
        bounce_rate.append(_metric_value(row, 2) or 0.0)

        channel = _dimension(row, 1)
        if channel:
            sources[channel] = sources.get(channel, 0.0) + row_sessions

    return MetricsSnapshot(
        sessions=tuple(sessions),
        users=tuple(users),
        bounce_rate=tuple(bounce_rate),
        sources=sources,
        avg_session_duration=PLACEHOLDER_SESSION_DURATION,
    )
