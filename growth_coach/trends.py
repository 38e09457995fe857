from __future__ import annotations

from typing import Sequence

from growth_coach.math_utils import average, average_or, percent_change
from growth_coach.models import MetricsSnapshot, TrendResult


WINDOW_DAYS = 7


def week_over_week(values: Sequence[float], window: int = WINDOW_DAYS) -> tuple[float, float, float]:
    """Return ``(recent_avg, previous_avg, change_pct)`` for the last two windows.

    An empty previous window falls back to the recent average, and to 1 when
    that is zero as well, so the change is always finite.
    """
    series = list(values)
    recent = series[-window:]
    previous = series[-2 * window : -window] if len(series) > window else []

    recent_avg = average_or(recent, 0.0)
    previous_avg = average(previous) if previous else (recent_avg or 1.0)
    return recent_avg, previous_avg, percent_change(recent_avg, previous_avg)


def average_bounce_rate(snapshot: MetricsSnapshot) -> float:
    return average_or(snapshot.bounce_rate, 0.0)


def compute_trends(snapshot: MetricsSnapshot) -> TrendResult:
    recent_sessions_avg, previous_sessions_avg, session_trend = week_over_week(snapshot.sessions)

    # Recent bounce week is compared against the whole-series average, not the prior week.
    avg_bounce = average_bounce_rate(snapshot)
    recent_bounce = average_or(snapshot.bounce_rate[-WINDOW_DAYS:], avg_bounce)
    bounce_trend = percent_change(recent_bounce, avg_bounce or 1.0)

    return TrendResult(
        session_trend_pct=session_trend,
        bounce_trend_pct=bounce_trend,
        recent_sessions_avg=recent_sessions_avg,
        previous_sessions_avg=previous_sessions_avg,
        avg_bounce_rate=avg_bounce,
        recent_bounce_rate=recent_bounce,
    )
