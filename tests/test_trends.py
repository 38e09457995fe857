import math

import pytest

from growth_coach.demo_data import DEMO_SNAPSHOT
from growth_coach.models import MetricsSnapshot
from growth_coach.trends import compute_trends, week_over_week


def test_week_over_week_uses_last_two_seven_day_windows() -> None:
    sessions = [999] * 5 + [100] * 7 + [80] * 7
    recent, previous, change = week_over_week(sessions)

    assert recent == 80
    assert previous == 100
    assert change == pytest.approx(-20.0)


def test_empty_sessions_fall_back_to_unit_baseline() -> None:
    trends = compute_trends(MetricsSnapshot())

    assert trends.recent_sessions_avg == 0
    assert trends.previous_sessions_avg == 1
    assert trends.session_trend_pct == -100


def test_short_history_compares_against_itself() -> None:
    trends = compute_trends(MetricsSnapshot(sessions=(50, 70, 60)))

    assert trends.previous_sessions_avg == trends.recent_sessions_avg == 60
    assert trends.session_trend_pct == 0


def test_partial_previous_window() -> None:
    sessions = (10, 20, 30) + (40,) * 7
    trends = compute_trends(MetricsSnapshot(sessions=sessions))

    assert trends.previous_sessions_avg == 20
    assert trends.session_trend_pct == pytest.approx(100.0)


@pytest.mark.parametrize("length", [0, 1, 7, 14, 29, 30])
def test_trends_are_finite_for_boundary_lengths(length: int) -> None:
    snapshot = MetricsSnapshot(
        sessions=tuple(range(length)),
        bounce_rate=tuple(float(day) for day in range(length)),
    )
    trends = compute_trends(snapshot)

    assert math.isfinite(trends.session_trend_pct)
    assert math.isfinite(trends.bounce_trend_pct)


def test_bounce_trend_compares_recent_week_with_full_history() -> None:
    bounce = (30.0,) * 7 + (50.0,) * 7 + (40.0,) * 7
    trends = compute_trends(MetricsSnapshot(bounce_rate=bounce))

    assert trends.avg_bounce_rate == pytest.approx(40.0)
    assert trends.recent_bounce_rate == pytest.approx(40.0)
    # Week-over-week would have been -20%.
    assert trends.bounce_trend_pct == pytest.approx(0.0)


def test_zero_bounce_history_does_not_divide_by_zero() -> None:
    trends = compute_trends(MetricsSnapshot(bounce_rate=(0.0, 0.0)))
    assert trends.bounce_trend_pct == -100

    trends = compute_trends(MetricsSnapshot())
    assert trends.avg_bounce_rate == 0
    assert trends.bounce_trend_pct == -100


def test_demo_snapshot_trend() -> None:
    trends = compute_trends(DEMO_SNAPSHOT)

    assert trends.recent_sessions_avg == 144
    assert trends.previous_sessions_avg == 145
    assert trends.session_trend_pct == pytest.approx(-100 / 145)
    assert trends.avg_bounce_rate == pytest.approx(1270.0 / 30)
