"""Fixed 30-day dataset shown when no real analytics data can be loaded."""
from __future__ import annotations

from growth_coach.models import MetricsSnapshot


DEMO_SNAPSHOT = MetricsSnapshot(
    sessions=(
        120, 135, 98, 156, 142, 118, 167, 134, 129, 145,
        112, 156, 139, 147, 123, 165, 141, 128, 174, 138,
        152, 119, 163, 145, 131, 159, 126, 168, 142, 137,
    ),
    users=(
        95, 108, 76, 124, 113, 94, 133, 107, 103, 115,
        89, 124, 111, 117, 98, 131, 112, 102, 138, 110,
        121, 95, 129, 115, 104, 126, 100, 133, 113, 109,
    ),
    bounce_rate=(
        45.2, 42.1, 58.3, 38.7, 41.2, 46.8, 35.9, 43.5, 44.7, 40.3,
        52.1, 37.8, 42.9, 39.6, 47.3, 36.4, 41.7, 45.9, 34.2, 43.1,
        38.8, 48.6, 36.7, 40.9, 44.2, 37.5, 46.1, 35.3, 41.4, 42.8,
    ),
    sources={"organic": 42, "paid": 28, "direct": 18, "social": 8, "referral": 4},
    avg_session_duration=145.0,
    conversion_rate=2.8,
)
