from __future__ import annotations

import logging
from datetime import datetime

from growth_coach.models import CoachReport, InsightSet, MetricsSnapshot
from growth_coach.ranking import MAX_INSIGHTS, rank_insights
from growth_coach.rules import evaluate_rules
from growth_coach.trends import compute_trends


logger = logging.getLogger(__name__)


def analyze(snapshot: MetricsSnapshot, max_insights: int = MAX_INSIGHTS) -> InsightSet:
    trends = compute_trends(snapshot)
    candidates = evaluate_rules(snapshot, trends)
    insights = rank_insights(candidates, max_insights)
    logger.debug(
        "Analysis: session trend %.1f%%, bounce trend %.1f%%, %d candidates, %d kept",
        trends.session_trend_pct,
        trends.bounce_trend_pct,
        len(candidates),
        len(insights),
    )
    return insights


def build_report(
    snapshot: MetricsSnapshot,
    *,
    generated_at: datetime,
    is_mock_data: bool = False,
    max_insights: int = MAX_INSIGHTS,
) -> CoachReport:
    return CoachReport(
        raw=snapshot,
        insights=analyze(snapshot, max_insights),
        generated_at=generated_at,
        is_mock_data=is_mock_data,
    )
