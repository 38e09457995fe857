from __future__ import annotations

from typing import Iterable

from growth_coach.models import Insight, InsightSet


MAX_INSIGHTS = 5


def rank_insights(candidates: Iterable[Insight], limit: int = MAX_INSIGHTS) -> InsightSet:
    """Keep the first ``limit`` candidates in rule order.

    The fallback success insight is appended before the cap, so when five or
    more rules fire it is cut and the set may hold no success insight at all.
    """
    return tuple(candidates)[: max(1, int(limit))]
