from __future__ import annotations

from growth_coach.math_utils import to_fixed
from growth_coach.models import (
    INSIGHT_OPPORTUNITY,
    INSIGHT_SUCCESS,
    INSIGHT_WARNING,
    Insight,
    MetricsSnapshot,
    TrendResult,
)
from growth_coach.trends import average_bounce_rate


TRAFFIC_DROP_PCT = -15.0
TRAFFIC_SURGE_PCT = 20.0
HIGH_BOUNCE_RATE = 60.0
AD_WASTE_PAID_SHARE = 50.0
AD_WASTE_BOUNCE_RATE = 55.0
SEO_ORGANIC_SHARE = 30.0
SHORT_SESSION_SECONDS = 60.0

TRACKING_INSIGHT = Insight(
    type=INSIGHT_SUCCESS,
    title="✅ You're Tracking!",
    message="Great job monitoring your analytics. Consistent tracking is the first step to growth.",
    action="Keep checking these insights weekly and act on the recommendations above.",
)


def source_share(snapshot: MetricsSnapshot, channel: str) -> float:
    """Percent of all source volume coming from ``channel``; 0 when there is no volume."""
    total = snapshot.total_source_traffic
    if not total:
        return 0.0
    return snapshot.sources.get(channel, 0.0) / total * 100


def _traffic_trend_insight(trends: TrendResult) -> Insight | None:
    change = trends.session_trend_pct
    if change < TRAFFIC_DROP_PCT:
        return Insight(
            type=INSIGHT_WARNING,
            title="🚨 Traffic Drop Alert",
            message=(
                f"Hey! Your sessions dropped {to_fixed(abs(change), 1)}% this week. "
                "This could be due to seasonal changes or SEO issues."
            ),
            action="Consider boosting your content with long-tail keywords or checking for broken links.",
        )
    elif change > TRAFFIC_SURGE_PCT:
        return Insight(
            type=INSIGHT_SUCCESS,
            title="🎉 Traffic Surge",
            message=f"Awesome! Your traffic jumped {to_fixed(change, 1)}% this week. Something's working!",
            action="Double down on what you did recently - more content like this, or increase ad spend.",
        )
    return None


def _bounce_rate_insight(avg_bounce_rate: float) -> Insight | None:
    if avg_bounce_rate <= HIGH_BOUNCE_RATE:
        return None
    return Insight(
        type=INSIGHT_WARNING,
        title="⚠️ High Bounce Rate",
        message=f"Your bounce rate is {to_fixed(avg_bounce_rate, 1)}% - visitors are leaving quickly.",
        action="Improve page load speed, make your value proposition clearer, or simplify navigation.",
    )


def _ad_waste_insight(snapshot: MetricsSnapshot, avg_bounce_rate: float) -> Insight | None:
    paid_share = source_share(snapshot, "paid")
    if not (paid_share > AD_WASTE_PAID_SHARE and avg_bounce_rate > AD_WASTE_BOUNCE_RATE):
        return None
    return Insight(
        type=INSIGHT_WARNING,
        title="💸 Ad Waste Alert",
        message=f"Over {to_fixed(paid_share, 0)}% of your traffic is paid, but bounce rate is high.",
        action="Refine your ad targeting or improve landing page relevance to reduce waste.",
    )


def _seo_opportunity_insight(snapshot: MetricsSnapshot) -> Insight | None:
    # An empty source mapping counts as 0% organic, so this fires.
    organic_share = source_share(snapshot, "organic")
    if organic_share >= SEO_ORGANIC_SHARE:
        return None
    return Insight(
        type=INSIGHT_OPPORTUNITY,
        title="🌱 SEO Opportunity",
        message=f"Only {to_fixed(organic_share, 0)}% of your traffic is organic - huge growth potential!",
        action="Focus on content marketing, keyword research, and building quality backlinks.",
    )


def _engagement_insight(snapshot: MetricsSnapshot) -> Insight | None:
    # No duration reported means nothing to compare.
    duration = snapshot.avg_session_duration
    if duration is None or duration >= SHORT_SESSION_SECONDS:
        return None
    return Insight(
        type=INSIGHT_WARNING,
        title="⏰ Short Session Alert",
        message="Visitors spend less than a minute on your site on average.",
        action="Add engaging content above the fold, improve page design, or add internal links.",
    )


def evaluate_rules(snapshot: MetricsSnapshot, trends: TrendResult) -> list[Insight]:
    """Run every rule in order and return the candidate insights, unranked and untrimmed."""
    avg_bounce_rate = average_bounce_rate(snapshot)
    candidates = [
        _traffic_trend_insight(trends),
        _bounce_rate_insight(avg_bounce_rate),
        _ad_waste_insight(snapshot, avg_bounce_rate),
        _seo_opportunity_insight(snapshot),
        _engagement_insight(snapshot),
    ]
    insights = [insight for insight in candidates if insight is not None]

    if not any(insight.type == INSIGHT_SUCCESS for insight in insights):
        insights.append(TRACKING_INSIGHT)
    return insights
