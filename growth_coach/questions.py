from __future__ import annotations

from functools import reduce
from typing import Iterable, Mapping

from growth_coach.math_utils import to_fixed
from growth_coach.models import INSIGHT_OPPORTUNITY, INSIGHT_WARNING, Insight, MetricsSnapshot
from growth_coach.trends import average_bounce_rate, week_over_week


INTENT_TRAFFIC = "traffic"
INTENT_BOUNCE = "bounce"
INTENT_SOURCES = "sources"
INTENT_ADVICE = "advice"
INTENT_DEFAULT = "default"

# First match wins.
INTENT_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    (INTENT_TRAFFIC, ("traffic", "session")),
    (INTENT_BOUNCE, ("bounce", "leaving")),
    (INTENT_SOURCES, ("source", "where", "coming")),
    (INTENT_ADVICE, ("improve", "grow", "help")),
)

NO_DATA_ANSWER = (
    "Hey! I need to analyze your data first. Please connect your Google Analytics "
    "or wait for the data to load."
)
NO_SOURCES_ANSWER = (
    "I don't have any traffic source data yet. Once visits start coming in, "
    "I can tell you which channels bring the most people."
)
HEALTHY_ANSWER = (
    "Your analytics look healthy overall! Focus on consistent content creation "
    "and user experience improvements for steady growth."
)

SOURCE_COMMENTARY = {
    "organic": "Great SEO work!",
    "paid": "Make sure your ad spend is profitable.",
    "direct": "Strong brand recognition!",
}
OTHER_SOURCE_COMMENTARY = "Diversify your traffic sources for stability."


def classify_question(question: str) -> str:
    lowered = str(question or "").lower()
    for intent, keywords in INTENT_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return INTENT_DEFAULT


def _answer_traffic(snapshot: MetricsSnapshot) -> str:
    recent, _previous, change = week_over_week(snapshot.sessions)
    if change < -10:
        tail = "Consider boosting your content promotion or checking for technical issues."
    elif change > 10:
        tail = "Great momentum! Keep doing what you're doing."
    else:
        tail = "Steady traffic - focus on conversion optimization."
    direction = "up" if change > 0 else "down"
    return (
        f"Based on your data, you're averaging {to_fixed(recent, 0)} sessions per day this week, "
        f"which is {direction} {to_fixed(abs(change), 1)}% from last week. {tail}"
    )


def _answer_bounce(snapshot: MetricsSnapshot) -> str:
    bounce_rate = average_bounce_rate(snapshot)
    if bounce_rate > 60:
        tail = (
            "This is on the higher side - visitors might not be finding what they expect. "
            "Try improving your headlines and page load speed."
        )
    elif bounce_rate < 40:
        tail = "Excellent! Your content is engaging visitors well."
    else:
        tail = "This is in a decent range, but there's room for improvement with better content and UX."
    return f"Your average bounce rate is {to_fixed(bounce_rate, 1)}%. {tail}"


def top_source(sources: Mapping[str, float]) -> str | None:
    """Channel with the most visits. Among equal counts the later key wins."""
    if not sources:
        return None
    return reduce(lambda a, b: a if sources[a] > sources[b] else b, sources)


def _answer_sources(snapshot: MetricsSnapshot) -> str:
    sources = snapshot.sources
    total = snapshot.total_source_traffic
    channel = top_source(sources)
    if channel is None or total <= 0:
        return NO_SOURCES_ANSWER

    share = to_fixed(sources[channel] / total * 100, 0)
    commentary = SOURCE_COMMENTARY.get(channel, OTHER_SOURCE_COMMENTARY)
    return (
        f"Your top traffic source is {channel} at {share}% of total visits. {commentary} "
        "Consider investing more in sources that convert well."
    )


def _answer_advice(insights: Iterable[Insight]) -> str:
    issues = [item for item in insights if item.type in (INSIGHT_WARNING, INSIGHT_OPPORTUNITY)]
    if not issues:
        return HEALTHY_ANSWER
    top_issue = issues[0]
    return (
        f"Here's your biggest opportunity: {top_issue.message} {top_issue.action} "
        "Focus on this first for maximum impact."
    )


def _answer_default(question: str) -> str:
    return (
        f'I analyzed your question about "{question}" but need more specific keywords. '
        "Try asking about 'traffic trends', 'bounce rate', 'traffic sources', or 'how to improve'. "
        "I'm here to help you understand your data better!"
    )


def answer_question(
    question: str,
    snapshot: MetricsSnapshot | None,
    insights: Iterable[Insight] = (),
) -> str:
    text = str(question or "")
    if snapshot is None:
        return NO_DATA_ANSWER

    intent = classify_question(text)
    if intent == INTENT_TRAFFIC:
        return _answer_traffic(snapshot)
    if intent == INTENT_BOUNCE:
        return _answer_bounce(snapshot)
    if intent == INTENT_SOURCES:
        return _answer_sources(snapshot)
    if intent == INTENT_ADVICE:
        return _answer_advice(insights or ())
    return _answer_default(text)
