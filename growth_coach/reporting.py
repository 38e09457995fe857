from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Iterable

from docx import Document
from docx.shared import Pt

from growth_coach.models import CoachReport, Insight, MetricsSnapshot


MOCK_DATA_NOTICE = "📊 Using demo data - Connect your Google Analytics for real insights!"

# Shown by the UI when an insight set is empty; never produced by the engine.
GETTING_STARTED_INSIGHT = Insight(
    type="",
    title="🎯 Getting Started",
    message="Hey there! I'm analyzing your data to find growth opportunities.",
    action="Check back in a few days as I gather more information about your traffic patterns.",
)

BOLD_MARKDOWN_RE = re.compile(r"\*\*(.+?)\*\*")


def _cards(insights: Iterable[Insight]) -> list[Insight]:
    cards = list(insights)
    return cards or [GETTING_STARTED_INSIGHT]


def render_insights_text(insights: Iterable[Insight], *, is_mock_data: bool = False) -> str:
    lines: list[str] = []
    if is_mock_data:
        lines.append(MOCK_DATA_NOTICE)
        lines.append("")

    for card in _cards(insights):
        label = f"[{card.type}] " if card.type else ""
        lines.append(f"{label}{card.title}")
        lines.append(f"  {card.message}")
        lines.append(f"  -> {card.action}")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


def chat_greeting(snapshot: MetricsSnapshot) -> str:
    return (
        f"👋 Hey! I've analyzed your last {len(snapshot.sessions)} days of data "
        f"({snapshot.total_sessions} total sessions). "
        "Ask me anything about your traffic patterns, bounce rates, or where your visitors come from!\n"
        'Try: "Why is my traffic dropping?" or "What\'s my best traffic source?"'
    )


def export_payload(report: CoachReport) -> dict[str, Any]:
    return {
        "insights": [insight.to_dict() for insight in report.insights],
        "sessions": list(report.raw.sessions),
        "sources": dict(report.raw.sources),
        "isMockData": report.is_mock_data,
        "exportDate": report.generated_at.isoformat(),
    }


def build_report_markdown(report: CoachReport) -> str:
    snapshot = report.raw
    out: list[str] = [
        "# Growth Coach report",
        "",
        f"Generated: {report.generated_at:%Y-%m-%d %H:%M}",
    ]
    if report.is_mock_data:
        out.append(MOCK_DATA_NOTICE)

    out.extend(["", "## Insights", ""])
    for card in _cards(report.insights):
        out.append(f"- **{card.title}** {card.message}")
        out.append(f"  - Next step: {card.action}")

    out.extend(
        [
            "",
            "## Data overview",
            "",
            f"- Days analyzed: {len(snapshot.sessions)}",
            f"- Total sessions: {snapshot.total_sessions}",
        ]
    )
    if snapshot.avg_session_duration is not None:
        out.append(f"- Average session duration: {snapshot.avg_session_duration:.0f}s")
    for channel, visits in sorted(snapshot.sources.items(), key=lambda item: item[1], reverse=True):
        out.append(f"- Source {channel}: {visits:.0f}")
    return "\n".join(out)


def _add_markdown_runs(paragraph, text: str) -> None:
    last = 0
    for match in BOLD_MARKDOWN_RE.finditer(text):
        start, end = match.span()
        if start > last:
            paragraph.add_run(text[last:start])
        run = paragraph.add_run(match.group(1))
        run.bold = True
        last = end
    if last < len(text):
        paragraph.add_run(text[last:])


def write_docx(path: Path, title: str, content: str) -> None:
    """Write report markdown (``#``/``##`` headings, two bullet levels, ``**bold**``) to DOCX."""
    doc = Document()
    doc.core_properties.title = title
    normal = doc.styles["Normal"]
    normal.font.name = "Calibri"
    normal.font.size = Pt(10.5)
    normal.paragraph_format.space_after = Pt(4)

    for raw_line in content.splitlines():
        line = raw_line.rstrip()
        if not line:
            doc.add_paragraph("")
            continue

        if line.startswith("#"):
            hashes, _, text = line.partition(" ")
            paragraph = doc.add_heading("", level=min(len(hashes), 2))
            _add_markdown_runs(paragraph, text)
        elif line.lstrip().startswith("- "):
            nested = line.startswith(" ")
            paragraph = doc.add_paragraph("", style="List Bullet 2" if nested else "List Bullet")
            _add_markdown_runs(paragraph, line.lstrip()[2:])
        else:
            _add_markdown_runs(doc.add_paragraph(""), line)

    doc.save(str(path))
