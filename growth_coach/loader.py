from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from growth_coach.demo_data import DEMO_SNAPSHOT
from growth_coach.ga_report import parse_ga_report
from growth_coach.models import MetricsSnapshot


logger = logging.getLogger(__name__)


def snapshot_from_payload(payload: Any) -> MetricsSnapshot:
    """Accept either a raw GA ``reports`` response or a plain snapshot object."""
    if not isinstance(payload, dict):
        raise RuntimeError("Snapshot payload is not a JSON object.")
    if "reports" in payload:
        return parse_ga_report(payload)
    # Cached extension responses wrap the snapshot as {"raw": {...}, "insights": [...]}.
    raw = payload.get("raw")
    if isinstance(raw, dict):
        return MetricsSnapshot.from_dict(raw)
    return MetricsSnapshot.from_dict(payload)


def read_snapshot_file(path: str | Path) -> MetricsSnapshot:
    file_path = Path(path)
    if not file_path.exists():
        raise RuntimeError(f"Snapshot file not found: {file_path}")
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuntimeError(f"Cannot read snapshot file: {file_path} ({exc})") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON in snapshot file: {file_path}") from exc
    return snapshot_from_payload(payload)


def load_snapshot(path: str | Path | None, *, demo_fallback: bool = True) -> tuple[MetricsSnapshot, bool]:
    """Load a snapshot, returning ``(snapshot, is_mock_data)``.

    With ``demo_fallback`` a missing path or an unreadable file yields the
    demo dataset instead of an error.
    """
    if not path:
        if not demo_fallback:
            raise RuntimeError("No snapshot file configured and demo fallback is disabled.")
        logger.info("No snapshot file configured, using demo data.")
        return DEMO_SNAPSHOT, True

    try:
        snapshot = read_snapshot_file(path)
    except RuntimeError as exc:
        if not demo_fallback:
            raise
        logger.warning("Loading %s failed, using demo data: %s", path, exc)
        return DEMO_SNAPSHOT, True

    logger.info("Loaded snapshot from %s (%d days).", path, len(snapshot.sessions))
    return snapshot, False
