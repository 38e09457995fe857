from __future__ import annotations

import argparse
import json
import logging
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from growth_coach.config import CoachConfig
from growth_coach.engine import build_report
from growth_coach.loader import load_snapshot
from growth_coach.models import CoachReport
from growth_coach.questions import answer_question
from growth_coach.reporting import (
    build_report_markdown,
    chat_greeting,
    export_payload,
    render_insights_text,
    write_docx,
)


logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Growth Coach: insights and answers for web-traffic metrics")
    parser.add_argument(
        "--data",
        dest="data_path",
        help="Snapshot JSON file or raw GA report response (default: GROWTH_COACH_DATA_PATH)",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Ignore any configured data file and analyze the built-in demo dataset.",
    )
    parser.add_argument(
        "--ask",
        action="append",
        default=[],
        metavar="QUESTION",
        help="Question to answer about the data. Can be repeated.",
    )
    parser.add_argument(
        "--max-insights",
        dest="max_insights",
        type=int,
        help="Maximum number of insights to show.",
    )
    parser.add_argument(
        "--export-json",
        dest="export_json",
        metavar="PATH",
        help="Write the JSON export payload to PATH.",
    )
    parser.add_argument(
        "--export-docx",
        dest="export_docx",
        metavar="PATH",
        help="Write the DOCX coaching report to PATH.",
    )
    parser.add_argument(
        "--output-dir",
        dest="output_dir",
        help="Base directory for relative export paths (default: GROWTH_COACH_OUTPUT_DIR).",
    )
    parser.add_argument(
        "--no-demo-fallback",
        dest="demo_fallback_enabled",
        action="store_false",
        help="Fail instead of falling back to demo data when the data file cannot be read.",
    )
    parser.set_defaults(demo_fallback_enabled=None)
    return parser.parse_args(argv)


def _apply_cli_overrides(config: CoachConfig, args: argparse.Namespace) -> CoachConfig:
    updates: dict[str, object] = {}
    if args.demo:
        updates["data_path"] = ""
        updates["demo_fallback_enabled"] = True
    elif args.data_path:
        updates["data_path"] = args.data_path
    if args.max_insights is not None:
        updates["max_insights"] = max(1, int(args.max_insights))
    if args.output_dir:
        updates["output_dir"] = args.output_dir
    if args.demo_fallback_enabled is not None and not args.demo:
        updates["demo_fallback_enabled"] = bool(args.demo_fallback_enabled)
    return replace(config, **updates) if updates else config


def _export_path(raw: str, output_dir: str) -> Path:
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = Path(output_dir) / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _export_report(report: CoachReport, args: argparse.Namespace, output_dir: str) -> list[Path]:
    written: list[Path] = []
    if args.export_json:
        json_path = _export_path(args.export_json, output_dir)
        json_path.write_text(
            json.dumps(export_payload(report), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        written.append(json_path)
    if args.export_docx:
        docx_path = _export_path(args.export_docx, output_dir)
        write_docx(docx_path, "Growth Coach report", build_report_markdown(report))
        written.append(docx_path)
    return written


def main(argv: list[str] | None = None) -> None:
    try:
        load_dotenv(find_dotenv(usecwd=True), override=False)
    except Exception:
        pass

    args = _parse_args(argv)
    try:
        config = _apply_cli_overrides(CoachConfig.from_env(), args)
    except RuntimeError as exc:
        raise SystemExit(str(exc)) from exc
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        snapshot, is_mock_data = load_snapshot(
            config.data_path,
            demo_fallback=config.demo_fallback_enabled,
        )
    except RuntimeError as exc:
        raise SystemExit(str(exc)) from exc

    report = build_report(
        snapshot,
        generated_at=datetime.now(),
        is_mock_data=is_mock_data,
        max_insights=config.max_insights,
    )
    print(render_insights_text(report.insights, is_mock_data=report.is_mock_data), end="")

    questions = [question.strip() for question in args.ask if question and question.strip()]
    if questions:
        print()
        print(chat_greeting(report.raw))
        for question in questions:
            print()
            print(f"Q: {question}")
            print(f"A: {answer_question(question, report.raw, report.insights)}")

    written = _export_report(report, args, config.output_dir)
    if written:
        logger.info("Exported reports: %s", ", ".join(str(path) for path in written))
        print()
        for path in written:
            print(f"Report written: {path}")


if __name__ == "__main__":
    main()
