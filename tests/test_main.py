import json

import pytest

from growth_coach.main import main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for key in (
        "GROWTH_COACH_DATA_PATH",
        "GROWTH_COACH_MAX_INSIGHTS",
        "GROWTH_COACH_DEMO_FALLBACK",
        "GROWTH_COACH_OUTPUT_DIR",
        "GROWTH_COACH_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _write_snapshot(path) -> None:
    payload = {
        "sessions": [100] * 7 + [80] * 7,
        "bounceRate": [70.0] * 14,
        "sources": {"paid": 60, "organic": 10, "direct": 20, "social": 10},
        "avgSessionDuration": 30,
    }
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_main_demo_prints_insights_and_answers(capsys) -> None:
    main(["--demo", "--ask", "What's my best source?", "--ask", "  "])
    out = capsys.readouterr().out

    assert out.startswith("📊 Using demo data")
    assert "✅ You're Tracking!" in out
    assert "Q: What's my best source?" in out
    assert "A: Your top traffic source is organic at 42% of total visits." in out
    assert out.count("Q: ") == 1


def test_main_analyzes_data_file(tmp_path, capsys) -> None:
    path = tmp_path / "snapshot.json"
    _write_snapshot(path)

    main(["--data", str(path), "--max-insights", "3"])
    out = capsys.readouterr().out

    assert "Using demo data" not in out
    assert "🚨 Traffic Drop Alert" in out
    assert "💸 Ad Waste Alert" in out
    assert "🌱 SEO Opportunity" not in out
    assert "You're Tracking!" not in out


def test_main_reads_data_path_from_env(monkeypatch, tmp_path, capsys) -> None:
    path = tmp_path / "snapshot.json"
    _write_snapshot(path)
    monkeypatch.setenv("GROWTH_COACH_DATA_PATH", str(path))

    main([])
    assert "🚨 Traffic Drop Alert" in capsys.readouterr().out


def test_main_without_fallback_exits(tmp_path) -> None:
    with pytest.raises(SystemExit, match="not found"):
        main(["--data", str(tmp_path / "missing.json"), "--no-demo-fallback"])


def test_main_exports_json_and_docx_to_given_paths(tmp_path, capsys) -> None:
    json_path = tmp_path / "exports" / "report.json"
    docx_path = tmp_path / "report.docx"
    main(["--demo", "--export-json", str(json_path), "--export-docx", str(docx_path)])

    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["isMockData"] is True
    assert payload["sources"]["organic"] == 42
    assert docx_path.stat().st_size > 0

    out = capsys.readouterr().out
    assert f"Report written: {json_path}" in out
    assert f"Report written: {docx_path}" in out


def test_main_resolves_relative_export_paths_under_output_dir(tmp_path) -> None:
    output_dir = tmp_path / "out"
    main(["--demo", "--export-json", "report.json", "--output-dir", str(output_dir)])

    assert (output_dir / "report.json").is_file()
    assert not (output_dir / "report.docx").exists()


def test_main_without_export_flags_writes_nothing(tmp_path, capsys) -> None:
    main(["--demo"])

    assert "Report written:" not in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_main_exits_on_invalid_config(monkeypatch) -> None:
    monkeypatch.setenv("GROWTH_COACH_MAX_INSIGHTS", "lots")
    with pytest.raises(SystemExit, match="must be an integer"):
        main(["--demo"])
