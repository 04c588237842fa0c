"""CLI level tests with monkeypatched pipeline dependencies."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from fpl_weekly import cli
from fpl_weekly.fpl.snapshot import build_snapshot
from fpl_weekly.pipeline import BuildError, BuildOutcome, build_weekly_report


def _make_outcome(payload: dict[str, Any], tmp_path: Path) -> BuildOutcome:
    report = build_weekly_report(build_snapshot(payload))
    return BuildOutcome(report=report, written={"json": tmp_path / "report.json"})


def test_build_command_passes_options(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    sample_payload: dict[str, Any],
) -> None:
    monkeypatch.chdir(tmp_path)
    captured: dict[str, Any] = {}

    def fake_build(**kwargs: Any) -> BuildOutcome:
        captured.update(kwargs)
        return _make_outcome(sample_payload, tmp_path)

    monkeypatch.setattr(cli, "build", fake_build)
    status = cli.main(
        [
            "build",
            "--output-dir",
            str(tmp_path / "site"),
            "--formats",
            "md, json",
            "--save-raw",
        ]
    )

    assert status == 0
    assert captured["formats"] == ["markdown", "json"]
    assert captured["save_raw"] is True
    assert captured["settings"].output_dir == tmp_path / "site"
    summary = json.loads(capsys.readouterr().out)
    assert summary["gameweek"] == 2
    assert summary["selection_method"] == "is_next_flag"
    assert summary["fixtures"] == 3


def test_build_command_reads_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, sample_payload: dict[str, Any]
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FPL_WEEKLY_OUTPUT_DIR", str(tmp_path / "from-env"))
    captured: dict[str, Any] = {}

    def fake_build(**kwargs: Any) -> BuildOutcome:
        captured.update(kwargs)
        return _make_outcome(sample_payload, tmp_path)

    monkeypatch.setattr(cli, "build", fake_build)
    assert cli.main(["build"]) == 0
    assert captured["settings"].output_dir == tmp_path / "from-env"


def test_build_command_end_to_end_from_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, sample_payload: dict[str, Any]
) -> None:
    monkeypatch.chdir(tmp_path)
    saved = tmp_path / "data.json"
    saved.write_text(json.dumps(sample_payload), encoding="utf-8")

    status = cli.main(
        ["build", "--input", str(saved), "--output-dir", str(tmp_path / "out")]
    )

    assert status == 0
    assert (tmp_path / "out" / "index.md").exists()
    assert (tmp_path / "out" / "report.json").exists()


def test_build_handles_build_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        cli,
        "build",
        lambda **_: (_ for _ in ()).throw(BuildError("boom")),
    )
    assert cli.main(["build"]) == 1
    assert "Build failed: boom" in capsys.readouterr().err


def test_build_rejects_unknown_format(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    assert cli.main(["build", "--formats", "html"]) == 1


def test_console_logger_hides_debug(capsys: pytest.CaptureFixture[str]) -> None:
    log = cli._make_console_logger(verbose=False)
    log("hidden", "debug")
    log("shown", "success")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out
