from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from stonerview import diagnostics
from stonerview.application import StonerApplication
from stonerview.cli import main as cli_main
from stonerview.config import build_configuration
from stonerview.runner import run_headless


def test_cli_reports_rendered_frames(capsys) -> None:
    exit_code = cli_main(["--frames", "5", "--elements", "8", "--seed", "3"])
    assert exit_code == 0
    captured = capsys.readouterr()
    assert "Rendered 5 frames" in captured.out
    assert "tick 5" in captured.out


def test_cli_writes_csv_and_summary(tmp_path: Path, capsys) -> None:
    output = tmp_path / "out" / "frames.csv"
    exit_code = cli_main(
        ["--frames", "4", "--seed", "1", "--output", str(output), "--summary"]
    )
    assert exit_code == 0
    frame = pd.read_csv(output)
    assert len(frame) == 4
    assert list(frame["tick"]) == [1, 2, 3, 4]
    assert "Nodes (" in capsys.readouterr().out


def test_cli_rejects_invalid_engine_size() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_main(["--elements", "0"])
    assert excinfo.value.code == 2


def test_cli_log_ticks_writes_engine_log(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    previous = diagnostics.log_path()
    diagnostics.set_log_path(tmp_path / "logs" / "engine_ticks.log")
    try:
        assert cli_main(["--frames", "3", "--seed", "2", "--log-ticks"]) == 0
    finally:
        diagnostics.set_log_path(previous)
    lines = (tmp_path / "logs" / "engine_ticks.log").read_text().splitlines()
    assert lines[-1].startswith("tick=3 ")
    assert not diagnostics.engine_logging_enabled()


def test_headless_runs_are_reproducible_with_seed() -> None:
    config = build_configuration(engine={"seed": 42, "elements": 12}, runtime={"frames": 10})
    first = run_headless(StonerApplication.from_config(config))
    second = run_headless(StonerApplication.from_config(config))
    assert list(first["frame"]) == list(range(10))
    columns = [c for c in first.columns if c != "render_duration"]
    pd.testing.assert_frame_equal(first[columns], second[columns])


def test_headless_frame_override() -> None:
    config = build_configuration(engine={"seed": 0}, runtime={"frames": 50})
    app = StonerApplication.from_config(config)
    results = run_headless(app, frames=3)
    assert len(results) == 3
    assert app.graph.tick == 3


def test_application_summary_mentions_seed() -> None:
    config = build_configuration(engine={"seed": 9, "elements": 6})
    summary = StonerApplication.from_config(config).summary()
    assert "Seed: 9" in summary
    assert "Elements: 6" in summary
