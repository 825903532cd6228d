from __future__ import annotations

from pathlib import Path

import pytest

from stonerview import diagnostics
from stonerview.graph import OscillatorGraph
from stonerview.utils import ScriptedRandomSource


@pytest.fixture
def engine_log(tmp_path: Path):
    previous_path = diagnostics.log_path()
    previous_flag = diagnostics.engine_logging_enabled()
    target = tmp_path / "logs" / "engine.log"
    diagnostics.set_log_path(target)
    yield target
    diagnostics.set_log_path(previous_path)
    diagnostics.enable_engine_logging(previous_flag)


def test_disabled_logging_writes_nothing(engine_log: Path) -> None:
    diagnostics.enable_engine_logging(False)
    graph = OscillatorGraph(4, 4, rng=ScriptedRandomSource([]))
    graph.new_constant(1)
    graph.advance()
    graph.reset()
    assert not engine_log.exists()


def test_enabled_logging_records_ticks_and_resets(engine_log: Path) -> None:
    diagnostics.enable_engine_logging(True)
    assert diagnostics.engine_logging_enabled()
    graph = OscillatorGraph(4, 4, rng=ScriptedRandomSource([]), max_nodes=1)
    graph.new_constant(1)
    assert graph.new_constant(2) is None
    graph.advance()
    graph.advance()
    graph.reset()
    lines = engine_log.read_text(encoding="utf-8").splitlines()
    assert lines == [
        "tick=0 refused constant: capacity 1 reached",
        "tick=1 nodes=1",
        "tick=2 nodes=1",
        "reset dropped=1",
    ]


def test_unwritable_log_path_is_ignored(tmp_path: Path, engine_log: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    diagnostics.set_log_path(blocker / "engine.log")
    diagnostics.enable_engine_logging(True)
    diagnostics.log_engine_event("dropped")
    assert blocker.read_text() == "not a directory"
