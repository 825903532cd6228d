from __future__ import annotations

import pytest

from stonerview.config import AppConfig, EngineConfig, RuntimeConfig, build_configuration
from stonerview.state import DEFAULT_ELEMENTS, DEFAULT_PHASES, FRAME_INTERVAL_MS


def test_default_configuration() -> None:
    config = build_configuration()
    assert isinstance(config, AppConfig)
    assert config.engine == EngineConfig()
    assert config.engine.phases == DEFAULT_PHASES
    assert config.engine.elements == DEFAULT_ELEMENTS
    assert config.runtime == RuntimeConfig()
    assert config.runtime.frame_interval_ms == FRAME_INTERVAL_MS


def test_configuration_coerces_types() -> None:
    config = build_configuration(
        engine={"phases": "6", "elements": 12.0, "seed": "3"},
        runtime={"frames": "7", "realtime": 1},
    )
    assert config.engine.phases == 6
    assert config.engine.elements == 12
    assert config.engine.seed == 3
    assert config.runtime.frames == 7
    assert config.runtime.realtime is True


@pytest.mark.parametrize(
    "engine, runtime, field",
    [
        ({"phases": 0}, {}, "engine.phases"),
        ({"elements": 0}, {}, "engine.elements"),
        ({"max_nodes": -1}, {}, "engine.max_nodes"),
        ({}, {"frames": -1}, "runtime.frames"),
        ({}, {"frame_interval_ms": -5}, "runtime.frame_interval_ms"),
    ],
)
def test_invalid_configuration_raises(engine, runtime, field) -> None:
    with pytest.raises(ValueError) as excinfo:
        build_configuration(engine=engine, runtime=runtime)
    assert field in str(excinfo.value)
