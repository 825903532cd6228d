"""Configuration for the oscillator engine and its frame loop."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .state import DEFAULT_ELEMENTS, DEFAULT_FRAMES, DEFAULT_PHASES, FRAME_INTERVAL_MS


@dataclass(slots=True)
class EngineConfig:
    """Fixed cardinalities shared by every node in a graph."""

    phases: int = DEFAULT_PHASES
    elements: int = DEFAULT_ELEMENTS
    seed: int | None = None
    max_nodes: int | None = None


@dataclass(slots=True)
class RuntimeConfig:
    """Frame loop parameters that are independent of the graph layout."""

    frames: int = DEFAULT_FRAMES
    frame_interval_ms: float = FRAME_INTERVAL_MS
    realtime: bool = False
    log_ticks: bool = False


@dataclass(slots=True)
class AppConfig:
    engine: EngineConfig = field(default_factory=EngineConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


def _optional_int(value: Any) -> int | None:
    return None if value is None else int(value)


def _normalise_engine(data: Mapping[str, Any]) -> EngineConfig:
    engine = EngineConfig(
        phases=int(data.get("phases", DEFAULT_PHASES)),
        elements=int(data.get("elements", DEFAULT_ELEMENTS)),
        seed=_optional_int(data.get("seed")),
        max_nodes=_optional_int(data.get("max_nodes")),
    )
    if engine.phases < 1:
        raise ValueError("engine.phases must be at least 1")
    if engine.elements < 1:
        raise ValueError("engine.elements must be at least 1")
    if engine.max_nodes is not None and engine.max_nodes < 0:
        raise ValueError("engine.max_nodes must be non-negative")
    return engine


def _normalise_runtime(data: Mapping[str, Any]) -> RuntimeConfig:
    runtime = RuntimeConfig(
        frames=int(data.get("frames", DEFAULT_FRAMES)),
        frame_interval_ms=float(data.get("frame_interval_ms", FRAME_INTERVAL_MS)),
        realtime=bool(data.get("realtime", False)),
        log_ticks=bool(data.get("log_ticks", False)),
    )
    if runtime.frames < 0:
        raise ValueError("runtime.frames must be non-negative")
    if runtime.frame_interval_ms < 0:
        raise ValueError("runtime.frame_interval_ms must be non-negative")
    return runtime


def build_configuration(
    engine: Mapping[str, Any] | None = None,
    runtime: Mapping[str, Any] | None = None,
) -> AppConfig:
    """Return a validated :class:`AppConfig` from loose keyword mappings.

    Missing keys fall back to the defaults in :mod:`stonerview.state`; values
    are coerced to their declared types.
    """

    return AppConfig(
        engine=_normalise_engine(dict(engine or {})),
        runtime=_normalise_runtime(dict(runtime or {})),
    )


__all__ = [
    "AppConfig",
    "EngineConfig",
    "RuntimeConfig",
    "build_configuration",
]
