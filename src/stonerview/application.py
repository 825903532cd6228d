"""High level application orchestration."""

from __future__ import annotations

from dataclasses import dataclass

from .config import AppConfig
from .graph import OscillatorGraph
from .motion import MotionLayer
from .utils import RandomSource


@dataclass(slots=True)
class StonerApplication:
    """Runtime container for the oscillator graph and its particle field.

    The application builds the graph once from an :class:`AppConfig` and
    exposes a small API for stepping frames in-process. No display is
    required, which keeps tests and command line usage deterministic when a
    seed is supplied.
    """

    config: AppConfig
    graph: OscillatorGraph
    motion: MotionLayer

    @classmethod
    def from_config(
        cls, config: AppConfig, *, rng: RandomSource | None = None
    ) -> "StonerApplication":
        graph = OscillatorGraph.from_config(config.engine, rng=rng)
        motion = MotionLayer(graph)
        return cls(config=config, graph=graph, motion=motion)

    def frame(self) -> None:
        """Advance one tick and refresh the particle attributes."""

        self.motion.frame()

    def summary(self) -> str:
        """Return a human-readable description of the configuration and graph."""

        engine = self.config.engine
        lines = [
            f"Seed: {engine.seed if engine.seed is not None else 'random'}",
            f"Frame interval: {self.config.runtime.frame_interval_ms} ms",
            self.graph.summary(),
        ]
        return "\n".join(lines)


__all__ = ["StonerApplication"]
