"""Particle motion layer: turns oscillator values into quad attributes."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .graph import OscillatorGraph
from .nodes import NodeHandle
from .state import RAW_DTYPE


@dataclass(slots=True)
class MotionHandles:
    """Graph handles for the four per-element attributes."""

    theta: NodeHandle | None
    rad: NodeHandle | None
    alti: NodeHandle | None
    color: NodeHandle | None


def build_motion_graph(graph: OscillatorGraph) -> MotionHandles:
    """Populate ``graph`` with the default StonerView attribute network.

    Units: ``theta`` in hundredths of a degree, ``rad`` and ``alti`` in
    hundredths of a world unit, ``color`` in tenths of a degree of hue.
    """

    theta = graph.new_linear(
        graph.new_velowrap(
            0,
            36000,
            graph.new_multiplex(
                graph.new_randphaser(300, 600),
                graph.new_constant(25),
                graph.new_constant(75),
                graph.new_constant(50),
                graph.new_constant(100),
            ),
        ),
        graph.new_multiplex(
            graph.new_buffer(graph.new_randphaser(300, 600)),
            graph.new_buffer(graph.new_wrap(0, 36000, 10)),
            graph.new_buffer(graph.new_wrap(0, 36000, -8)),
            graph.new_wrap(0, 36000, 4),
            graph.new_buffer(graph.new_bounce(-2000, 2000, 20)),
        ),
    )

    rad = graph.new_buffer(
        graph.new_multiplex(
            graph.new_randphaser(250, 500),
            graph.new_bounce(-1000, 1000, 10),
            graph.new_bounce(200, 1000, -15),
            graph.new_bounce(400, 1000, 10),
            graph.new_bounce(-1000, 1000, -20),
        )
    )

    alti = graph.new_linear(
        graph.new_constant(-1000),
        graph.new_constant(2000 // graph.elements),
    )

    color = graph.new_multiplex(
        graph.new_buffer(graph.new_randphaser(150, 300)),
        graph.new_buffer(graph.new_wrap(0, 3600, 13)),
        graph.new_buffer(graph.new_wrap(0, 3600, 32)),
        graph.new_buffer(graph.new_wrap(0, 3600, 17)),
        graph.new_buffer(graph.new_wrap(0, 3600, 7)),
    )
    return MotionHandles(theta=theta, rad=rad, alti=alti, color=color)


def hue_to_rgb(hue_degrees: np.ndarray) -> np.ndarray:
    """Fully saturated, full value HSV → RGB for an array of hues in degrees."""

    h = (np.asarray(hue_degrees, dtype=np.float64) % 360.0) / 60.0
    x = 1.0 - np.abs(h % 2.0 - 1.0)
    sector = np.floor(h).astype(np.int64) % 6
    one = np.ones_like(h)
    zero = np.zeros_like(h)
    r = np.choose(sector, [one, x, zero, zero, x, one])
    g = np.choose(sector, [x, one, one, x, zero, zero])
    b = np.choose(sector, [zero, zero, x, one, one, x])
    return np.stack([r, g, b], axis=-1)


class MotionLayer:
    """Owns the particle attribute arrays and the graph that drives them."""

    def __init__(self, graph: OscillatorGraph, handles: MotionHandles | None = None) -> None:
        self.graph = graph
        self.handles = handles if handles is not None else build_motion_graph(graph)
        count = graph.elements
        self.positions = np.zeros((count, 3), dtype=RAW_DTYPE)
        self.vervec = np.zeros((count, 2), dtype=RAW_DTYPE)
        self.colors = np.zeros((count, 4), dtype=RAW_DTYPE)
        self.update()

    @property
    def elements(self) -> int:
        return self.graph.elements

    def _column(self, handle: NodeHandle | None) -> np.ndarray:
        sample = self.graph.sample
        return np.fromiter(
            (sample(handle, el) for el in range(self.elements)),
            dtype=np.float64,
            count=self.elements,
        )

    def update(self) -> None:
        """Recompute every element's attributes from the current node values."""

        theta = np.deg2rad(self._column(self.handles.theta) / 100.0)
        rad = self._column(self.handles.rad) / 100.0
        cos_t = np.cos(theta)
        sin_t = np.sin(theta)

        self.positions[:, 0] = rad * cos_t
        self.positions[:, 1] = rad * sin_t
        self.positions[:, 2] = self._column(self.handles.alti) / 100.0

        # Quads grow with distance from the axis and stay aligned to it.
        size = (np.abs(rad) * 0.02 + 0.1) * 0.9
        self.vervec[:, 0] = size * cos_t
        self.vervec[:, 1] = size * sin_t

        hue = self._column(self.handles.color) / 10.0
        self.colors[:, :3] = hue_to_rgb(hue)
        self.colors[:, 3] = 1.0

    def frame(self) -> None:
        """Advance the graph one tick, then refresh the attribute arrays."""

        self.graph.advance()
        self.update()


__all__ = ["MotionHandles", "MotionLayer", "build_motion_graph", "hue_to_rgb"]
