# nodes.py
from __future__ import annotations

from typing import TYPE_CHECKING

from .utils import trunc_div

if TYPE_CHECKING:  # pragma: no cover
    from .graph import OscillatorGraph

NodeHandle = int


# =========================
# Oscillator nodes
# =========================
#
# Nodes never hold references to other nodes, only handles (registry
# positions). The graph resolves handles on every read so a node can be
# mutated by the stepper while other nodes are sampled through it.
#
# Construction is split in two: ``__init__`` stores the fixed parameters and
# ``prime`` picks the starting state. The graph calls ``prime`` only once the
# node has been accepted for registration, so a refused node consumes no
# random draws.
class Node:
    """Base class for every signal generator in an :class:`OscillatorGraph`."""

    __slots__ = ("handle",)

    type_name = "node"
    _fields: tuple[str, ...] = ()

    def __init__(self) -> None:
        self.handle: NodeHandle | None = None

    @property
    def upstream(self) -> tuple[NodeHandle | None, ...]:
        """Handles this node reads from, in declaration order."""

        return ()

    def prime(self, graph: "OscillatorGraph") -> None:
        """Pick the starting state. Called once, before registration."""

    def sample(self, graph: "OscillatorGraph", el: int) -> int:
        raise NotImplementedError

    def step(self, graph: "OscillatorGraph") -> None:
        """Advance mutable state by one tick. Stateless nodes do nothing."""

    def describe(self) -> str:
        args = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{self.type_name}({args})"

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} #{self.handle} {self.describe()}>"


class ConstantNode(Node):
    __slots__ = ("value",)

    type_name = "constant"
    _fields = ("value",)

    def __init__(self, value: int) -> None:
        super().__init__()
        self.value = int(value)

    def sample(self, graph, el):
        return self.value


class _SteppedRangeNode(Node):
    """Shared storage for the bounded, fixed-step oscillators."""

    __slots__ = ("low", "high", "step_size", "value")

    _fields = ("low", "high", "step_size", "value")

    def __init__(self, low: int, high: int, step: int) -> None:
        super().__init__()
        self.low = int(low)
        self.high = int(high)
        self.step_size = int(step)
        self.value = self.low

    def prime(self, graph):
        # Start on the step lattice anchored at ``low``.
        stride = abs(self.step_size)
        slots = trunc_div(self.high - self.low, stride)
        self.value = self.low + stride * graph.rng.rand_range(0, slots - 1)

    def sample(self, graph, el):
        return self.value


class BounceNode(_SteppedRangeNode):
    """Ping-pong between ``low`` and ``high``, mirroring at each bound."""

    __slots__ = ()

    type_name = "bounce"

    def step(self, graph):
        self.value += self.step_size
        if self.value < self.low and self.step_size < 0:
            self.step_size = -self.step_size
            self.value = self.low + (self.low - self.value)
        if self.value > self.high and self.step_size > 0:
            self.step_size = -self.step_size
            self.value = self.high + (self.high - self.value)


class WrapNode(_SteppedRangeNode):
    """Sawtooth over ``[low, high]``: leaving one side re-enters at the other."""

    __slots__ = ()

    type_name = "wrap"

    def step(self, graph):
        self.value += self.step_size
        if self.value < self.low and self.step_size < 0:
            self.value += self.high - self.low
        if self.value > self.high and self.step_size > 0:
            self.value -= self.high - self.low


class VeloWrapNode(Node):
    """Wrapping accumulator whose per-tick increment is read from another node."""

    __slots__ = ("low", "high", "velocity", "value")

    type_name = "velowrap"
    _fields = ("low", "high", "velocity", "value")

    def __init__(self, low: int, high: int, velocity: NodeHandle | None) -> None:
        super().__init__()
        self.low = int(low)
        self.high = int(high)
        self.velocity = velocity
        self.value = self.low

    @property
    def upstream(self):
        return (self.velocity,)

    def prime(self, graph):
        self.value = graph.rng.rand_range(self.low, self.high)

    def sample(self, graph, el):
        return self.value

    def step(self, graph):
        span = self.high - self.low
        self.value += graph.sample(self.velocity, 0)
        # A velocity wider than the range may need several wraps in one tick.
        while self.value < self.low:
            self.value += span
        while self.value > self.high:
            self.value -= span


class MultiplexNode(Node):
    """Route each read to one of four option nodes picked by ``selector``."""

    __slots__ = ("selector", "options")

    type_name = "multiplex"
    _fields = ("selector", "options")

    def __init__(
        self,
        selector: NodeHandle | None,
        option0: NodeHandle | None,
        option1: NodeHandle | None,
        option2: NodeHandle | None,
        option3: NodeHandle | None,
    ) -> None:
        super().__init__()
        self.selector = selector
        self.options = (option0, option1, option2, option3)

    @property
    def upstream(self):
        return (self.selector,) + self.options

    def sample(self, graph, el):
        index = graph.sample(self.selector, el) % graph.phases
        if index >= len(self.options):
            return 0
        return graph.sample(self.options[index], el)


class PhaserNode(Node):
    __slots__ = ("phase_length", "count", "phase")

    type_name = "phaser"
    _fields = ("phase_length", "count", "phase")

    def __init__(self, phase_length: int) -> None:
        super().__init__()
        self.phase_length = int(phase_length)
        self.count = 0
        self.phase = 0

    def prime(self, graph):
        self.count = 0
        self.phase = graph.rng.rand_range(0, graph.phases - 1)

    def sample(self, graph, el):
        return self.phase

    def step(self, graph):
        self.count += 1
        if self.count >= self.phase_length:
            self.count = 0
            self.phase += 1
            if self.phase >= graph.phases:
                self.phase = 0


class RandPhaserNode(Node):
    """Phaser whose dwell time is redrawn from ``[min_length, max_length]`` each phase."""

    __slots__ = ("min_length", "max_length", "phase_length", "count", "phase")

    type_name = "randphaser"
    _fields = ("min_length", "max_length", "phase_length", "count", "phase")

    def __init__(self, min_length: int, max_length: int) -> None:
        super().__init__()
        self.min_length = int(min_length)
        self.max_length = int(max_length)
        self.phase_length = self.min_length
        self.count = 0
        self.phase = 0

    def prime(self, graph):
        self.count = 0
        self.phase_length = graph.rng.rand_range(self.min_length, self.max_length)
        self.phase = graph.rng.rand_range(0, graph.phases - 1)

    def sample(self, graph, el):
        return self.phase

    def step(self, graph):
        self.count += 1
        if self.count >= self.phase_length:
            self.count = 0
            self.phase_length = graph.rng.rand_range(self.min_length, self.max_length)
            self.phase += 1
            if self.phase >= graph.phases:
                self.phase = 0


class LinearNode(Node):
    """``base + el * slope``: spreads two scalar nodes across element indices."""

    __slots__ = ("base", "slope")

    type_name = "linear"
    _fields = ("base", "slope")

    def __init__(self, base: NodeHandle | None, slope: NodeHandle | None) -> None:
        super().__init__()
        self.base = base
        self.slope = slope

    @property
    def upstream(self):
        return (self.base, self.slope)

    def sample(self, graph, el):
        return graph.sample(self.base, el) + el * graph.sample(self.slope, el)


class BufferNode(Node):
    """Delay line: element index ``k`` reads the source as it was ``k`` ticks ago."""

    __slots__ = ("source", "ring", "head")

    type_name = "buffer"
    _fields = ("source", "head")

    def __init__(self, source: NodeHandle | None) -> None:
        super().__init__()
        self.source = source
        self.ring: list[int] = []
        self.head = 0

    @property
    def upstream(self):
        return (self.source,)

    def prime(self, graph):
        current = graph.sample(self.source, 0)
        self.ring = [current] * graph.elements
        self.head = graph.elements - 1

    def sample(self, graph, el):
        return self.ring[(self.head + el) % len(self.ring)]

    def step(self, graph):
        # The source precedes this node in the registry, so it already holds
        # this tick's value.
        self.head = (self.head - 1) % len(self.ring)
        self.ring[self.head] = graph.sample(self.source, 0)


NODE_TYPES = {
    "constant": ConstantNode,
    "bounce": BounceNode,
    "wrap": WrapNode,
    "velowrap": VeloWrapNode,
    "multiplex": MultiplexNode,
    "phaser": PhaserNode,
    "randphaser": RandPhaserNode,
    "linear": LinearNode,
    "buffer": BufferNode,
}


__all__ = [
    "NODE_TYPES",
    "NodeHandle",
    "Node",
    "ConstantNode",
    "BounceNode",
    "WrapNode",
    "VeloWrapNode",
    "MultiplexNode",
    "PhaserNode",
    "RandPhaserNode",
    "LinearNode",
    "BufferNode",
]
