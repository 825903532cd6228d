"""Oscillator graph: node registry, construction, evaluation and stepping."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .diagnostics import log_engine_event
from .nodes import (
    NODE_TYPES,
    BounceNode,
    BufferNode,
    ConstantNode,
    LinearNode,
    MultiplexNode,
    Node,
    NodeHandle,
    PhaserNode,
    RandPhaserNode,
    VeloWrapNode,
    WrapNode,
)
from .state import DEFAULT_ELEMENTS, DEFAULT_PHASES
from .utils import NumpyRandomSource, RandomSource


class OscillatorGraph:
    """Append-only arena of oscillator nodes advanced one tick at a time.

    Handles are registry positions. A node may only reference handles that
    were registered before it, which makes registry order a valid dependency
    order: a single front-to-back pass in :meth:`advance` updates every source
    before any node that reads it during the same tick.

    Parameters
    ----------
    phases:
        Phase cardinality shared by every phaser and multiplex node.
    elements:
        Element (particle) count; also the ring length of buffer nodes.
    rng:
        Random source used for starting states and randphaser dwell times.
        Defaults to an unseeded :class:`NumpyRandomSource`.
    max_nodes:
        Optional capacity. Once reached, construction returns ``None``.
    """

    def __init__(
        self,
        phases: int = DEFAULT_PHASES,
        elements: int = DEFAULT_ELEMENTS,
        *,
        rng: RandomSource | None = None,
        max_nodes: int | None = None,
    ) -> None:
        self.phases = int(phases)
        self.elements = int(elements)
        self.rng: RandomSource = rng if rng is not None else NumpyRandomSource()
        self.max_nodes = None if max_nodes is None else int(max_nodes)
        self.tick = 0
        self._nodes: List[Node] = []

    @classmethod
    def from_config(cls, config, *, rng: RandomSource | None = None) -> "OscillatorGraph":
        """Build an empty graph from an :class:`~stonerview.config.EngineConfig`."""

        if rng is None:
            rng = NumpyRandomSource(config.seed)
        return cls(
            config.phases,
            config.elements,
            rng=rng,
            max_nodes=config.max_nodes,
        )

    # =========================
    # Registry
    # =========================

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, int) and 0 <= handle < len(self._nodes)

    @property
    def ordered_nodes(self) -> Sequence[Node]:
        return tuple(self._nodes)

    def node(self, handle: NodeHandle) -> Node:
        if handle not in self:
            raise KeyError(f"Unknown node handle {handle!r}")
        return self._nodes[handle]

    def upstream(self, handle: NodeHandle) -> Tuple[NodeHandle | None, ...]:
        """Return the handles ``handle`` reads from, as recorded at construction."""

        return self.node(handle).upstream

    def _check_upstream(self, node: Node) -> None:
        own = len(self._nodes)
        for ref in node.upstream:
            if ref is None:
                continue
            if isinstance(ref, bool) or not isinstance(ref, int):
                raise ValueError(
                    f"{node.type_name}: upstream handle must be an int or None, got {ref!r}"
                )
            if not 0 <= ref < own:
                raise ValueError(
                    f"{node.type_name}: upstream handle {ref} must precede handle {own}"
                )

    def add_node(self, node: Node) -> NodeHandle | None:
        """Register ``node`` and return its handle.

        Returns ``None`` when the graph is at capacity; the node is left
        unprimed and no random draw is consumed.
        """

        self._check_upstream(node)
        if self.max_nodes is not None and len(self._nodes) >= self.max_nodes:
            log_engine_event(
                f"tick={self.tick} refused {node.type_name}: capacity {self.max_nodes} reached"
            )
            return None
        node.prime(self)
        handle = len(self._nodes)
        node.handle = handle
        self._nodes.append(node)
        return handle

    def create(self, type_name: str, *args) -> NodeHandle | None:
        """Construct a node by registered type name, e.g. ``create("wrap", 0, 10, 3)``."""

        try:
            node_cls = NODE_TYPES[type_name.lower()]
        except KeyError as exc:
            raise KeyError(f"Unknown node type '{type_name}'") from exc
        return self.add_node(node_cls(*args))

    def reset(self) -> None:
        """Drop every node and restart the tick counter. The random source is kept."""

        dropped = len(self._nodes)
        self._nodes.clear()
        self.tick = 0
        log_engine_event(f"reset dropped={dropped}")

    # =========================
    # Construction
    # =========================

    def new_constant(self, value: int) -> NodeHandle | None:
        return self.add_node(ConstantNode(value))

    def new_bounce(self, low: int, high: int, step: int) -> NodeHandle | None:
        return self.add_node(BounceNode(low, high, step))

    def new_wrap(self, low: int, high: int, step: int) -> NodeHandle | None:
        return self.add_node(WrapNode(low, high, step))

    def new_velowrap(self, low: int, high: int, velocity: NodeHandle | None) -> NodeHandle | None:
        return self.add_node(VeloWrapNode(low, high, velocity))

    def new_multiplex(
        self,
        selector: NodeHandle | None,
        option0: NodeHandle | None,
        option1: NodeHandle | None,
        option2: NodeHandle | None,
        option3: NodeHandle | None,
    ) -> NodeHandle | None:
        return self.add_node(MultiplexNode(selector, option0, option1, option2, option3))

    def new_phaser(self, phase_length: int) -> NodeHandle | None:
        return self.add_node(PhaserNode(phase_length))

    def new_randphaser(self, min_length: int, max_length: int) -> NodeHandle | None:
        return self.add_node(RandPhaserNode(min_length, max_length))

    def new_linear(self, base: NodeHandle | None, slope: NodeHandle | None) -> NodeHandle | None:
        return self.add_node(LinearNode(base, slope))

    def new_buffer(self, source: NodeHandle | None) -> NodeHandle | None:
        return self.add_node(BufferNode(source))

    # =========================
    # Evaluation / stepping
    # =========================

    def sample(self, handle: NodeHandle | None, el: int) -> int:
        """Return the value of ``handle`` for element index ``el``.

        Absent handles (``None``, or one dropped by :meth:`reset`) read as 0.
        """

        if handle is None or handle not in self:
            return 0
        return self._nodes[handle].sample(self, el)

    def advance(self) -> None:
        """Advance every node by one tick, in registry order."""

        for node in self._nodes:
            node.step(self)
        self.tick += 1
        log_engine_event(f"tick={self.tick} nodes={len(self._nodes)}")

    def summary(self) -> str:
        lines = [
            f"Phases: {self.phases}",
            f"Elements: {self.elements}",
            f"Tick: {self.tick}",
            f"Nodes ({len(self._nodes)}):",
        ]
        for node in self._nodes:
            lines.append(f"  - #{node.handle} {node.describe()}")
        return "\n".join(lines)


__all__ = ["OscillatorGraph"]
