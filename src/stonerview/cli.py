"""Command line entry point for the particle toy."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .state import DEFAULT_ELEMENTS, DEFAULT_FRAMES, DEFAULT_PHASES, FRAME_INTERVAL_MS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="StonerView oscillator engine (headless)")
    parser.add_argument(
        "--frames",
        type=int,
        default=DEFAULT_FRAMES,
        help="Number of frames to advance",
    )
    parser.add_argument(
        "--phases",
        type=int,
        default=DEFAULT_PHASES,
        help="Phase cardinality shared by phaser and multiplex nodes",
    )
    parser.add_argument(
        "--elements",
        type=int,
        default=DEFAULT_ELEMENTS,
        help="Particle count (also the delay-line length)",
    )
    parser.add_argument("--seed", type=int, help="Seed for a reproducible run")
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Pace frames to --interval-ms instead of running flat out",
    )
    parser.add_argument(
        "--interval-ms",
        type=float,
        default=FRAME_INTERVAL_MS,
        help="Milliseconds per frame when --realtime is set",
    )
    parser.add_argument(
        "--log-ticks",
        action="store_true",
        help="Append engine events (one line per tick) to logs/engine_ticks.log",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional CSV path for the per-frame statistics",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Print the node listing after the run",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from .application import StonerApplication
    from .config import build_configuration
    from .runner import run_headless

    try:
        config = build_configuration(
            engine={"phases": args.phases, "elements": args.elements, "seed": args.seed},
            runtime={
                "frames": args.frames,
                "frame_interval_ms": args.interval_ms,
                "realtime": args.realtime,
                "log_ticks": args.log_ticks,
            },
        )
    except ValueError as exc:
        parser.error(str(exc))

    app = StonerApplication.from_config(config)
    results = run_headless(app)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        results.to_csv(args.output, index=False)
    print(f"Rendered {len(results)} frames ({len(app.graph)} nodes, tick {app.graph.tick})")
    if args.summary:
        print(app.summary())
    return 0


__all__ = ["main", "build_parser"]
