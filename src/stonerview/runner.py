"""Shared headless frame loop."""

from __future__ import annotations

import time

import numpy as np
import pandas as pd

from .application import StonerApplication
from .diagnostics import enable_engine_logging, engine_logging_enabled


def frame_statistics(app: StonerApplication) -> dict[str, float]:
    """Summarise the current particle field as one flat row."""

    motion = app.motion
    positions = motion.positions.astype(np.float64)
    colors = motion.colors.astype(np.float64)
    radius = np.hypot(positions[:, 0], positions[:, 1])
    return {
        "tick": app.graph.tick,
        "mean_x": float(positions[:, 0].mean()),
        "mean_y": float(positions[:, 1].mean()),
        "mean_z": float(positions[:, 2].mean()),
        "mean_radius": float(radius.mean()),
        "mean_r": float(colors[:, 0].mean()),
        "mean_g": float(colors[:, 1].mean()),
        "mean_b": float(colors[:, 2].mean()),
    }


def run_headless(app: StonerApplication, frames: int | None = None) -> pd.DataFrame:
    """
    Step ``app`` for ``frames`` frames and collect per-frame statistics.
    Frame count defaults to the runtime configuration. When the runtime is
    ``realtime`` each frame is padded to ``frame_interval_ms``.
    Returns a pandas DataFrame with one row per frame.
    """
    runtime = app.config.runtime
    frame_count = runtime.frames if frames is None else int(frames)
    interval = runtime.frame_interval_ms / 1000.0

    previous_logging = engine_logging_enabled()
    if runtime.log_ticks:
        enable_engine_logging(True)
    rows = []
    try:
        for i in range(frame_count):
            start_time = time.perf_counter()
            app.frame()
            end_time = time.perf_counter()
            row = frame_statistics(app)
            row["frame"] = i
            row["render_duration"] = end_time - start_time
            rows.append(row)
            if runtime.realtime:
                remaining = interval - (time.perf_counter() - start_time)
                if remaining > 0:
                    time.sleep(remaining)
    finally:
        enable_engine_logging(previous_logging)
    columns = [
        "frame",
        "tick",
        "mean_x",
        "mean_y",
        "mean_z",
        "mean_radius",
        "mean_r",
        "mean_g",
        "mean_b",
        "render_duration",
    ]
    return pd.DataFrame(rows, columns=columns)


__all__ = ["frame_statistics", "run_headless"]
