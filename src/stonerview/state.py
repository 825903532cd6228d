"""Engine defaults and constants."""

from __future__ import annotations

import os

# =========================
# Graph cardinality
# =========================
DEFAULT_PHASES = 4
DEFAULT_ELEMENTS = 40

# =========================
# Frame pacing
# =========================
FRAME_INTERVAL_MS = 20
DEFAULT_FRAMES = 100

# =========================
# Particle attributes
# =========================
RAW_DTYPE = "float32"

# =========================
# Diagnostics
# =========================
LOG_DIR = os.path.join("logs")
TICK_LOG_FILE = os.path.join(LOG_DIR, "engine_ticks.log")


__all__ = [
    "DEFAULT_PHASES",
    "DEFAULT_ELEMENTS",
    "FRAME_INTERVAL_MS",
    "DEFAULT_FRAMES",
    "RAW_DTYPE",
    "LOG_DIR",
    "TICK_LOG_FILE",
]
