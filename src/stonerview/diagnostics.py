"""Runtime diagnostics helpers for optional engine trace logging."""
from __future__ import annotations

import threading
from pathlib import Path

from .state import TICK_LOG_FILE

__all__ = [
    "enable_engine_logging",
    "engine_logging_enabled",
    "log_engine_event",
    "set_log_path",
    "log_path",
]


_LOG_ENGINE = False
_LOG_PATH = Path(TICK_LOG_FILE)
_LOG_LOCK = threading.Lock()


def enable_engine_logging(enabled: bool) -> None:
    """Enable or disable engine trace logging."""

    global _LOG_ENGINE
    _LOG_ENGINE = bool(enabled)


def engine_logging_enabled() -> bool:
    """Return ``True`` when engine trace logging is enabled."""

    return _LOG_ENGINE


def set_log_path(path: str | Path) -> None:
    """Redirect the engine log to ``path``."""

    global _LOG_PATH
    _LOG_PATH = Path(path)


def log_path() -> Path:
    return _LOG_PATH


def log_engine_event(message: str) -> None:
    """Append ``message`` to the engine log when logging is enabled."""

    if not _LOG_ENGINE:
        return
    try:
        _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    except OSError:
        return
    try:
        with _LOG_LOCK:
            with _LOG_PATH.open("a", encoding="utf-8") as handle:
                handle.write(f"{message}\n")
    except OSError:
        return
