"""Oscillator-network engine for the StonerView particle toy."""

from __future__ import annotations

from .application import StonerApplication
from .graph import OscillatorGraph
from .utils import NumpyRandomSource, ScriptedRandomSource

__all__ = ["OscillatorGraph", "StonerApplication", "NumpyRandomSource", "ScriptedRandomSource"]
