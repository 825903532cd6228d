"""Package surface tests."""

import importlib
import importlib.util

import pytest


def test_engine_exposed():
    """The package should expose the graph and application at top level."""

    stonerview = importlib.import_module("stonerview")
    assert hasattr(stonerview, "OscillatorGraph")
    assert hasattr(stonerview, "StonerApplication")


@pytest.mark.parametrize(
    "module", ["application", "cli", "config", "diagnostics", "graph", "motion", "nodes", "runner"]
)
def test_modules_reside_in_stonerview(module: str):
    spec = importlib.util.find_spec(f"stonerview.{module}")
    assert spec is not None, f"stonerview.{module} should be importable"


def test_node_types_cover_every_variant():
    from stonerview.nodes import NODE_TYPES

    assert set(NODE_TYPES) == {
        "constant",
        "bounce",
        "wrap",
        "velowrap",
        "multiplex",
        "phaser",
        "randphaser",
        "linear",
        "buffer",
    }
