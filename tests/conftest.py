"""
Pytest configuration and shared fixtures.

The ``geo`` module used across the tests has two struct types, one of which
embeds the other, constructors, plain functions and a few constants.
"""

import copy
import sys

import pytest
from loguru import logger

from bindmodel.analyzer import AnalysisConfig, analyze_package
from bindmodel.analyzer.loader import build_module

GEO = {
    "name": "geo",
    "doc": "Package geo provides planar geometry.",
    "consts": [
        {
            "name": "Epsilon",
            "type": "float64",
            "value": "1e-9",
            "doc": "Epsilon is the comparison tolerance.",
        },
        {"names": ["North", "South"], "type": "int", "doc": "Compass directions."},
        {"name": "hidden", "type": "int"},
    ],
    "vars": [{"name": "Verbose", "type": "bool", "doc": "Verbose enables tracing."}],
    "types": [
        {
            "name": "Base",
            "doc": "Base carries an identifier.",
            "struct": [
                {"name": "ID", "type": "int"},
                {"name": "tag", "type": "string"},
            ],
            "methods": [
                {
                    "name": "Describe",
                    "recv": "b",
                    "pointer": True,
                    "results": ["string"],
                    "doc": "Describe returns a label.",
                },
                {"name": "reset", "recv": "b", "pointer": True},
            ],
        },
        {
            "name": "Point",
            "doc": "Point is a location in the plane.",
            "struct": [
                {"type": "Base", "embedded": True},
                {"name": "X", "type": "int"},
                {"name": "Y", "type": "int"},
            ],
            "methods": [
                {
                    "name": "String",
                    "recv": "p",
                    "results": ["string"],
                    "doc": "String formats the point.",
                },
                {
                    "name": "Scale",
                    "recv": "p",
                    "pointer": True,
                    "params": ["f float64"],
                },
                {"name": "norm", "recv": "p", "results": ["float64"]},
            ],
        },
    ],
    "funcs": [
        {
            "name": "NewPoint",
            "params": ["x int", "y int"],
            "results": ["Point"],
            "doc": "NewPoint returns a point.",
        },
        {"name": "Origin", "results": ["Point"]},
        {"name": "NewBase", "results": ["*Base"], "doc": "NewBase allocates a Base."},
        {
            "name": "Divide",
            "params": ["a int", "b int"],
            "results": ["int", "error"],
            "doc": "Divide divides a by b.",
        },
        {"name": "Validate", "params": ["s string"], "results": ["error"]},
        {"name": "Ping"},
        {"name": "helper", "results": ["int"]},
    ],
}


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "gold: mark test as a gold file test")


@pytest.fixture(autouse=True)
def reset_logger():
    """Restore the default loguru sink after tests that reconfigure it."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def geo_description():
    """Fixture providing a fresh copy of the geo module description."""
    return copy.deepcopy(GEO)


@pytest.fixture
def geo(geo_description):
    """Fixture providing the geo module scope and doc tree."""
    return build_module(geo_description)


@pytest.fixture
def trace_lines():
    """Fixture collecting lines emitted to the trace sink."""
    return []


@pytest.fixture
def geo_model(geo, trace_lines):
    """Fixture providing the analyzed geo model."""
    pkg, doc = geo
    return analyze_package(
        pkg, doc, config=AnalysisConfig(), trace=trace_lines.append
    )
