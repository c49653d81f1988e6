"""
Shared pytest fixtures and configuration for lazy_diamond_square tests.
"""

from collections import Counter

import pytest
import structlog

from lazy_diamond_square.core.random_field import RandomField


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture(autouse=True)
def reset_structlog():
    """CLI commands reconfigure structlog; restore defaults after every test."""
    yield
    structlog.reset_defaults()


class CountingField(RandomField):
    """Zero-displacement field that records how often each cell is computed."""

    def __init__(self):
        self.calls = Counter()

    def offset(self, seed, x, y, level):
        self.calls[(x, y)] += 1
        return 0.0


@pytest.fixture
def zero_field():
    """Degenerate field: pure averaging, no noise."""
    from lazy_diamond_square.core.random_field import ConstantField

    return ConstantField(0.0)


@pytest.fixture
def counting_field():
    return CountingField()


@pytest.fixture
def corner_grid():
    """
    5x5 grid with distinct corner heights, initialized at level 0.

    (0,0)=0, (4,0)=4, (0,4)=8, (4,4)=12
    """
    from lazy_diamond_square.core.grid import GridStore
    from lazy_diamond_square.core.initializer import InitMode, init

    grid = GridStore(5, 0.5, seed=1)
    grid.set(0, 0, 0.0)
    grid.set(4, 0, 4.0)
    grid.set(0, 4, 8.0)
    grid.set(4, 4, 12.0)
    init(grid, 0, InitMode.FIXED_VALUE, value=99.0)
    return grid


@pytest.fixture
def sample_map():
    """Small seeded height map for fast tests."""
    from lazy_diamond_square.core.heightmap import HeightMap

    return HeightMap.create(33, 0.6, seed="qwerty")


@pytest.fixture
def cli_runner():
    """Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
