"""
Initializer Module

Seeds every point of a coarse subdivision level before lazy generation.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import structlog

from .grid import GridStore
from .random_field import RandomField, default_field
from .validation import AlreadyInitializedError, validate_level

logger = structlog.get_logger(__name__)


class InitMode(Enum):
    """How the pre-seeded level gets its heights."""
    SEED = "seed"            # Random field at level 0 amplitude
    FIXED_VALUE = "fixed"    # Same constant everywhere


def init(
    grid: GridStore,
    level: int = 0,
    mode: InitMode = InitMode.SEED,
    value: float = 0.0,
    field: Optional[RandomField] = None,
) -> int:
    """
    Resolve every unresolved point on the sub-grid of `level`.

    Choosing level > 0 pre-seeds a finer starting grid with independent
    values, which skips the coarsest random octaves.

    A grid is initialized once: repeating the call at the same level is
    a no-op and any other level raises.

    Args:
        grid: Store to seed
        level: Subdivision level to seed (0 = corners only)
        mode: InitMode.SEED or InitMode.FIXED_VALUE
        value: Constant used by FIXED_VALUE
        field: Random field used by SEED (default: HashRandomField)

    Returns:
        Number of cells newly resolved (0 on a repeated call)

    Raises:
        ValidationError: If level is outside 0..grid.levels
        AlreadyInitializedError: If the grid was initialized at another level
    """
    level = validate_level(level, grid.levels, "init level")
    if grid.init_level is not None and level != grid.init_level:
        raise AlreadyInitializedError(
            f"Grid is already initialized at level {grid.init_level}; "
            f"cannot re-initialize at level {level}."
        )
    mode = InitMode(mode)
    field = default_field(field)

    step = grid.step(level)
    amplitude = grid.amplitude(0)
    written = 0

    for y in range(0, grid.size, step):
        for x in range(0, grid.size, step):
            if grid.is_resolved(x, y):
                continue
            if mode is InitMode.SEED:
                h = field.offset(grid.seed, x, y, 0) * amplitude
            else:
                h = float(value)
            grid.set(x, y, h)
            written += 1

    grid.init_level = level

    logger.debug("grid initialized", level=level, mode=mode.value, cells=written)
    return written
