"""
Grid Store Module

Square (2^n + 1) buffer of heights with an explicit resolved mask.
Cells are write-once: a height is never overwritten or cleared.
"""

from __future__ import annotations

from typing import List, Optional, Tuple
import numpy as np

from .random_field import SeedLike, normalize_seed
from .validation import (
    AlreadyResolvedError,
    validate_coordinate,
    validate_level,
    validate_roughness,
    validate_size,
)


def _trailing_zeros(value: int, limit: int) -> int:
    """Number of trailing zero bits of value, capped at limit (0 counts as limit)."""
    if value == 0:
        return limit
    return min((value & -value).bit_length() - 1, limit)


def level_of(x: int, y: int, levels: int) -> int:
    """Coarsest level whose sub-grid contains (x, y) on a 2^levels + 1 grid."""
    return levels - min(_trailing_zeros(x, levels), _trailing_zeros(y, levels))


class GridStore:
    """
    Sparse-capable square height grid.

    Attributes:
        size: Side length (2^n + 1)
        roughness: Per-level decay factor of the random displacement
        seed: Normalized 64-bit seed
        init_level: Level seeded by the Initializer, or None before init
    """

    def __init__(self, size: int, roughness: float, seed: SeedLike = None):
        self.size = validate_size(size)
        self.roughness = validate_roughness(roughness)
        self.seed = normalize_seed(seed)
        self.levels = (self.size - 1).bit_length() - 1
        self.init_level: Optional[int] = None

        self._heights = np.zeros((self.size, self.size), dtype=np.float64)
        self._resolved = np.zeros((self.size, self.size), dtype=bool)

    def __repr__(self) -> str:
        return (f"GridStore(size={self.size}, roughness={self.roughness}, "
                f"seed={self.seed}, resolved={self.resolved_count})")

    def max_coord(self) -> int:
        return self.size - 1

    @property
    def resolved_count(self) -> int:
        """Number of cells holding a height."""
        return int(np.count_nonzero(self._resolved))

    @property
    def total_cells(self) -> int:
        return self.size * self.size

    def is_resolved(self, x: int, y: int) -> bool:
        x, y = validate_coordinate(x, y, self.max_coord())
        return bool(self._resolved[y, x])

    def get(self, x: int, y: int) -> Optional[float]:
        """Return the height at (x, y), or None if unresolved. Never computes."""
        x, y = validate_coordinate(x, y, self.max_coord())
        if not self._resolved[y, x]:
            return None
        return float(self._heights[y, x])

    def set(self, x: int, y: int, value: float) -> None:
        """
        Store a height at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) is off the grid
            AlreadyResolvedError: If the cell already holds a height
        """
        x, y = validate_coordinate(x, y, self.max_coord())
        if self._resolved[y, x]:
            raise AlreadyResolvedError(
                f"Cell ({x}, {y}) is already resolved to {self._heights[y, x]!r}; "
                "resolved heights are immutable."
            )
        self._heights[y, x] = value
        self._resolved[y, x] = True

    def step(self, level: int) -> int:
        """Spacing of the level's sub-grid (max_coord at level 0, 1 at the finest)."""
        level = validate_level(level, self.levels)
        return 1 << (self.levels - level)

    def level_of(self, x: int, y: int) -> int:
        """Coarsest level whose sub-grid contains (x, y)."""
        x, y = validate_coordinate(x, y, self.max_coord())
        return level_of(x, y, self.levels)

    def amplitude(self, level: int) -> float:
        """Scale of the displacement at a level: roughness^level * max_coord."""
        return self.roughness ** level * self.max_coord()

    def to_array(self, fill: float = np.nan) -> np.ndarray:
        """Copy of the grid as a [y, x] array with unresolved cells set to fill."""
        return np.where(self._resolved, self._heights, fill)

    def get_area(
        self,
        corner_a: Tuple[int, int],
        corner_b: Tuple[int, int],
        fill: float = np.nan,
    ) -> np.ndarray:
        """Inclusive sub-rectangle of to_array(); nothing is computed."""
        (x0, y0), (x1, y1) = self.normalize_rect(corner_a, corner_b)
        area = self._heights[y0:y1 + 1, x0:x1 + 1]
        mask = self._resolved[y0:y1 + 1, x0:x1 + 1]
        return np.where(mask, area, fill)

    def resolved_mask(self) -> np.ndarray:
        """Copy of the [y, x] boolean resolved mask."""
        return self._resolved.copy()

    def resolved_view(self) -> np.ndarray:
        """Read-only view of the resolved mask; later writes show through."""
        view = self._resolved.view()
        view.flags.writeable = False
        return view

    def unresolved_in(
        self,
        corner_a: Tuple[int, int],
        corner_b: Tuple[int, int],
    ) -> List[Tuple[int, int]]:
        """(x, y) of every unresolved cell in the inclusive rectangle."""
        (x0, y0), (x1, y1) = self.normalize_rect(corner_a, corner_b)
        rows, cols = np.nonzero(~self._resolved[y0:y1 + 1, x0:x1 + 1])
        return [(int(c) + x0, int(r) + y0) for r, c in zip(rows, cols)]

    def normalize_rect(
        self,
        corner_a: Tuple[int, int],
        corner_b: Tuple[int, int],
    ) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Validate two corners and return them as (min corner, max corner)."""
        max_coord = self.max_coord()
        ax, ay = validate_coordinate(corner_a[0], corner_a[1], max_coord)
        bx, by = validate_coordinate(corner_b[0], corner_b[1], max_coord)
        return (min(ax, bx), min(ay, by)), (max(ax, bx), max(ay, by))
