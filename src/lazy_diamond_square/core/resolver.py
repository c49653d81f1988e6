"""
Lazy Resolver Module

Diamond-square subdivision evaluated on demand. A request for a
rectangle plans the exact set of cells it depends on (finest level to
coarsest), then computes them coarsest first. Cells already resolved by
the initializer or an earlier request are reused, never recomputed.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Set, Tuple

import structlog

from .grid import GridStore, level_of
from .random_field import RandomField, default_field
from .validation import NotInitializedError

logger = structlog.get_logger(__name__)

Cell = Tuple[int, int]
HeightTransform = Callable[[int, int, float], float]
RoughnessFn = Callable[[int, int, int, float], float]


def is_square_cell(x: int, y: int, half: int) -> bool:
    """True for centres of coarser squares, False for edge midpoints."""
    return bool((x // half) & 1 and (y // half) & 1)


def parents(x: int, y: int, level: int, levels: int) -> List[Cell]:
    """
    Cells averaged to compute (x, y) at `level`, in a fixed order.

    Square cells use the four diagonal corners of the coarser square.
    Diamond cells use the orthogonal neighbours at half-step distance
    that lie on the grid: four inside, three on the boundary.
    """
    half = 1 << (levels - level)
    max_coord = 1 << levels

    if is_square_cell(x, y, half):
        return [
            (x - half, y - half),
            (x + half, y - half),
            (x - half, y + half),
            (x + half, y + half),
        ]

    candidates = [
        (x, y - half),
        (x + half, y),
        (x, y + half),
        (x - half, y),
    ]
    return [
        (cx, cy) for cx, cy in candidates
        if 0 <= cx <= max_coord and 0 <= cy <= max_coord
    ]


class LazyResolver:
    """
    Resolves rectangles of a GridStore on demand.

    Attributes:
        field: Source of per-cell displacement
        height_transform: Optional pure hook applied to every computed height
        roughness_fn: Optional pure hook returning the roughness used at
            (x, y, level) given the grid roughness
    """

    def __init__(
        self,
        field: Optional[RandomField] = None,
        height_transform: Optional[HeightTransform] = None,
        roughness_fn: Optional[RoughnessFn] = None,
    ):
        self.field = default_field(field)
        self.height_transform = height_transform
        self.roughness_fn = roughness_fn

    def required_cells(
        self,
        grid: GridStore,
        corner_a: Cell,
        corner_b: Cell,
    ) -> List[List[Cell]]:
        """
        Plan the cells a rectangle needs, without writing anything.

        Returns:
            One list per level (index = level). Each list holds the
            level's square cells followed by its diamond cells, which is
            the order they must be computed in.

        Raises:
            OutOfBoundsError: If either corner is off the grid
            NotInitializedError: If the grid has not been initialized
        """
        (x0, y0), (x1, y1) = grid.normalize_rect(corner_a, corner_b)

        if grid.init_level is None:
            raise NotInitializedError(
                "Grid has no seeded base level. Run the initializer "
                "before generating areas."
            )

        levels = grid.levels
        resolved = grid.resolved_view()
        pending: List[Set[Cell]] = [set() for _ in range(levels + 1)]

        for x, y in grid.unresolved_in((x0, y0), (x1, y1)):
            pending[level_of(x, y, levels)].add((x, y))

        plan: List[List[Cell]] = [[] for _ in range(levels + 1)]

        for level in range(levels, 0, -1):
            half = 1 << (levels - level)
            cells = pending[level]

            # Diamonds first: their same-level square parents join this level
            diamonds = sorted(c for c in cells if not is_square_cell(c[0], c[1], half))
            for x, y in diamonds:
                self._require(parents(x, y, level, levels), resolved, pending, levels)

            squares = sorted(c for c in cells if is_square_cell(c[0], c[1], half))
            for x, y in squares:
                self._require(parents(x, y, level, levels), resolved, pending, levels)

            plan[level] = squares + diamonds

        if pending[0]:
            # Only reachable if corners were never seeded
            raise NotInitializedError(
                f"{len(pending[0])} grid corner(s) are unresolved. "
                "Run the initializer before generating areas."
            )

        return plan

    @staticmethod
    def _require(
        cells: List[Cell],
        resolved,
        pending: List[Set[Cell]],
        levels: int,
    ) -> None:
        for x, y in cells:
            if not resolved[y, x]:
                pending[level_of(x, y, levels)].add((x, y))

    def generate_area(
        self,
        grid: GridStore,
        corner_a: Cell,
        corner_b: Cell,
    ) -> int:
        """
        Resolve every cell in the inclusive rectangle plus its ancestors.

        Corners may be given in any order. Cells already resolved are
        left untouched, so repeated or overlapping requests are no-ops
        for the overlap.

        Returns:
            Number of cells newly computed

        Raises:
            OutOfBoundsError: If either corner is off the grid
            NotInitializedError: If the grid has not been initialized
        """
        plan = self.required_cells(grid, corner_a, corner_b)
        computed = 0

        for level, cells in enumerate(plan):
            if not cells:
                continue
            amplitude = grid.amplitude(level)
            for x, y in cells:
                if grid.is_resolved(x, y):
                    continue
                grid.set(x, y, self._height(grid, x, y, level, amplitude))
                computed += 1
            logger.debug("level resolved", level=level, cells=len(cells))

        logger.debug(
            "area generated",
            corner_a=tuple(corner_a),
            corner_b=tuple(corner_b),
            computed=computed,
        )
        return computed

    def _height(self, grid: GridStore, x: int, y: int, level: int, amplitude: float) -> float:
        values = [grid.get(px, py) for px, py in parents(x, y, level, grid.levels)]
        h = sum(values) / len(values)
        if self.roughness_fn is not None:
            roughness = float(self.roughness_fn(x, y, level, grid.roughness))
            amplitude = roughness ** level * grid.max_coord()
        h += self.field.offset(grid.seed, x, y, level) * amplitude
        if self.height_transform is not None:
            h = float(self.height_transform(x, y, h))
        return h

    def generate_point(self, grid: GridStore, x: int, y: int) -> float:
        """Resolve a single cell (and its ancestors) and return its height."""
        self.generate_area(grid, (x, y), (x, y))
        return grid.get(x, y)

    def generate_all(self, grid: GridStore) -> int:
        """Resolve the whole grid."""
        max_coord = grid.max_coord()
        return self.generate_area(grid, (0, 0), (max_coord, max_coord))
