"""
Height Map Module

Construction, query and generation API around a GridStore, an
initializer run and a LazyResolver.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional, Tuple
import numpy as np

from .grid import GridStore
from .initializer import InitMode, init
from .random_field import RandomField, SeedLike
from .resolver import HeightTransform, LazyResolver, RoughnessFn
from .validation import (
    ValidationError,
    validate_roughness,
    validate_size,
)


@dataclass
class HeightMapConfig:
    """
    Settings fixed for the lifetime of a height map.

    Attributes:
        size: Side length, 2^n + 1
        roughness: Per-level decay of the random displacement
        seed: int or str; None draws a random seed
        init_level: Level pre-seeded by the initializer
        init_mode: InitMode.SEED or InitMode.FIXED_VALUE
        init_value: Constant used by FIXED_VALUE
    """
    size: int = 129
    roughness: float = 0.5
    seed: SeedLike = None
    init_level: int = 0
    init_mode: InitMode = InitMode.SEED
    init_value: float = 0.0

    def __post_init__(self):
        self.size = validate_size(self.size)
        self.roughness = validate_roughness(self.roughness)
        try:
            self.init_mode = InitMode(self.init_mode)
        except ValueError:
            choices = ", ".join(m.value for m in InitMode)
            raise ValidationError(
                f"init_mode must be one of: {choices}. Got {self.init_mode!r}"
            )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["init_mode"] = self.init_mode.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> HeightMapConfig:
        return cls(**data)


@dataclass
class HeightMapSummary:
    """Statistics over the resolved cells of a height map."""
    size: int
    seed: int
    resolved_cells: int
    total_cells: int
    min_height: Optional[float]
    max_height: Optional[float]
    mean_height: Optional[float]
    std_height: Optional[float]

    @property
    def coverage(self) -> float:
        """Fraction of cells resolved."""
        return self.resolved_cells / self.total_cells

    def summary(self) -> str:
        """Return human-readable summary."""
        lines = [
            "=" * 50,
            "HEIGHT MAP SUMMARY",
            "=" * 50,
            f"Size:              {self.size} x {self.size}",
            f"Seed:              {self.seed}",
            f"Resolved Cells:    {self.resolved_cells:,} / {self.total_cells:,} "
            f"({self.coverage * 100:.1f}%)",
        ]

        if self.resolved_cells:
            lines.extend([
                f"",
                f"HEIGHTS:",
                f"  Min:             {self.min_height:.3f}",
                f"  Max:             {self.max_height:.3f}",
                f"  Mean:            {self.mean_height:.3f}",
                f"  Std Dev:         {self.std_height:.3f}",
            ])

        lines.append("=" * 50)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["coverage"] = self.coverage
        return data


class HeightMap:
    """
    Lazily generated diamond-square height map.

    The base level is seeded on construction; every other cell is
    computed only when a generate_* call needs it.
    """

    def __init__(
        self,
        config: Optional[HeightMapConfig] = None,
        field: Optional[RandomField] = None,
        height_transform: Optional[HeightTransform] = None,
        roughness_fn: Optional[RoughnessFn] = None,
    ):
        self.config = config if config is not None else HeightMapConfig()
        self.grid = GridStore(self.config.size, self.config.roughness, self.config.seed)
        self.resolver = LazyResolver(field, height_transform, roughness_fn)

        init(
            self.grid,
            level=self.config.init_level,
            mode=self.config.init_mode,
            value=self.config.init_value,
            field=self.resolver.field,
        )

    @classmethod
    def create(
        cls,
        size: int,
        roughness: float,
        seed: SeedLike = None,
        field: Optional[RandomField] = None,
        height_transform: Optional[HeightTransform] = None,
        roughness_fn: Optional[RoughnessFn] = None,
        **options,
    ) -> HeightMap:
        """Shortcut for HeightMap(HeightMapConfig(size, roughness, seed, **options))."""
        config = HeightMapConfig(size=size, roughness=roughness, seed=seed, **options)
        return cls(
            config,
            field=field,
            height_transform=height_transform,
            roughness_fn=roughness_fn,
        )

    def __repr__(self) -> str:
        return f"HeightMap({self.grid!r})"

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def seed(self) -> int:
        return self.grid.seed

    @property
    def levels(self) -> int:
        return self.grid.levels

    @property
    def resolved_count(self) -> int:
        return self.grid.resolved_count

    def max_coord(self) -> int:
        return self.grid.max_coord()

    def get(self, x: int, y: int) -> Optional[float]:
        return self.grid.get(x, y)

    def is_resolved(self, x: int, y: int) -> bool:
        return self.grid.is_resolved(x, y)

    def generate_area(self, corner_a: Tuple[int, int], corner_b: Tuple[int, int]) -> int:
        return self.resolver.generate_area(self.grid, corner_a, corner_b)

    def generate_point(self, x: int, y: int) -> float:
        return self.resolver.generate_point(self.grid, x, y)

    def generate_all(self) -> int:
        return self.resolver.generate_all(self.grid)

    def get_area(
        self,
        corner_a: Tuple[int, int],
        corner_b: Tuple[int, int],
        fill: float = np.nan,
    ) -> np.ndarray:
        return self.grid.get_area(corner_a, corner_b, fill)

    def to_array(self, fill: float = np.nan) -> np.ndarray:
        return self.grid.to_array(fill)

    def statistics(self) -> HeightMapSummary:
        """Calculate basic statistics over the resolved cells."""
        valid = self.grid.to_array()[self.grid.resolved_mask()]

        if len(valid) == 0:
            stats = dict(min_height=None, max_height=None,
                         mean_height=None, std_height=None)
        else:
            stats = dict(
                min_height=float(np.min(valid)),
                max_height=float(np.max(valid)),
                mean_height=float(np.mean(valid)),
                std_height=float(np.std(valid)),
            )

        return HeightMapSummary(
            size=self.size,
            seed=self.seed,
            resolved_cells=int(len(valid)),
            total_cells=self.grid.total_cells,
            **stats,
        )
