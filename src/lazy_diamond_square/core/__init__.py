"""Core data structures and algorithms."""

from .grid import GridStore
from .heightmap import HeightMap, HeightMapConfig, HeightMapSummary
from .initializer import InitMode, init
from .random_field import RandomField, HashRandomField, ConstantField
from .resolver import LazyResolver

__all__ = [
    "GridStore",
    "HeightMap",
    "HeightMapConfig",
    "HeightMapSummary",
    "InitMode",
    "init",
    "RandomField",
    "HashRandomField",
    "ConstantField",
    "LazyResolver",
]
