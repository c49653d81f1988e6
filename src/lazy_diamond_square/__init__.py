"""
Lazy Diamond-Square

A Python library for generating Diamond-Square height maps lazily:
a cell is computed only when it, or a cell depending on it, is requested.

Generation events are logged with structlog at debug level. Applications
that leave structlog unconfigured see them on stdout; filter them with:

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO)
    )
"""

__version__ = "0.1.0"

from .core.grid import GridStore
from .core.heightmap import HeightMap, HeightMapConfig
from .core.initializer import InitMode
from .core.random_field import RandomField, HashRandomField, ConstantField
from .core.resolver import LazyResolver
from .core.validation import (
    ValidationError,
    InvalidSizeError,
    OutOfBoundsError,
    NotInitializedError,
    AlreadyResolvedError,
    AlreadyInitializedError,
)

__all__ = [
    "GridStore",
    "HeightMap",
    "HeightMapConfig",
    "InitMode",
    "RandomField",
    "HashRandomField",
    "ConstantField",
    "LazyResolver",
    "ValidationError",
    "InvalidSizeError",
    "OutOfBoundsError",
    "NotInitializedError",
    "AlreadyResolvedError",
    "AlreadyInitializedError",
]
