"""
Input Validation Module

Provides validation functions and custom exceptions for the lazy_diamond_square package.
All validation functions provide clear, actionable error messages.
"""

from __future__ import annotations

import warnings
from typing import Tuple


class ValidationError(ValueError):
    """Base exception for validation errors with user-friendly messages."""
    pass


class InvalidSizeError(ValidationError):
    """Grid side length is not 2^n + 1."""
    pass


class OutOfBoundsError(ValidationError):
    """Coordinate lies outside [0, max_coord]."""
    pass


class NotInitializedError(ValidationError):
    """Area generation requested before the base level was seeded."""
    pass


class AlreadyResolvedError(ValidationError):
    """Attempt to overwrite a cell that already holds a height."""
    pass


class AlreadyInitializedError(ValidationError):
    """Initializer re-run at a different level on a seeded grid."""
    pass


def validate_size(size: int) -> int:
    """
    Validate grid side length is one more than a positive power of two.

    Args:
        size: Requested side length of the square grid

    Returns:
        The validated size as an int

    Raises:
        InvalidSizeError: If size is not an int or size - 1 is not 2^n with n >= 1
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidSizeError(
            f"Grid size must be an integer, got {type(size).__name__}"
        )

    span = size - 1
    if span < 2 or span & (span - 1):
        raise InvalidSizeError(
            f"Grid size must be 2^n + 1 with n >= 1, got {size}. "
            "Valid sizes are 3, 5, 9, 17, 33, 65, 129, 257, 513, 1025, ..."
        )

    # Warn on very large grids
    total_cells = size * size
    if total_cells > 100_000_000:  # 100M cells
        warnings.warn(
            f"Creating very large grid ({size}x{size} = {total_cells:,} cells). "
            "Consider a smaller size to reduce memory usage.",
            UserWarning,
            stacklevel=2
        )

    return size


def validate_roughness(roughness: float) -> float:
    """
    Validate roughness is a non-negative number.

    Args:
        roughness: Per-level decay factor of the random displacement

    Returns:
        The validated roughness as a float

    Raises:
        ValidationError: If roughness is None, not a number, or negative
    """
    if roughness is None:
        raise ValidationError("roughness cannot be None")

    if isinstance(roughness, bool) or not isinstance(roughness, (int, float)):
        raise ValidationError(
            f"roughness must be a number, got {type(roughness).__name__}"
        )

    if roughness < 0:
        raise ValidationError(
            f"roughness cannot be negative, got {roughness}. "
            "Typical values are 0.3-0.7."
        )

    if roughness > 1.0:
        warnings.warn(
            f"roughness of {roughness} is above 1.0, so displacement grows "
            "at finer levels. Verify this is intentional.",
            UserWarning,
            stacklevel=2
        )

    return float(roughness)


def validate_coordinate(x: int, y: int, max_coord: int) -> Tuple[int, int]:
    """
    Validate that (x, y) lies on the grid.

    Args:
        x: Column index
        y: Row index
        max_coord: Largest valid index (size - 1)

    Returns:
        The coordinate as a tuple of ints

    Raises:
        OutOfBoundsError: If either index is outside [0, max_coord]
    """
    if not (0 <= x <= max_coord and 0 <= y <= max_coord):
        raise OutOfBoundsError(
            f"Coordinate ({x}, {y}) is outside the grid. "
            f"Both indices must be within 0..{max_coord}."
        )
    return (int(x), int(y))


def validate_level(level: int, levels: int, context: str = "level") -> int:
    """
    Validate a subdivision level.

    Args:
        level: Level to validate
        levels: Finest level of the grid (n for a 2^n + 1 grid)
        context: Description of the level (used in error messages)

    Returns:
        The validated level as an int

    Raises:
        ValidationError: If level is not an int in 0..levels
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValidationError(
            f"{context} must be an integer, got {type(level).__name__}"
        )

    if not 0 <= level <= levels:
        raise ValidationError(
            f"{context} must be within 0..{levels} for this grid, got {level}."
        )

    return level
