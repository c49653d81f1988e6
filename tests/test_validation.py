"""
Tests for input validation module.
"""

import pytest

from lazy_diamond_square.core.validation import (
    ValidationError,
    InvalidSizeError,
    OutOfBoundsError,
    NotInitializedError,
    AlreadyResolvedError,
    validate_size,
    validate_roughness,
    validate_coordinate,
    validate_level,
)


class TestSizeValidation:
    """Tests for grid size validation."""

    @pytest.mark.parametrize("size", [3, 5, 9, 65, 513, 4097])
    def test_valid_sizes(self, size):
        """Test sizes of the form 2^n + 1."""
        assert validate_size(size) == size

    @pytest.mark.parametrize("size", [-5, 0, 1, 2, 7, 100, 1024])
    def test_invalid_sizes_raise(self, size):
        """Test other sizes raise InvalidSizeError."""
        with pytest.raises(InvalidSizeError, match="2\\^n \\+ 1"):
            validate_size(size)

    def test_non_integer_size_raises(self):
        """Test float and bool sizes are rejected."""
        with pytest.raises(InvalidSizeError, match="must be an integer"):
            validate_size(5.0)
        with pytest.raises(InvalidSizeError, match="must be an integer"):
            validate_size(True)

    def test_huge_grid_warns(self):
        """Test very large grids raise a warning."""
        with pytest.warns(UserWarning, match="very large grid"):
            validate_size(2**14 + 1)


class TestRoughnessValidation:
    """Tests for roughness validation."""

    def test_valid_roughness(self):
        """Test typical values, ints converted to float."""
        assert validate_roughness(0.5) == 0.5
        assert validate_roughness(0) == 0.0
        assert validate_roughness(1) == 1.0
        assert isinstance(validate_roughness(1), float)

    def test_negative_roughness_raises(self):
        """Test negative roughness raises ValidationError."""
        with pytest.raises(ValidationError, match="cannot be negative"):
            validate_roughness(-0.5)

    def test_none_roughness_raises(self):
        """Test None roughness raises ValidationError."""
        with pytest.raises(ValidationError, match="cannot be None"):
            validate_roughness(None)

    def test_string_roughness_raises(self):
        """Test string roughness raises ValidationError."""
        with pytest.raises(ValidationError, match="must be a number"):
            validate_roughness("0.5")

    def test_roughness_above_one_warns(self):
        """Test roughness > 1 warns but is accepted."""
        with pytest.warns(UserWarning, match="above 1.0"):
            assert validate_roughness(1.5) == 1.5


class TestCoordinateValidation:
    """Tests for coordinate bounds checks."""

    def test_inside(self):
        """Test coordinates on the grid edges are valid."""
        assert validate_coordinate(0, 0, 8) == (0, 0)
        assert validate_coordinate(8, 8, 8) == (8, 8)

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (9, 0), (0, 9)])
    def test_outside_raises(self, x, y):
        """Test coordinates off the grid raise OutOfBoundsError."""
        with pytest.raises(OutOfBoundsError, match="outside the grid"):
            validate_coordinate(x, y, 8)


class TestLevelValidation:
    """Tests for subdivision level checks."""

    def test_valid_levels(self):
        """Test levels 0..n."""
        assert validate_level(0, 3) == 0
        assert validate_level(3, 3) == 3

    def test_out_of_range_raises(self):
        """Test levels outside 0..n raise ValidationError."""
        with pytest.raises(ValidationError, match="within 0..3"):
            validate_level(4, 3)

    def test_custom_context_in_message(self):
        """Test that custom context appears in error message."""
        with pytest.raises(ValidationError, match="init level"):
            validate_level(-1, 3, context="init level")

    def test_non_integer_level_raises(self):
        """Test non-integer levels raise ValidationError."""
        with pytest.raises(ValidationError, match="must be an integer"):
            validate_level(1.0, 3)


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    @pytest.mark.parametrize("exc", [
        InvalidSizeError,
        OutOfBoundsError,
        NotInitializedError,
        AlreadyResolvedError,
    ])
    def test_subclasses_validation_error(self, exc):
        """Test every error kind can be caught as ValidationError and ValueError."""
        assert issubclass(exc, ValidationError)
        assert issubclass(exc, ValueError)

    def test_catch_all_validation_errors(self):
        """Test catching all validation errors with base class."""
        from lazy_diamond_square.core.grid import GridStore

        with pytest.raises(ValidationError):
            GridStore(6, 0.5)
