# -*- coding: utf-8 -*-
"""
Sampling Grid Tests - World rectangle bounds and lattice sizing.

Dependencies
------------
pytest

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-18

Modified
--------
2026-10-18
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from camrect.exceptions import (
    GridConstructionError,
    GridTooLargeError,
    InvalidResolutionError,
    ValidationError,
)
from camrect.image_processing.rectify.grid import (
    DEFAULT_MAX_CELLS,
    SamplingGrid,
    WorldRectangle,
    build_sampling_grid,
    validate_max_cells,
    validate_resolution,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def rect_10x6():
    """World X in [0, 10], world Y in [0, 6], plane at Z = 2."""
    return WorldRectangle.from_world_points(
        np.array([0.0, 10.0, 10.0, 0.0]),
        np.array([0.0, 0.0, 6.0, 6.0]),
        2.0,
    )


# ---------------------------------------------------------------------------
# WorldRectangle
# ---------------------------------------------------------------------------

class TestWorldRectangle:
    """Tests for floored, axis-swapped rectangle bounds."""

    def test_floored_swapped_bounds(self):
        """min_x/max_x come from world Y, min_y/max_y from world X."""
        rect = WorldRectangle.from_world_points(
            [1.2, 4.7, 3.1], [0.5, 2.9, 2.2], 0.0
        )
        assert (rect.min_x, rect.max_x) == (0, 2)
        assert (rect.min_y, rect.max_y) == (1, 4)
        assert rect.world_x_bounds == (1, 4)
        assert rect.world_y_bounds == (0, 2)
        assert rect.delta_x == 2
        assert rect.delta_y == 3

    def test_negative_bounds_floor_down(self):
        rect = WorldRectangle.from_world_points(
            [-3.5, 2.0, 0.1], [-0.2, 1.0, 7.9], 0.0
        )
        assert rect.world_x_bounds == (-4, 2)
        assert rect.world_y_bounds == (-1, 7)

    def test_corner_order_unfloored(self):
        """Corners keep the exact extreme values, not floored ones."""
        rect = WorldRectangle.from_world_points(
            [1.2, 4.7, 3.1], [0.5, 2.9, 2.2], 1.5
        )
        expected = np.array([
            [1.2, 0.5, 1.5],
            [1.2, 2.9, 1.5],
            [4.7, 2.9, 1.5],
            [4.7, 0.5, 1.5],
        ])
        np.testing.assert_allclose(rect.corners, expected)
        assert rect.z == 1.5

    def test_non_finite_points(self):
        with pytest.raises(GridConstructionError, match="non-finite"):
            WorldRectangle.from_world_points([0.0, np.inf], [0.0, 1.0], 0.0)

    def test_empty_points(self):
        with pytest.raises(ValidationError, match="non-empty"):
            WorldRectangle.from_world_points([], [], 0.0)

    def test_mismatched_points(self):
        with pytest.raises(ValidationError):
            WorldRectangle.from_world_points([0.0, 1.0], [0.0], 0.0)

    def test_bad_corner_shape(self):
        with pytest.raises(ValidationError, match=r"\(4, 3\)"):
            WorldRectangle(np.zeros((3, 3)), 0.0)


# ---------------------------------------------------------------------------
# build_sampling_grid / SamplingGrid
# ---------------------------------------------------------------------------

class TestBuildSamplingGrid:
    """Tests for lattice sizing and world point ordering."""

    def test_unit_resolution(self, rect_10x6):
        grid = build_sampling_grid(rect_10x6, 1.0)
        assert isinstance(grid, SamplingGrid)
        assert (grid.grid_y, grid.grid_x) == (10, 6)
        assert (grid.i, grid.j) == (11, 7)
        assert grid.size == 77
        assert grid.spacing == (1.0, 1.0)

    def test_point_order(self, rect_10x6):
        """Row index (world X) varies fastest."""
        pts = build_sampling_grid(rect_10x6, 1.0).points()
        assert pts.shape == (77, 3)
        np.testing.assert_array_equal(pts[0], [0.0, 0.0, 2.0])
        np.testing.assert_array_equal(pts[1], [1.0, 0.0, 2.0])
        np.testing.assert_array_equal(pts[10], [10.0, 0.0, 2.0])
        np.testing.assert_array_equal(pts[11], [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(pts[-1], [10.0, 6.0, 2.0])

    def test_step_count_rounds_up(self, rect_10x6):
        """10 / 0.3 = 33.3 steps rounds up to 34, spacing shrinks."""
        grid = build_sampling_grid(rect_10x6, 0.3)
        assert grid.grid_y == 34
        assert grid.grid_x == 20
        assert grid.spacing[0] == pytest.approx(10.0 / 34)
        assert grid.spacing[0] <= 0.3
        nodes = grid.world_x_nodes
        assert nodes[0] == 0.0
        assert nodes[-1] == 10.0
        assert len(nodes) == 35

    def test_integer_resolution(self, rect_10x6):
        grid = build_sampling_grid(rect_10x6, 2)
        assert grid.resolution == 2.0
        assert (grid.i, grid.j) == (6, 4)

    @pytest.mark.parametrize("resolution", [0, -1.0, np.nan, np.inf, "fine"])
    def test_invalid_resolution(self, rect_10x6, resolution):
        with pytest.raises(InvalidResolutionError):
            build_sampling_grid(rect_10x6, resolution)

    def test_zero_area(self):
        """Extent below one world unit floors to zero."""
        rect = WorldRectangle.from_world_points(
            [1.1, 1.9], [0.0, 5.0], 0.0
        )
        with pytest.raises(GridConstructionError, match="zero area"):
            build_sampling_grid(rect, 0.1)

    def test_too_large(self):
        """Fine resolution over a wide extent is refused before allocation."""
        rect = WorldRectangle.from_world_points(
            [0.0, 10000.0], [0.0, 10000.0], 0.0
        )
        with pytest.raises(GridTooLargeError, match="exceeds"):
            build_sampling_grid(rect, 1e-4)

    def test_too_large_is_construction_error(self):
        rect = WorldRectangle.from_world_points([0.0, 1e6], [0.0, 1e6], 0.0)
        with pytest.raises(GridConstructionError):
            build_sampling_grid(rect, 1.0)

    def test_max_cells_boundary(self, rect_10x6):
        assert build_sampling_grid(rect_10x6, 1.0, max_cells=77).size == 77
        with pytest.raises(GridTooLargeError):
            build_sampling_grid(rect_10x6, 1.0, max_cells=76)


class TestValidators:
    """Tests for the resolution and cell budget validators."""

    def test_resolution_returns_float(self):
        assert validate_resolution(1) == 1.0
        assert isinstance(validate_resolution(1), float)

    def test_default_budget(self):
        assert validate_max_cells(DEFAULT_MAX_CELLS) == 25_000_000

    @pytest.mark.parametrize("max_cells", [0, -5, 1.5, True])
    def test_invalid_budget(self, max_cells):
        with pytest.raises(ValidationError, match="max_cells"):
            validate_max_cells(max_cells)
