# -*- coding: utf-8 -*-
"""
Rectification Grid - World rectangle and regular sampling lattice.

Builds the axis-aligned world rectangle that contains the back-projected
region of interest, and the regular lattice of world points sampled at a
requested ground resolution.

Axis naming follows the HORUS convention: the ``min_x``/``max_x`` bounds
of a ``WorldRectangle`` run along the world **Y** axis and
``min_y``/``max_y`` along the world **X** axis. The rectified raster is
flipped and transposed to match, so that its rows run along world Y
(top row at the largest Y) and its columns along world X.

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

# Standard library
import logging
import math
from typing import Tuple, Union

# Third-party
import numpy as np

# camrect internal
from camrect.exceptions import (
    GridConstructionError,
    GridTooLargeError,
    InvalidResolutionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

#: Largest number of lattice nodes a sampling grid may hold. At three
#: float64 coordinates per node this is about 600 MB of world points.
DEFAULT_MAX_CELLS = 25_000_000


def validate_resolution(resolution: Union[int, float]) -> float:
    """Return *resolution* as float, rejecting non-positive values.

    Raises
    ------
    InvalidResolutionError
        If *resolution* is not a finite number greater than zero.
    """
    try:
        value = float(resolution)
    except (TypeError, ValueError) as exc:
        raise InvalidResolutionError(
            f"resolution must be a number, got {resolution!r}"
        ) from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidResolutionError(
            f"resolution must be positive, got {resolution}"
        )
    return value


def validate_max_cells(max_cells: int) -> int:
    """Return *max_cells* as int, rejecting non-positive budgets."""
    if isinstance(max_cells, bool) or not isinstance(max_cells, (int, np.integer)):
        raise ValidationError(
            f"max_cells must be an integer, got {type(max_cells).__name__}"
        )
    if max_cells < 1:
        raise ValidationError(f"max_cells must be positive, got {max_cells}")
    return int(max_cells)


class WorldRectangle:
    """
    Axis-aligned world rectangle around a back-projected ROI.

    Attributes
    ----------
    corners : np.ndarray
        ``(4, 3)`` world corners ``[X, Y, z]`` in the order
        (minX, minY), (minX, maxY), (maxX, maxY), (maxX, minY).
    min_x, max_x : int
        Floored bounds along the world Y axis.
    min_y, max_y : int
        Floored bounds along the world X axis.
    z : float
        Plane elevation.
    """

    def __init__(self, corners: np.ndarray, z: float) -> None:
        corners = np.asarray(corners, dtype=np.float64)
        if corners.shape != (4, 3):
            raise ValidationError(
                f"corners must have shape (4, 3), got {corners.shape}"
            )
        if not np.all(np.isfinite(corners[:, :2])):
            raise GridConstructionError(
                "World rectangle has non-finite corners; the camera model "
                "does not intersect the world plane over the selected area"
            )
        self.corners = corners
        self.z = float(z)

        # X bounds come from the world Y column and vice versa
        self.min_x = int(np.floor(np.min(corners[:, 1])))
        self.max_x = int(np.floor(np.max(corners[:, 1])))
        self.min_y = int(np.floor(np.min(corners[:, 0])))
        self.max_y = int(np.floor(np.max(corners[:, 0])))

    @classmethod
    def from_world_points(
        cls,
        x: np.ndarray,
        y: np.ndarray,
        z: float
    ) -> 'WorldRectangle':
        """Build the rectangle containing world points ``(x, y)``.

        Parameters
        ----------
        x, y : np.ndarray
            World coordinates of the back-projected ROI vertices.
        z : float
            Plane elevation.

        Returns
        -------
        WorldRectangle
        """
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        if x.size == 0 or x.shape != y.shape:
            raise ValidationError(
                f"x and y must be non-empty and equal length, got "
                f"{x.size} and {y.size}"
            )
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
            raise GridConstructionError(
                "Back-projected ROI contains non-finite world coordinates"
            )
        x_lo, x_hi = float(np.min(x)), float(np.max(x))
        y_lo, y_hi = float(np.min(y)), float(np.max(y))
        corners = np.array([
            [x_lo, y_lo, z],
            [x_lo, y_hi, z],
            [x_hi, y_hi, z],
            [x_hi, y_lo, z],
        ])
        return cls(corners, z)

    @property
    def delta_x(self) -> int:
        """Floored extent along the world Y axis."""
        return self.max_x - self.min_x

    @property
    def delta_y(self) -> int:
        """Floored extent along the world X axis."""
        return self.max_y - self.min_y

    @property
    def world_x_bounds(self) -> Tuple[int, int]:
        """``(min, max)`` floored bounds along the world X axis."""
        return self.min_y, self.max_y

    @property
    def world_y_bounds(self) -> Tuple[int, int]:
        """``(min, max)`` floored bounds along the world Y axis."""
        return self.min_x, self.max_x

    def __repr__(self) -> str:
        return (
            f"WorldRectangle(X=[{self.min_y}, {self.max_y}], "
            f"Y=[{self.min_x}, {self.max_x}], z={self.z})"
        )


class SamplingGrid:
    """
    Regular lattice of world points covering a ``WorldRectangle``.

    The lattice has ``i`` rows (nodes along world X) and ``j`` columns
    (nodes along world Y). Node spacing is the floored extent divided by
    the step count, so it never exceeds the requested resolution and the
    lattice spans the full extent exactly.

    Attributes
    ----------
    rectangle : WorldRectangle
        Rectangle the grid covers.
    resolution : float
        Requested ground resolution (world units per output pixel).
    grid_x, grid_y : int
        Step counts along the world Y and world X axes.
    i, j : int
        Node counts, ``grid_y + 1`` and ``grid_x + 1``.
    """

    def __init__(
        self,
        rectangle: WorldRectangle,
        resolution: float,
        grid_x: int,
        grid_y: int
    ) -> None:
        self.rectangle = rectangle
        self.resolution = resolution
        self.grid_x = grid_x
        self.grid_y = grid_y
        self.i = grid_y + 1
        self.j = grid_x + 1

    @property
    def size(self) -> int:
        """Total number of lattice nodes."""
        return self.i * self.j

    @property
    def z(self) -> float:
        return self.rectangle.z

    @property
    def world_x_nodes(self) -> np.ndarray:
        """World X coordinate of each lattice row."""
        r = self.rectangle
        return np.linspace(r.min_y, r.max_y, self.i)

    @property
    def world_y_nodes(self) -> np.ndarray:
        """World Y coordinate of each lattice column."""
        r = self.rectangle
        return np.linspace(r.min_x, r.max_x, self.j)

    @property
    def spacing(self) -> Tuple[float, float]:
        """Actual node spacing ``(along world X, along world Y)``."""
        r = self.rectangle
        return r.delta_y / self.grid_y, r.delta_x / self.grid_x

    def points(self) -> np.ndarray:
        """Return the ``(i * j, 3)`` array of world points.

        Points are ordered column-major over the ``(i, j)`` lattice (row
        index varying fastest), the order the rectifier reshapes back
        into a raster.
        """
        yy, xx = np.meshgrid(self.world_y_nodes, self.world_x_nodes)
        xyz = np.empty((self.size, 3), dtype=np.float64)
        xyz[:, 0] = xx.ravel(order='F')
        xyz[:, 1] = yy.ravel(order='F')
        xyz[:, 2] = self.z
        return xyz

    def __repr__(self) -> str:
        return (
            f"SamplingGrid(size={self.i}x{self.j}, "
            f"resolution={self.resolution}, z={self.z})"
        )


def build_sampling_grid(
    rectangle: WorldRectangle,
    resolution: float,
    max_cells: int = DEFAULT_MAX_CELLS
) -> SamplingGrid:
    """
    Size a sampling grid over *rectangle* at *resolution*.

    Parameters
    ----------
    rectangle : WorldRectangle
        World rectangle to cover.
    resolution : float
        Ground resolution, world units per output pixel. Must be > 0.
    max_cells : int, default=DEFAULT_MAX_CELLS
        Upper bound on the number of lattice nodes.

    Returns
    -------
    SamplingGrid

    Raises
    ------
    InvalidResolutionError
        If *resolution* is not positive.
    GridConstructionError
        If the rectangle has zero area.
    GridTooLargeError
        If the lattice would hold more than *max_cells* nodes.
    """
    resolution = validate_resolution(resolution)
    max_cells = validate_max_cells(max_cells)

    delta_x = rectangle.delta_x
    delta_y = rectangle.delta_y
    if delta_x <= 0 or delta_y <= 0:
        raise GridConstructionError(
            f"World rectangle {rectangle} has zero area after flooring "
            f"its bounds"
        )

    steps_x = delta_x / resolution
    steps_y = delta_y / resolution
    if (not math.isfinite(steps_x) or not math.isfinite(steps_y)
            or steps_x >= max_cells or steps_y >= max_cells):
        raise GridTooLargeError(
            f"Grid for extent {delta_y} x {delta_x} at resolution "
            f"{resolution} exceeds the limit of {max_cells} cells"
        )

    grid_x = int(math.ceil(steps_x))
    grid_y = int(math.ceil(steps_y))
    cells = (grid_x + 1) * (grid_y + 1)
    if cells > max_cells:
        raise GridTooLargeError(
            f"Grid of {grid_y + 1} x {grid_x + 1} = {cells} cells exceeds "
            f"the limit of {max_cells} cells"
        )

    grid = SamplingGrid(rectangle, resolution, grid_x, grid_y)
    logger.debug("Built %r over %r", grid, rectangle)
    return grid
