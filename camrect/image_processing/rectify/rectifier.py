# -*- coding: utf-8 -*-
"""
Rectifier - Resample an oblique camera image onto a horizontal world plane.

Maps a region of interest selected in image space to a bounded plane at a
fixed elevation, samples that plane on a regular grid at the requested
ground resolution, projects the grid back into the image through the
camera and lens models, and gathers pixel values by nearest-neighbour
lookup. The result is a metrically scaled, orthophoto-like raster.

Algorithm
---------
1. Remove lens distortion from the ROI vertices (when a lens model is
   active).
2. Back-project the vertices onto the plane ``Z = z``.
3. Take the axis-aligned world rectangle around them, floored to
   integer bounds.
4. Size a lattice over the rectangle at the requested resolution.
5. Build the lattice of world points (capacity checked up front).
6. Forward-project the lattice into the image.
7. Re-apply lens distortion.
8. Round pixel coordinates up to integer indices and mask those outside
   the image.
9. Gather every band at those indices, zero the masked samples, and
   orient the raster with world Y along rows (largest Y on top) and
   world X along columns.
10. Project the rectangle corners into the image for annotation.

Based on the rectification method of the HORUS project, Perez (2009)
and Perez et al. (2011).

Dependencies
------------
scipy

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
import warnings
from typing import Any, Dict, Optional, Tuple, Union

# Third-party
import numpy as np

try:
    from scipy.ndimage import map_coordinates
    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False
    map_coordinates = None

# camrect internal
from camrect.camera.base import ProjectionModel
from camrect.camera.distortion import RadialDistortion
from camrect.exceptions import (
    DegenerateROIError,
    DependencyError,
    GridConstructionError,
    ValidationError,
)
from camrect.image_processing.base import ImageTransform
from camrect.image_processing.rectify.grid import (
    DEFAULT_MAX_CELLS,
    SamplingGrid,
    WorldRectangle,
    build_sampling_grid,
    validate_max_cells,
    validate_resolution,
)
from camrect.image_processing.versioning import processor_version

logger = logging.getLogger(__name__)

GRID_ERROR_MESSAGE = (
    "There is an error. The selected area is too big or the camera model "
    "is not accurate"
)


def _validate_roi(roi: Any) -> np.ndarray:
    """Return *roi* as an ``(N, 2)`` float64 array with ``N >= 3``."""
    try:
        pts = np.asarray(roi, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise DegenerateROIError(f"ROI is not numeric: {exc}") from exc
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise DegenerateROIError(
            f"ROI must be an (N, 2) array of (u, v) points, got shape "
            f"{pts.shape}"
        )
    if pts.shape[0] < 3:
        raise DegenerateROIError(
            f"ROI requires at least 3 points, got {pts.shape[0]}"
        )
    if not np.all(np.isfinite(pts)):
        raise DegenerateROIError("ROI contains non-finite coordinates")
    return pts


def _validate_image(source: np.ndarray) -> np.ndarray:
    source = np.asarray(source)
    if source.ndim not in (2, 3):
        raise ValidationError(
            f"Image must be (rows, cols) or (rows, cols, bands), got "
            f"shape {source.shape}"
        )
    if source.shape[0] == 0 or source.shape[1] == 0:
        raise ValidationError(f"Image is empty, shape {source.shape}")
    if source.dtype != np.uint8:
        if np.iscomplexobj(source) or not np.all(np.isfinite(source)):
            raise ValidationError(
                f"Image samples must be finite real values, got dtype "
                f"{source.dtype}"
            )
        if np.any(source < 0) or np.any(source > 255):
            raise ValidationError(
                f"Image samples must lie in the 8-bit range [0, 255], "
                f"got dtype {source.dtype}"
            )
        if np.any(source != np.round(source)):
            raise ValidationError(
                "Image samples must be integer valued"
            )
        source = source.astype(np.uint8)
    return source


class RectificationResult:
    """Container for rectification results.

    Attributes
    ----------
    raster : np.ndarray
        Rectified image, ``(rows, cols)`` or ``(rows, cols, bands)``,
        ``uint8``. Rows run along world Y (top row = largest Y), columns
        along world X.
    u : np.ndarray
        Column pixel coordinates of the four extent corners.
    v : np.ndarray
        Row pixel coordinates of the four extent corners.
    rectangle : WorldRectangle or None
        World rectangle covered by the raster.
    grid : SamplingGrid or None
        Sampling grid the raster was built from.
    """

    def __init__(
        self,
        raster: np.ndarray,
        u: np.ndarray,
        v: np.ndarray,
        rectangle: Optional[WorldRectangle] = None,
        grid: Optional[SamplingGrid] = None,
    ) -> None:
        self.raster = raster
        self.u = u
        self.v = v
        self.rectangle = rectangle
        self.grid = grid

    @classmethod
    def empty(cls) -> 'RectificationResult':
        """Result of an aborted rectification: no raster, no corners."""
        return cls(
            raster=np.zeros((0, 0), dtype=np.uint8),
            u=np.zeros(0, dtype=np.float64),
            v=np.zeros(0, dtype=np.float64),
        )

    @property
    def is_empty(self) -> bool:
        return self.raster.size == 0

    @property
    def shape(self) -> tuple:
        """Shape of the rectified raster."""
        return self.raster.shape

    @property
    def resolution(self) -> Optional[float]:
        """Requested ground resolution, ``None`` when empty."""
        return self.grid.resolution if self.grid is not None else None

    @property
    def z(self) -> Optional[float]:
        """Plane elevation, ``None`` when empty."""
        return self.rectangle.z if self.rectangle is not None else None

    @property
    def world_bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """``(min_X, min_Y, max_X, max_Y)`` of the raster, in world units."""
        if self.rectangle is None:
            return None
        r = self.rectangle
        return (r.min_y, r.min_x, r.max_y, r.max_x)

    def get_output_metadata(self) -> Dict[str, Any]:
        """Describe how raster pixels map onto the world plane.

        Returns
        -------
        Dict[str, Any]
            - 'bounds': ``(min_X, min_Y, max_X, max_Y)``
            - 'z': plane elevation
            - 'resolution': requested ground resolution
            - 'pixel_size_x': node spacing along world X
            - 'pixel_size_y': node spacing along world Y
            - 'rows', 'cols': raster size
            - 'transform': affine coefficients
              ``(origin_X, pixel_size_x, 0, origin_Y, 0, -pixel_size_y)``
              mapping ``(col, row)`` to the world position of that
              pixel's lattice node

        Raises
        ------
        ValidationError
            If the result is empty.
        """
        if self.grid is None or self.rectangle is None:
            raise ValidationError("Empty rectification result has no grid")
        grid = self.grid
        r = self.rectangle
        size_x, size_y = grid.spacing
        return {
            'bounds': self.world_bounds,
            'z': r.z,
            'resolution': grid.resolution,
            'pixel_size_x': size_x,
            'pixel_size_y': size_y,
            'rows': grid.j,
            'cols': grid.i,
            'transform': (
                float(r.min_y),     # origin X (left edge)
                size_x,             # pixel width
                0.0,                # rotation
                float(r.max_x),     # origin Y (top edge)
                0.0,                # rotation
                -size_y,            # pixel height (negative = Y decreases)
            ),
        }

    def __repr__(self) -> str:
        return f"RectificationResult(shape={self.shape}, bounds={self.world_bounds})"


@processor_version('0.1.0')
class Rectifier(ImageTransform):
    """
    Rectify an oblique image onto the world plane ``Z = z``.

    The grid depends only on the camera, ROI, elevation and resolution,
    and is computed once. The pixel mapping additionally depends on the
    source image size and is cached for the most recent ``(rows, cols)``.

    Parameters
    ----------
    projection : ProjectionModel
        Camera projection model.
    roi : array-like
        ``(N, 2)`` polygon of ``(u, v)`` pixel points, ``N >= 3``. Only
        the bounding rectangle of its back-projection is used.
    z : float
        Elevation of the world plane.
    resolution : float
        Ground resolution, world units per output pixel.
    distortion : RadialDistortion, optional
        Lens model. ``None`` or an inactive model disables distortion.
    max_cells : int, default=DEFAULT_MAX_CELLS
        Upper bound on the number of grid nodes.

    Raises
    ------
    DegenerateROIError
        If the ROI has fewer than 3 points or bad values.
    InvalidResolutionError
        If *resolution* is not positive.
    DependencyError
        If scipy is not installed.

    Examples
    --------
    >>> camera = DLTProjection.from_dlt(L)
    >>> rect = Rectifier(camera, roi, z=0.0, resolution=0.5)
    >>> result = rect.rectify(image)
    >>> result.raster.shape
    (241, 401, 3)
    """

    def __init__(
        self,
        projection: ProjectionModel,
        roi: Any,
        z: float,
        resolution: float,
        distortion: Optional[RadialDistortion] = None,
        max_cells: int = DEFAULT_MAX_CELLS
    ) -> None:
        if not SCIPY_AVAILABLE:
            raise DependencyError(
                "scipy is required for rectification. "
                "Install with: pip install scipy"
            )
        if not isinstance(projection, ProjectionModel):
            raise ValidationError(
                f"projection must be a ProjectionModel, got "
                f"{type(projection).__name__}"
            )

        self.projection = projection
        self.roi = _validate_roi(roi)
        self.z = float(z)
        self.resolution = validate_resolution(resolution)
        self.distortion = distortion if distortion is not None else RadialDistortion.none()
        self.max_cells = validate_max_cells(max_cells)

        # Cached intermediate products (computed lazily)
        self._rectangle: Optional[WorldRectangle] = None
        self._grid: Optional[SamplingGrid] = None
        self._mapping_key: Optional[Tuple[int, int]] = None
        self._mapping: Optional[Tuple[np.ndarray, np.ndarray, np.ndarray]] = None

    def _project(self, xyz: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """World points to observed (distorted) pixel coordinates."""
        U, V = self.projection.world_to_image(xyz)
        if self.distortion.is_active:
            uv = self.distortion.distort(np.column_stack([U, V]))
            U, V = uv[:, 0], uv[:, 1]
        return U, V

    def compute_rectangle(self) -> WorldRectangle:
        """
        Back-project the ROI onto the world plane and bound it.

        Returns
        -------
        WorldRectangle
        """
        if self._rectangle is None:
            uv = self.distortion.undistort(self.roi)
            X, Y, _ = self.projection.image_to_world(
                uv[:, 0], uv[:, 1], self.z
            )
            self._rectangle = WorldRectangle.from_world_points(X, Y, self.z)
        return self._rectangle

    def compute_grid(self) -> SamplingGrid:
        """
        Size the world sampling grid over the ROI rectangle.

        Returns
        -------
        SamplingGrid

        Raises
        ------
        GridConstructionError
            If the world rectangle is degenerate, or the grid would
            exceed ``max_cells`` (``GridTooLargeError``).
        """
        if self._grid is None:
            self._grid = build_sampling_grid(
                self.compute_rectangle(), self.resolution, self.max_cells
            )
        return self._grid

    @property
    def rectangle(self) -> WorldRectangle:
        """World rectangle around the back-projected ROI."""
        return self.compute_rectangle()

    def compute_mapping(
        self,
        shape: Tuple[int, ...]
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Compute the source pixel index for every grid node.

        Parameters
        ----------
        shape : Tuple[int, ...]
            Source image shape; only ``(rows, cols)`` are used.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            ``(U, V, valid)`` flat arrays of length ``grid.size`` in
            lattice (column-major) order.
            - U: 1-based column index, ``ceil`` of the projected
              coordinate, set to 1 where out of range.
            - V: 1-based row index, treated the same way.
            - valid: True where ``1 <= U <= cols`` and ``1 <= V <= rows``.
        """
        rows, cols = int(shape[0]), int(shape[1])
        key = (rows, cols)
        if self._mapping is not None and self._mapping_key == key:
            return self._mapping

        grid = self.compute_grid()
        U, V = self._project(grid.points())

        U = np.ceil(U)
        V = np.ceil(V)
        in_u = (U > 0) & (U <= cols)
        in_v = (V > 0) & (V <= rows)
        valid = in_u & in_v

        # Out-of-range indices point at pixel 1; the mask zeroes them
        U = np.where(in_u, U, 1).astype(np.intp)
        V = np.where(in_v, V, 1).astype(np.intp)

        logger.debug(
            "Mapped %d grid nodes onto %dx%d image, %d inside",
            grid.size, rows, cols, int(np.count_nonzero(valid)),
        )
        # Only the most recent image shape is kept
        self._mapping_key = key
        self._mapping = (U, V, valid)
        return self._mapping

    def apply(self, source: np.ndarray, **kwargs: Any) -> np.ndarray:
        """
        Rectify an image array.

        Parameters
        ----------
        source : np.ndarray
            ``(rows, cols)`` grayscale or ``(rows, cols, bands)`` image
            with 8-bit samples.

        Returns
        -------
        np.ndarray
            ``uint8`` raster of shape ``(j, i)`` or ``(j, i, bands)``,
            where ``i`` and ``j`` are the grid node counts along world X
            and world Y.
        """
        source = _validate_image(source)
        grid = self.compute_grid()
        U, V, valid = self.compute_mapping(source.shape)
        coords = np.array([V - 1, U - 1])

        if source.ndim == 2:
            return self._resample_band(source, coords, valid, grid)

        n_bands = source.shape[2]
        output = np.zeros((grid.j, grid.i, n_bands), dtype=np.uint8)
        for b in range(n_bands):
            output[:, :, b] = self._resample_band(
                source[:, :, b], coords, valid, grid
            )
        return output

    def _resample_band(
        self,
        band: np.ndarray,
        coords: np.ndarray,
        valid: np.ndarray,
        grid: SamplingGrid
    ) -> np.ndarray:
        """
        Gather one band at integer pixel coordinates.

        Parameters
        ----------
        band : np.ndarray
            Source band, shape ``(rows, cols)``.
        coords : np.ndarray
            ``(2, N)`` zero-based ``[row; col]`` indices, all in bounds.
        valid : np.ndarray
            Boolean mask of length N.
        grid : SamplingGrid
            Grid the samples belong to.

        Returns
        -------
        np.ndarray
            ``(j, i)`` oriented raster band.
        """
        values = map_coordinates(band, coords, order=0, mode='nearest')
        values = values * valid.astype(np.uint8)
        lattice = values.reshape((grid.i, grid.j), order='F')
        return np.fliplr(lattice).T

    def extent_corners(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Project the world rectangle corners into the image.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(u, v)`` observed pixel coordinates of the four corners.
        """
        return self._project(self.rectangle.corners)

    def rectify(self, source: np.ndarray) -> RectificationResult:
        """
        Rectify *source* and project the extent corners.

        Parameters
        ----------
        source : np.ndarray
            Source image, see ``apply``.

        Returns
        -------
        RectificationResult
        """
        raster = self.apply(source)
        u, v = self.extent_corners()
        return RectificationResult(
            raster=raster,
            u=u,
            v=v,
            rectangle=self.rectangle,
            grid=self.compute_grid(),
        )

    def __repr__(self) -> str:
        return (
            f"Rectifier(projection={self.projection!r}, z={self.z}, "
            f"resolution={self.resolution}, distortion={self.distortion!r})"
        )


def rectify(
    image: np.ndarray,
    projection: ProjectionModel,
    roi: Any,
    z: float,
    resolution: Union[int, float],
    distortion: Optional[RadialDistortion] = None,
    show_plot: bool = False,
    max_cells: int = DEFAULT_MAX_CELLS,
    strict: bool = False
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Rectify an image onto the world plane ``Z = z``.

    Parameters
    ----------
    image : np.ndarray
        ``(rows, cols)`` or ``(rows, cols, bands)`` 8-bit image.
    projection : ProjectionModel
        Camera projection model.
    roi : array-like
        ``(N, 2)`` polygon of ``(u, v)`` points, ``N >= 3``.
    z : float
        Elevation of the world plane.
    resolution : float
        Ground resolution, world units per output pixel.
    distortion : RadialDistortion, optional
        Lens model; ``None`` disables distortion.
    show_plot : bool, default=False
        Display the rectified raster with world gridlines.
    max_cells : int, default=DEFAULT_MAX_CELLS
        Upper bound on the number of grid nodes.
    strict : bool, default=False
        Raise grid construction errors instead of recovering.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        ``(u, v, raster)``: extent corner coordinates and the rectified
        raster. All three are empty when the grid cannot be built.

    Raises
    ------
    DegenerateROIError
        If the ROI has fewer than 3 points.
    InvalidResolutionError
        If *resolution* is not positive.
    GridConstructionError
        Only when *strict* is True.
    ProjectionError
        If the camera or lens model fails.

    Warns
    -----
    UserWarning
        When the grid cannot be built and empty outputs are returned.
    """
    rectifier = Rectifier(
        projection, roi, z, resolution,
        distortion=distortion, max_cells=max_cells,
    )
    try:
        result = rectifier.rectify(image)
    except GridConstructionError as exc:
        if strict:
            raise
        logger.error("Rectification aborted: %s", exc)
        warnings.warn(GRID_ERROR_MESSAGE, UserWarning, stacklevel=2)
        result = RectificationResult.empty()
        return result.u, result.v, result.raster

    if show_plot:
        from camrect.plotting.rectified import plot_rectified
        plot_rectified(
            result.raster, projection, roi, z,
            distortion=distortion, resolution=resolution, show=True,
        )

    return result.u, result.v, result.raster
