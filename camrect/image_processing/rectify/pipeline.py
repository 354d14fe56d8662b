# -*- coding: utf-8 -*-
"""
Rectification Pipeline - Builder for single-view plane rectification.

Wires together the source image, camera projection, lens distortion,
region of interest, plane elevation and ground resolution into one
configurable run. Each component is set with a ``with_*()`` method; the
resolution is derived from the camera geometry when not given.

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
from typing import Any, Optional

# Third-party
import numpy as np

# camrect internal
from camrect.camera.base import ProjectionModel
from camrect.camera.distortion import RadialDistortion
from camrect.exceptions import ValidationError
from camrect.image_processing.rectify.grid import DEFAULT_MAX_CELLS
from camrect.image_processing.rectify.rectifier import (
    RectificationResult,
    Rectifier,
)
from camrect.image_processing.rectify.resolution import compute_ground_resolution

logger = logging.getLogger(__name__)


class RectificationPipeline:
    """Builder-style rectification pipeline.

    Call ``with_*()`` methods to configure, then ``run()`` to execute.

    Examples
    --------
    >>> result = (RectificationPipeline()
    ...           .with_image(frame)
    ...           .with_projection(DLTProjection.from_dlt(L))
    ...           .with_distortion(RadialDistortion(K, [k1, k2]))
    ...           .with_roi([[120, 400], [900, 380], [1100, 700], [60, 720]])
    ...           .with_elevation(0.4)
    ...           .with_resolution(0.25)
    ...           .run())
    >>> result.raster.shape
    (161, 281, 3)
    """

    def __init__(self) -> None:
        self._image: Optional[np.ndarray] = None
        self._projection: Optional[ProjectionModel] = None
        self._distortion: Optional[RadialDistortion] = None
        self._roi: Optional[Any] = None
        self._z: Optional[float] = None
        self._resolution: Optional[float] = None
        self._scale_factor: float = 1.0
        self._max_cells: int = DEFAULT_MAX_CELLS
        self._plot: bool = False

    # ------------------------------------------------------------------
    # Builder methods
    # ------------------------------------------------------------------

    def with_image(self, image: np.ndarray) -> 'RectificationPipeline':
        """Set the source image, ``(rows, cols)`` or ``(rows, cols, bands)``."""
        self._image = image
        return self

    def with_projection(
        self, projection: ProjectionModel
    ) -> 'RectificationPipeline':
        """Set the camera projection model."""
        self._projection = projection
        return self

    def with_distortion(
        self, distortion: RadialDistortion
    ) -> 'RectificationPipeline':
        """Set the lens distortion model."""
        self._distortion = distortion
        return self

    def with_roi(self, roi: Any) -> 'RectificationPipeline':
        """Set the ``(N, 2)`` region of interest in ``(u, v)`` pixels."""
        self._roi = roi
        return self

    def with_elevation(self, z: float) -> 'RectificationPipeline':
        """Set the elevation of the world plane."""
        self._z = float(z)
        return self

    def with_resolution(self, resolution: float) -> 'RectificationPipeline':
        """Set the ground resolution, world units per output pixel."""
        self._resolution = resolution
        return self

    def with_scale_factor(self, factor: float) -> 'RectificationPipeline':
        """Set the multiplier applied to an auto-computed resolution.

        Parameters
        ----------
        factor : float
            Values > 1.0 produce coarser output.
        """
        if factor <= 0:
            raise ValidationError(f"scale factor must be positive, got {factor}")
        self._scale_factor = factor
        return self

    def with_max_cells(self, max_cells: int) -> 'RectificationPipeline':
        """Set the upper bound on the number of grid nodes."""
        self._max_cells = max_cells
        return self

    def with_plot(self, enabled: bool = True) -> 'RectificationPipeline':
        """Display the rectified raster after the run."""
        self._plot = enabled
        return self

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    def run(self) -> RectificationResult:
        """Execute the rectification.

        Returns
        -------
        RectificationResult

        Raises
        ------
        ValidationError
            If the image, projection, ROI or elevation was not set.
        GridConstructionError
            If the sampling grid cannot be built.
        """
        required = (
            (self._image, 'an image', '.with_image()'),
            (self._projection, 'a projection model', '.with_projection()'),
            (self._roi, 'a region of interest', '.with_roi()'),
            (self._z, 'an elevation', '.with_elevation()'),
        )
        for value, what, call in required:
            if value is None:
                raise ValidationError(
                    f"Rectification requires {what}. Call {call} before .run()."
                )

        resolution = self._resolve_resolution()
        rectifier = Rectifier(
            self._projection, self._roi, self._z, resolution,
            distortion=self._distortion, max_cells=self._max_cells,
        )
        result = rectifier.rectify(self._image)

        if self._plot:
            from camrect.plotting.rectified import plot_rectified
            plot_rectified(
                result.raster, self._projection, self._roi, self._z,
                distortion=self._distortion, resolution=resolution,
                show=True,
            )
        return result

    def _resolve_resolution(self) -> float:
        if self._resolution is not None:
            return self._resolution
        gsd = compute_ground_resolution(
            self._projection, self._roi, self._z, distortion=self._distortion
        )
        resolution = gsd * self._scale_factor
        logger.debug("Auto-computed ground resolution %.6g", resolution)
        return resolution
