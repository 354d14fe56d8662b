# -*- coding: utf-8 -*-
"""
Ground Resolution - Estimate the world footprint of one source pixel.

Picks a sensible output resolution for rectification when the caller
does not supply one: the ground distance covered by a one-pixel step in
the source image, evaluated at the centroid of the region of interest.

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
from typing import Any, Optional

# Third-party
import numpy as np

# camrect internal
from camrect.camera.base import ProjectionModel
from camrect.camera.distortion import RadialDistortion
from camrect.exceptions import ValidationError
from camrect.image_processing.rectify.rectifier import _validate_roi


def compute_ground_resolution(
    projection: ProjectionModel,
    roi: Any,
    z: float,
    distortion: Optional[RadialDistortion] = None
) -> float:
    """
    Ground sample distance at the centroid of *roi*.

    Back-projects the ROI centroid and its one-pixel neighbours in ``u``
    and ``v`` onto the plane ``Z = z`` and averages the two ground
    distances.

    Parameters
    ----------
    projection : ProjectionModel
        Camera projection model.
    roi : array-like
        ``(N, 2)`` polygon of ``(u, v)`` points.
    z : float
        Elevation of the world plane.
    distortion : RadialDistortion, optional
        Lens model applied to the probe points before back-projection.

    Returns
    -------
    float
        World units per source pixel.

    Raises
    ------
    ValidationError
        If the footprint is zero or not finite.
    """
    pts = _validate_roi(roi)
    cu, cv = pts.mean(axis=0)
    probes = np.array([
        [cu, cv],
        [cu + 1.0, cv],
        [cu, cv + 1.0],
    ])
    if distortion is not None:
        probes = distortion.undistort(probes)

    X, Y, _ = projection.image_to_world(probes[:, 0], probes[:, 1], z)
    du = np.hypot(X[1] - X[0], Y[1] - Y[0])
    dv = np.hypot(X[2] - X[0], Y[2] - Y[0])
    gsd = float(0.5 * (du + dv))

    if not np.isfinite(gsd) or gsd <= 0:
        raise ValidationError(
            f"Ground resolution at the ROI centroid is not usable ({gsd})"
        )
    return gsd
