# -*- coding: utf-8 -*-
"""
Radial Lens Distortion - Apply and remove two-coefficient radial distortion.

Pixel coordinates are normalised with the inverse intrinsic matrix, then
scaled by the radial factor::

    r2 = x**2 + y**2
    f  = 1 + k1 * r2 + k2 * r2**2
    (xd, yd) = (f * x, f * y)

``distort`` applies the factor directly. ``undistort`` inverts it by
fixed-point iteration starting from the distorted coordinates. Both are
vectorized over ``(N, 2)`` point arrays.

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
from typing import Optional, Tuple, Union

# Third-party
import numpy as np

# camrect internal
from camrect.exceptions import DistortionError, ValidationError

logger = logging.getLogger(__name__)

ArrayLike = Union[np.ndarray, list, tuple]


def _as_points(points: ArrayLike) -> Tuple[np.ndarray, bool]:
    """Return points as an (N, 2) float64 array and whether input was 1D."""
    pts = np.asarray(points, dtype=np.float64)
    single = pts.ndim == 1
    if single:
        pts = pts.reshape(1, -1)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValidationError(
            f"Expected (N, 2) array of (u, v) points, got shape "
            f"{np.shape(points)}"
        )
    return pts, single


def _validate_parameters(
    intrinsics: ArrayLike,
    coefficients: ArrayLike
) -> Tuple[np.ndarray, np.ndarray]:
    K = np.asarray(intrinsics, dtype=np.float64)
    D = np.asarray(coefficients, dtype=np.float64).ravel()
    if K.shape != (3, 3):
        raise ValidationError(
            f"Intrinsic matrix must be 3x3, got shape {K.shape}"
        )
    if D.size != 2:
        raise ValidationError(
            f"Radial distortion requires two coefficients [k1, k2], "
            f"got {D.size}"
        )
    return K, D


def _normalise(K: np.ndarray, pts: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    homogeneous = np.column_stack([pts, np.ones(pts.shape[0])])
    cam = np.linalg.solve(K, homogeneous.T)
    return cam[0] / cam[2], cam[1] / cam[2]


def _to_pixels(K: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    pix = K @ np.vstack([x, y, np.ones_like(x)])
    return np.column_stack([pix[0] / pix[2], pix[1] / pix[2]])


def _radial_factor(D: np.ndarray, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    r2 = x * x + y * y
    return 1.0 + D[0] * r2 + D[1] * r2 * r2


def distort(
    intrinsics: ArrayLike,
    coefficients: ArrayLike,
    points: ArrayLike
) -> np.ndarray:
    """Apply radial lens distortion to ideal pixel coordinates.

    Parameters
    ----------
    intrinsics : array-like
        ``(3, 3)`` intrinsic matrix ``K``.
    coefficients : array-like
        Radial coefficients ``[k1, k2]``.
    points : array-like
        ``(N, 2)`` array of ``(u, v)``, or a single ``(u, v)`` pair.

    Returns
    -------
    np.ndarray
        Distorted points, same shape as *points*.
    """
    K, D = _validate_parameters(intrinsics, coefficients)
    pts, single = _as_points(points)
    x, y = _normalise(K, pts)
    f = _radial_factor(D, x, y)
    out = _to_pixels(K, f * x, f * y)
    return out[0] if single else out


def undistort(
    intrinsics: ArrayLike,
    coefficients: ArrayLike,
    points: ArrayLike,
    tolerance: float = 1e-10,
    max_iterations: int = 100
) -> np.ndarray:
    """Remove radial lens distortion from observed pixel coordinates.

    Parameters
    ----------
    intrinsics : array-like
        ``(3, 3)`` intrinsic matrix ``K``.
    coefficients : array-like
        Radial coefficients ``[k1, k2]``.
    points : array-like
        ``(N, 2)`` array of distorted ``(u, v)``, or a single pair.
    tolerance : float, default=1e-10
        Convergence threshold on the largest update, in normalised
        image coordinates.
    max_iterations : int, default=100
        Iteration limit.

    Returns
    -------
    np.ndarray
        Undistorted points, same shape as *points*.

    Raises
    ------
    DistortionError
        If the iteration does not converge.
    """
    K, D = _validate_parameters(intrinsics, coefficients)
    pts, single = _as_points(points)
    xd, yd = _normalise(K, pts)

    x, y = xd.copy(), yd.copy()
    for iteration in range(max_iterations):
        f = _radial_factor(D, x, y)
        x_new = xd / f
        y_new = yd / f
        step = np.max(np.abs(np.concatenate([x_new - x, y_new - y])),
                      initial=0.0)
        x, y = x_new, y_new
        if not np.isfinite(step):
            break
        if step < tolerance:
            logger.debug("Undistortion converged after %d iterations",
                         iteration + 1)
            out = _to_pixels(K, x, y)
            return out[0] if single else out

    raise DistortionError(
        f"Undistortion did not converge within {max_iterations} iterations; "
        f"the distortion coefficients {D.tolist()} are too strong for the "
        f"selected points"
    )


class RadialDistortion:
    """Two-coefficient radial lens distortion model.

    Distortion is active only when both the intrinsic matrix and the
    coefficients are supplied (non-empty). An inactive model passes
    points through unchanged in both directions.

    Parameters
    ----------
    intrinsics : array-like, optional
        ``(3, 3)`` upper triangular intrinsic matrix ``K``. ``None`` or an
        empty array disables distortion.
    coefficients : array-like, optional
        ``[k1, k2]``. ``None`` or an empty array disables distortion.
    tolerance : float, default=1e-10
        Convergence threshold for ``undistort``.
    max_iterations : int, default=100
        Iteration limit for ``undistort``.

    Examples
    --------
    >>> model = RadialDistortion(K, [-0.21, 0.05])
    >>> ideal = model.undistort(roi)
    >>> observed = model.distort(ideal)
    """

    def __init__(
        self,
        intrinsics: Optional[ArrayLike] = None,
        coefficients: Optional[ArrayLike] = None,
        tolerance: float = 1e-10,
        max_iterations: int = 100
    ) -> None:
        if tolerance <= 0:
            raise ValidationError(
                f"tolerance must be positive, got {tolerance}"
            )
        if max_iterations < 1:
            raise ValidationError(
                f"max_iterations must be at least 1, got {max_iterations}"
            )
        self.tolerance = tolerance
        self.max_iterations = max_iterations

        empty_k = intrinsics is None or np.size(intrinsics) == 0
        empty_d = coefficients is None or np.size(coefficients) == 0
        if empty_k or empty_d:
            self.intrinsics = None
            self.coefficients = None
        else:
            self.intrinsics, self.coefficients = _validate_parameters(
                intrinsics, coefficients
            )

    @classmethod
    def none(cls) -> 'RadialDistortion':
        """Create an inactive (identity) distortion model."""
        return cls()

    @property
    def is_active(self) -> bool:
        """Whether distortion correction is applied."""
        return self.intrinsics is not None

    def undistort(self, points: ArrayLike) -> np.ndarray:
        """Remove distortion from observed ``(u, v)`` points."""
        if not self.is_active:
            return np.asarray(points, dtype=np.float64)
        return undistort(
            self.intrinsics, self.coefficients, points,
            tolerance=self.tolerance, max_iterations=self.max_iterations,
        )

    def distort(self, points: ArrayLike) -> np.ndarray:
        """Apply distortion to ideal ``(u, v)`` points."""
        if not self.is_active:
            return np.asarray(points, dtype=np.float64)
        return distort(self.intrinsics, self.coefficients, points)

    def __repr__(self) -> str:
        if not self.is_active:
            return "RadialDistortion(inactive)"
        return f"RadialDistortion(k1={self.coefficients[0]}, k2={self.coefficients[1]})"
