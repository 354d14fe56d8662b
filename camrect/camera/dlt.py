# -*- coding: utf-8 -*-
"""
DLT Projection - Pinhole / Direct Linear Transform camera model.

Provides ``DLTProjection``, a concrete ``ProjectionModel`` built on a 3x4
projection matrix. The matrix is either a pinhole model ``H = K[R|t]`` or
the 11 coefficients of a Direct Linear Transform with the twelfth element
fixed at 1.

Coordinate flow:

    world (X, Y, Z)  --H-->  homogeneous (su, sv, s)  --/s-->  pixel (u, v)

Back-projection fixes ``Z = z`` and solves the remaining 2x2 linear
system for ``(X, Y)`` in closed form, fully vectorized.

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
from typing import Tuple, Union

# Third-party
import numpy as np

# camrect internal
from camrect.camera.base import ProjectionModel, _dehomogenise
from camrect.exceptions import ValidationError


class DLTProjection(ProjectionModel):
    """Camera model defined by a 3x4 projection matrix.

    The matrix maps homogeneous world points to homogeneous pixels::

        [su]       [X]
        [sv] = H * [Y]
        [s ]       [Z]
                   [1]

    Parameters
    ----------
    matrix : np.ndarray
        Either a ``(3, 4)`` projection matrix, or the 11 DLT coefficients
        ``L1..L11`` (row-major, ``H[2, 3] = 1``).

    Attributes
    ----------
    matrix : np.ndarray
        The ``(3, 4)`` projection matrix (float64).

    Raises
    ------
    ValidationError
        If *matrix* has neither 12 nor 11 elements, or is rank deficient.

    Examples
    --------
    >>> K = np.array([[1000, 0, 640], [0, 1000, 360], [0, 0, 1]])
    >>> camera = DLTProjection.from_pinhole(K, R, t)
    >>> u, v = camera.world_to_image(10.0, 25.0, 0.0)
    >>> X, Y, Z = camera.image_to_world(u, v, z=0.0)
    """

    def __init__(self, matrix: Union[np.ndarray, list]) -> None:
        arr = np.asarray(matrix, dtype=np.float64)
        if arr.size == 11:
            arr = np.append(arr.ravel(), 1.0)
        if arr.size != 12:
            raise ValidationError(
                f"Projection matrix must be 3x4 or 11 DLT coefficients, "
                f"got {arr.size} elements"
            )
        arr = arr.reshape(3, 4)
        if not np.all(np.isfinite(arr)):
            raise ValidationError("Projection matrix contains non-finite values")
        if np.linalg.matrix_rank(arr) < 3:
            raise ValidationError("Projection matrix must have rank 3")
        self.matrix = arr

    @classmethod
    def from_dlt(cls, coefficients: Union[np.ndarray, list]) -> 'DLTProjection':
        """Create from the 11 DLT coefficients ``L1..L11``.

        Parameters
        ----------
        coefficients : array-like
            Eleven DLT coefficients.

        Returns
        -------
        DLTProjection
        """
        coefficients = np.asarray(coefficients, dtype=np.float64).ravel()
        if coefficients.size != 11:
            raise ValidationError(
                f"DLT requires 11 coefficients, got {coefficients.size}"
            )
        return cls(coefficients)

    @classmethod
    def from_pinhole(
        cls,
        intrinsics: np.ndarray,
        rotation: np.ndarray,
        translation: np.ndarray
    ) -> 'DLTProjection':
        """Create from pinhole parameters, ``H = K [R | t]``.

        Parameters
        ----------
        intrinsics : np.ndarray
            ``(3, 3)`` intrinsic matrix ``K``.
        rotation : np.ndarray
            ``(3, 3)`` world-to-camera rotation ``R``.
        translation : np.ndarray
            Translation vector ``t`` (3 elements).

        Returns
        -------
        DLTProjection
        """
        K = np.asarray(intrinsics, dtype=np.float64)
        R = np.asarray(rotation, dtype=np.float64)
        t = np.asarray(translation, dtype=np.float64).reshape(3, 1)
        if K.shape != (3, 3) or R.shape != (3, 3):
            raise ValidationError(
                f"Intrinsics and rotation must be 3x3, got {K.shape} "
                f"and {R.shape}"
            )
        return cls(K @ np.hstack([R, t]))

    def _world_to_image_array(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Apply ``H`` to homogeneous world points and dehomogenise."""
        H = self.matrix
        su = H[0, 0] * x + H[0, 1] * y + H[0, 2] * z + H[0, 3]
        sv = H[1, 0] * x + H[1, 1] * y + H[1, 2] * z + H[1, 3]
        s = H[2, 0] * x + H[2, 1] * y + H[2, 2] * z + H[2, 3]
        return _dehomogenise(su, sv, s)

    def _image_to_world_array(
        self,
        u: np.ndarray,
        v: np.ndarray,
        z: float = 0.0
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Intersect view rays with the plane ``Z = z``.

        Each pixel gives two equations linear in ``(X, Y)``::

            (h11 - u h31) X + (h12 - u h32) Y = u (h33 z + h34) - h13 z - h14
            (h21 - v h31) X + (h22 - v h32) Y = v (h33 z + h34) - h23 z - h24

        solved by Cramer's rule. A zero determinant leaves non-finite
        values, which the public method reports as ``ProjectionError``.
        """
        H = self.matrix
        a11 = H[0, 0] - u * H[2, 0]
        a12 = H[0, 1] - u * H[2, 1]
        a21 = H[1, 0] - v * H[2, 0]
        a22 = H[1, 1] - v * H[2, 1]
        w = H[2, 2] * z + H[2, 3]
        b1 = u * w - H[0, 2] * z - H[0, 3]
        b2 = v * w - H[1, 2] * z - H[1, 3]

        det = a11 * a22 - a12 * a21
        with np.errstate(divide='ignore', invalid='ignore'):
            X = (b1 * a22 - a12 * b2) / det
            Y = (a11 * b2 - a21 * b1) / det
        Z = np.full_like(X, z)
        return X, Y, Z

    def __repr__(self) -> str:
        return f"DLTProjection(matrix={self.matrix.tolist()})"
