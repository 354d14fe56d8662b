# -*- coding: utf-8 -*-
"""
Plane Homography - Camera model for a single world plane.

Provides ``PlaneHomography``, a ``ProjectionModel`` for calibrations that
only describe the mapping between one world plane and the image, as a
3x3 homography. The plane elevation is carried through unchanged.

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


class PlaneHomography(ProjectionModel):
    """Homography between world-plane ``(X, Y)`` and pixel ``(u, v)``.

    The forward mapping is ``[su, sv, s]^T = H [X, Y, 1]^T``. Because the
    homography is valid for a single plane only, ``Z`` is ignored on the
    way in and set to the requested elevation on the way out.

    Parameters
    ----------
    matrix : np.ndarray
        ``(3, 3)`` non-singular homography matrix.

    Raises
    ------
    ValidationError
        If *matrix* is not 3x3, is non-finite, or is singular.

    Examples
    --------
    Identity calibration, world plane coincides with the image:

    >>> camera = PlaneHomography(np.eye(3))
    >>> camera.world_to_image(12.0, 7.0, 0.0)
    (12.0, 7.0)
    """

    def __init__(self, matrix: Union[np.ndarray, list]) -> None:
        arr = np.asarray(matrix, dtype=np.float64)
        if arr.shape != (3, 3):
            raise ValidationError(
                f"Homography must be 3x3, got shape {arr.shape}"
            )
        if not np.all(np.isfinite(arr)):
            raise ValidationError("Homography contains non-finite values")
        try:
            inverse = np.linalg.inv(arr)
        except np.linalg.LinAlgError as exc:
            raise ValidationError(f"Homography is singular: {exc}") from exc
        self.matrix = arr
        self._inverse = inverse

    def _world_to_image_array(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        H = self.matrix
        su = H[0, 0] * x + H[0, 1] * y + H[0, 2]
        sv = H[1, 0] * x + H[1, 1] * y + H[1, 2]
        s = H[2, 0] * x + H[2, 1] * y + H[2, 2]
        return _dehomogenise(su, sv, s)

    def _image_to_world_array(
        self,
        u: np.ndarray,
        v: np.ndarray,
        z: float = 0.0
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        Hi = self._inverse
        sx = Hi[0, 0] * u + Hi[0, 1] * v + Hi[0, 2]
        sy = Hi[1, 0] * u + Hi[1, 1] * v + Hi[1, 2]
        s = Hi[2, 0] * u + Hi[2, 1] * v + Hi[2, 2]
        with np.errstate(divide='ignore', invalid='ignore'):
            X = sx / s
            Y = sy / s
        Z = np.full_like(X, z)
        return X, Y, Z

    def __repr__(self) -> str:
        return f"PlaneHomography(matrix={self.matrix.tolist()})"
