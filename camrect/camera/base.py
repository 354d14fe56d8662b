# -*- coding: utf-8 -*-
"""
Projection Model Base Classes - Abstract interfaces for camera models.

Defines the abstract base class for transforming between image pixel
coordinates ``(u, v)`` and world-plane coordinates ``(X, Y, Z)``.
Concrete implementations handle different camera parameterisations
(3x4 pinhole/DLT matrix, 3x3 plane homography).

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

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple, Union

import numpy as np

from camrect.exceptions import ProjectionError, ValidationError


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def _to_array(val: Any) -> np.ndarray:
    """Convert scalar, list, or array to 1D numpy array of float64."""
    arr = np.asarray(val, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    return arr.ravel()


class ProjectionModel(ABC):
    """
    Abstract base class for camera projection models.

    Maps between image pixel coordinates and coordinates on a horizontal
    world plane at a fixed elevation. ``image_to_world`` and
    ``world_to_image`` accept scalars, separate arrays, or stacked
    arrays, and return matching types.

    Coordinate Conventions
    ----------------------
    - **Image coordinates:** ``(u, v)``, ``u`` along columns, ``v`` along
      rows, in the units of the calibration (1-based pixel centres for
      calibrations made with 1-based tools).
    - **World coordinates:** ``(X, Y, Z)`` in the units of the ground
      control points; ``Z`` is the plane elevation.

    Notes
    -----
    Subclasses implement ``_image_to_world_array`` and
    ``_world_to_image_array`` which operate on 1D numpy arrays. The
    public methods handle scalar/list/array dispatch.
    """

    @abstractmethod
    def _image_to_world_array(
        self,
        u: np.ndarray,
        v: np.ndarray,
        z: float = 0.0
    ) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Back-project pixel coordinate arrays onto the plane ``Z = z``.

        Parameters
        ----------
        u : np.ndarray
            Column pixel coordinates (1D array, float64).
        v : np.ndarray
            Row pixel coordinates (1D array, float64).
        z : float, default=0.0
            Elevation of the world plane.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            ``(X, Y, Z)`` world coordinate arrays.
        """
        pass

    @abstractmethod
    def _world_to_image_array(
        self,
        x: np.ndarray,
        y: np.ndarray,
        z: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Forward-project world coordinate arrays to pixel coordinates.

        Parameters
        ----------
        x, y, z : np.ndarray
            World coordinates (1D arrays, float64, equal length).

        Returns
        -------
        Tuple[np.ndarray, np.ndarray]
            ``(U, V)`` pixel coordinate arrays.
        """
        pass

    def image_to_world(
        self,
        u: Union[float, list, np.ndarray],
        v: Union[float, list, np.ndarray],
        z: float = 0.0
    ) -> Union[Tuple[float, float, float],
               Tuple[np.ndarray, np.ndarray, np.ndarray]]:
        """
        Back-project image coordinates onto the world plane ``Z = z``.

        Parameters
        ----------
        u : float, list, or np.ndarray
            Column pixel coordinate(s).
        v : float, list, or np.ndarray
            Row pixel coordinate(s).
        z : float, default=0.0
            Elevation of the world plane.

        Returns
        -------
        Tuple[float, float, float]
            ``(X, Y, Z)`` when scalar inputs are given.
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            ``(X, Y, Z)`` arrays when array/list inputs are given.

        Raises
        ------
        ValidationError
            If ``u`` and ``v`` have different lengths.
        ProjectionError
            If a view ray does not intersect the plane.

        Examples
        --------
        >>> X, Y, Z = camera.image_to_world(512.0, 384.0, z=0.0)
        >>> X, Y, Z = camera.image_to_world([10, 20], [30, 40], z=1.5)
        """
        u_arr = _to_array(u)
        v_arr = _to_array(v)
        if u_arr.shape != v_arr.shape:
            raise ValidationError(
                f"u and v must have the same length, got {u_arr.size} "
                f"and {v_arr.size}"
            )
        X, Y, Z = self._image_to_world_array(u_arr, v_arr, float(z))
        if not (np.all(np.isfinite(X)) and np.all(np.isfinite(Y))):
            raise ProjectionError(
                "Back-projection produced non-finite world coordinates; "
                "a view ray is parallel to the world plane"
            )
        if _is_scalar(u) and _is_scalar(v):
            return float(X[0]), float(Y[0]), float(Z[0])
        return X, Y, Z

    def world_to_image(
        self,
        x_or_points: Union[float, list, np.ndarray],
        y: Optional[Union[float, list, np.ndarray]] = None,
        z: Optional[Union[float, list, np.ndarray]] = None
    ) -> Union[Tuple[float, float], Tuple[np.ndarray, np.ndarray]]:
        """
        Forward-project world coordinates to image coordinates.

        Accepts two input forms:

        - **Stacked array:** ``world_to_image(points_Nx3)``
        - **Separate coordinates:** ``world_to_image(x, y, z)``; a scalar
          ``z`` applies to every point.

        Parameters
        ----------
        x_or_points : float, list, or np.ndarray
            World X coordinate(s), or an ``(N, 3)`` array of ``[X, Y, Z]``
            rows when ``y`` is omitted.
        y : float, list, or np.ndarray, optional
            World Y coordinate(s).
        z : float, list, or np.ndarray, optional
            World Z coordinate(s). Defaults to 0.0.

        Returns
        -------
        Tuple[float, float]
            ``(U, V)`` when scalar inputs are given.
        Tuple[np.ndarray, np.ndarray]
            ``(U, V)`` arrays otherwise.

        Raises
        ------
        ValidationError
            If the input shape is invalid.
        ProjectionError
            If a point projects to the plane at infinity.
        """
        if y is None:
            pts = np.asarray(x_or_points, dtype=np.float64)
            if pts.ndim == 1 and pts.shape[0] == 3:
                pts = pts.reshape(1, 3)
            if pts.ndim != 2 or pts.shape[1] != 3:
                raise ValidationError(
                    f"Expected (N, 3) array of world points, got shape "
                    f"{pts.shape}"
                )
            return self._world_to_image_array(pts[:, 0], pts[:, 1], pts[:, 2])

        x_arr = _to_array(x_or_points)
        y_arr = _to_array(y)
        if x_arr.shape != y_arr.shape:
            raise ValidationError(
                f"x and y must have the same length, got {x_arr.size} "
                f"and {y_arr.size}"
            )
        z_arr = _to_array(0.0 if z is None else z)
        if z_arr.size == 1:
            z_arr = np.full_like(x_arr, z_arr[0])
        elif z_arr.shape != x_arr.shape:
            raise ValidationError(
                f"z must be scalar or match x in length, got {z_arr.size} "
                f"for {x_arr.size} points"
            )

        U, V = self._world_to_image_array(x_arr, y_arr, z_arr)
        if _is_scalar(x_or_points) and _is_scalar(y):
            return float(U[0]), float(V[0])
        return U, V


def _dehomogenise(
    su: np.ndarray,
    sv: np.ndarray,
    s: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """Divide homogeneous pixel coordinates by their scale."""
    if np.any(s == 0):
        raise ProjectionError(
            "World point projects to the plane at infinity"
        )
    return su / s, sv / s
