# -*- coding: utf-8 -*-
"""
Rectified Image Plotting - Display rectified rasters in world coordinates.

``plot_rectified`` shows a rectified raster with world X/Y axes and
gridlines, so points on the plane can be read off directly.
``plot_extent`` shows the source image with the rectified area and the
region of interest outlined.

Dependencies
------------
matplotlib

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
from typing import Any, Optional, Tuple

# Third-party
import numpy as np

# camrect internal
from camrect.camera.base import ProjectionModel
from camrect.camera.distortion import RadialDistortion
from camrect.exceptions import DependencyError


def _pyplot():
    try:
        import matplotlib.pyplot as plt
    except ImportError as exc:
        raise DependencyError(
            "matplotlib is required for plotting. "
            "Install with: pip install matplotlib"
        ) from exc
    return plt


def _axes(ax: Optional[Any], figsize: Tuple[float, float]):
    plt = _pyplot()
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure
    return plt, fig, ax


def plot_rectified(
    raster: np.ndarray,
    projection: ProjectionModel,
    roi: Any,
    z: float,
    distortion: Optional[RadialDistortion] = None,
    resolution: Optional[float] = None,
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    show: bool = False
):
    """
    Display a rectified raster with world-coordinate gridlines.

    The world extent is recomputed from the ROI exactly as during
    rectification, so the raster lines up with its world bounds.

    Parameters
    ----------
    raster : np.ndarray
        Rectified raster, ``(rows, cols)`` or ``(rows, cols, bands)``.
    projection : ProjectionModel
        Camera model used for the rectification.
    roi : array-like
        ``(N, 2)`` region of interest used for the rectification.
    z : float
        Plane elevation.
    distortion : RadialDistortion, optional
        Lens model used for the rectification.
    resolution : float, optional
        Ground resolution, shown in the title.
    ax : matplotlib.axes.Axes, optional
        Axes to draw into. A new figure is created when omitted.
    title : str, optional
        Plot title.
    show : bool, default=False
        Call ``plt.show()`` after drawing.

    Returns
    -------
    Tuple[Figure, Axes]
    """
    from camrect.image_processing.rectify.rectifier import Rectifier

    # Resolution does not affect the world rectangle
    rectangle = Rectifier(
        projection, roi, z, resolution if resolution else 1.0,
        distortion=distortion,
    ).rectangle
    x_lo, x_hi = rectangle.world_x_bounds
    y_lo, y_hi = rectangle.world_y_bounds

    plt, fig, ax = _axes(ax, figsize=(10, 8))
    if raster.ndim == 2 or (raster.ndim == 3 and raster.shape[2] == 1):
        ax.imshow(np.squeeze(raster), cmap='gray', vmin=0, vmax=255,
                  extent=(x_lo, x_hi, y_lo, y_hi), origin='upper')
    else:
        ax.imshow(raster, extent=(x_lo, x_hi, y_lo, y_hi), origin='upper')

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.grid(True, color='w', linestyle=':', linewidth=0.8)
    if title is None:
        title = f"Rectified image, Z = {z:g}"
        if resolution:
            title += f", {resolution:g} units/pixel"
    ax.set_title(title)
    fig.tight_layout()

    if show:
        plt.show()
    return fig, ax


def plot_extent(
    image: np.ndarray,
    u: np.ndarray,
    v: np.ndarray,
    roi: Optional[Any] = None,
    ax: Optional[Any] = None,
    title: Optional[str] = None,
    show: bool = False
):
    """
    Display the source image with the rectified extent outlined.

    Parameters
    ----------
    image : np.ndarray
        Source image.
    u, v : np.ndarray
        Extent corner coordinates returned by ``rectify``.
    roi : array-like, optional
        ``(N, 2)`` region of interest, drawn dashed when given.
    ax : matplotlib.axes.Axes, optional
        Axes to draw into.
    title : str, optional
        Plot title.
    show : bool, default=False
        Call ``plt.show()`` after drawing.

    Returns
    -------
    Tuple[Figure, Axes]
    """
    plt, fig, ax = _axes(ax, figsize=(10, 8))
    rows, cols = image.shape[:2]
    # Pixel centres at 1-based (u, v)
    extent = (0.5, cols + 0.5, rows + 0.5, 0.5)
    if image.ndim == 2:
        ax.imshow(image, cmap='gray', extent=extent)
    else:
        ax.imshow(image, extent=extent)

    u = np.asarray(u, dtype=np.float64)
    v = np.asarray(v, dtype=np.float64)
    if u.size:
        ax.plot(np.append(u, u[0]), np.append(v, v[0]), 'r-', linewidth=1.5,
                label='Rectified area')
    if roi is not None:
        pts = np.asarray(roi, dtype=np.float64)
        ax.plot(np.append(pts[:, 0], pts[0, 0]),
                np.append(pts[:, 1], pts[0, 1]),
                'y--', linewidth=1.0, label='ROI')
    if u.size or roi is not None:
        ax.legend(loc='upper right')

    ax.set_xlim(0.5, cols + 0.5)
    ax.set_ylim(rows + 0.5, 0.5)
    ax.set_xlabel('U')
    ax.set_ylabel('V')
    ax.set_title(title or 'Rectified area')
    fig.tight_layout()

    if show:
        plt.show()
    return fig, ax
