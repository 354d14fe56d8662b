# -*- coding: utf-8 -*-
"""
Camera Module - Projection and lens distortion models.

Provides the camera-side collaborators of the rectification engine:
projection models that map between image pixels and a horizontal world
plane, and the radial lens distortion model.

Key Classes
-----------
- ProjectionModel: Abstract base class for image <-> world mapping
- DLTProjection: 3x4 pinhole matrix or 11-parameter DLT
- PlaneHomography: 3x3 plane-to-image homography
- RadialDistortion: Two-coefficient radial distortion

Usage
-----
    >>> from camrect.camera import DLTProjection, RadialDistortion
    >>> camera = DLTProjection.from_dlt(L)
    >>> lens = RadialDistortion(K, [k1, k2])
    >>> ideal = lens.undistort(roi)
    >>> X, Y, Z = camera.image_to_world(ideal[:, 0], ideal[:, 1], z=0.0)

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

from camrect.camera.base import ProjectionModel
from camrect.camera.dlt import DLTProjection
from camrect.camera.homography import PlaneHomography
from camrect.camera.distortion import RadialDistortion, distort, undistort

__all__ = [
    'ProjectionModel',
    'DLTProjection',
    'PlaneHomography',
    'RadialDistortion',
    'distort',
    'undistort',
]
