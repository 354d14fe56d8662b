# -*- coding: utf-8 -*-
"""
camrect - Camera Rectification Library.

Rectifies an oblique image from a single calibrated camera onto a
horizontal world plane at a fixed elevation, producing a metrically
scaled, orthophoto-like raster for coastal and river monitoring.

Dependencies
------------
numpy
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

__version__ = "0.1.0"

from camrect.exceptions import (
    CamrectError,
    ValidationError,
    InvalidResolutionError,
    DegenerateROIError,
    ProcessorError,
    GridConstructionError,
    GridTooLargeError,
    DependencyError,
    ProjectionError,
    DistortionError,
)
from camrect.camera import (
    DLTProjection,
    PlaneHomography,
    ProjectionModel,
    RadialDistortion,
)
from camrect.image_processing.rectify import (
    RectificationPipeline,
    RectificationResult,
    Rectifier,
    rectify,
)

__all__ = [
    'CamrectError',
    'ValidationError',
    'InvalidResolutionError',
    'DegenerateROIError',
    'ProcessorError',
    'GridConstructionError',
    'GridTooLargeError',
    'DependencyError',
    'ProjectionError',
    'DistortionError',
    'DLTProjection',
    'PlaneHomography',
    'ProjectionModel',
    'RadialDistortion',
    'RectificationPipeline',
    'RectificationResult',
    'Rectifier',
    'rectify',
]
