# -*- coding: utf-8 -*-
"""
Image Processing Module - Processor base classes and rectification.

base.py
    ``ImageProcessor`` and ``ImageTransform`` abstract base classes.
versioning.py
    ``@processor_version`` decorator.
rectify/
    Single-view plane rectification (``Rectifier``, ``rectify``,
    ``RectificationPipeline``).

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

from camrect.image_processing.base import ImageProcessor, ImageTransform
from camrect.image_processing.versioning import processor_version
from camrect.image_processing.rectify import (
    RectificationPipeline,
    RectificationResult,
    Rectifier,
    SamplingGrid,
    WorldRectangle,
    rectify,
)

__all__ = [
    'ImageProcessor',
    'ImageTransform',
    'processor_version',
    'RectificationPipeline',
    'RectificationResult',
    'Rectifier',
    'SamplingGrid',
    'WorldRectangle',
    'rectify',
]
