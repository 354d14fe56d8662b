# -*- coding: utf-8 -*-
"""
Rectification - Resample oblique imagery onto a horizontal world plane.

Rectifier
    Back-projects a region of interest, samples the world plane on a
    regular grid and gathers source pixels by nearest-neighbour lookup.
rectify
    Function form returning ``(u, v, raster)``; recovers from grid
    construction failures with empty outputs and a warning.
WorldRectangle, SamplingGrid, build_sampling_grid
    World bounds and lattice sizing with an explicit cell budget.
RectificationPipeline
    Builder wiring image, camera, lens, ROI, elevation and resolution.
compute_ground_resolution
    Ground footprint of one source pixel, used as default resolution.

Dependencies
------------
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

from camrect.image_processing.rectify.grid import (
    DEFAULT_MAX_CELLS,
    SamplingGrid,
    WorldRectangle,
    build_sampling_grid,
)
from camrect.image_processing.rectify.rectifier import (
    RectificationResult,
    Rectifier,
    rectify,
)
from camrect.image_processing.rectify.pipeline import RectificationPipeline
from camrect.image_processing.rectify.resolution import compute_ground_resolution

__all__ = [
    'DEFAULT_MAX_CELLS',
    'SamplingGrid',
    'WorldRectangle',
    'build_sampling_grid',
    'RectificationResult',
    'Rectifier',
    'rectify',
    'RectificationPipeline',
    'compute_ground_resolution',
]
