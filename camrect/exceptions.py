# -*- coding: utf-8 -*-
"""
camrect Exception Hierarchy - Domain-specific exceptions for rectification.

Lets callers catch camrect errors distinctly from Python built-in
exceptions. Every camrect exception subclasses both ``CamrectError`` and
the matching built-in exception, so ``except ValueError`` keeps working
for validation failures.

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


class CamrectError(Exception):
    """Base exception for all camrect errors."""


class ValidationError(CamrectError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for shape mismatches, out-of-range parameters, and other
    input validation failures.
    """


class InvalidResolutionError(ValidationError):
    """Ground resolution is not a strictly positive finite number."""


class DegenerateROIError(ValidationError):
    """Region of interest has fewer than three usable vertices."""


class ProcessorError(CamrectError, RuntimeError):
    """Algorithm or processing failure during rectification."""


class GridConstructionError(ProcessorError):
    """The world-plane sampling grid cannot be built.

    Raised for non-finite or zero-area world rectangles, which usually
    mean the camera model does not fit the selected area.
    """


class GridTooLargeError(GridConstructionError):
    """The sampling grid would exceed the configured cell budget."""


class DependencyError(CamrectError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when a module requires an optional package (matplotlib)
    that is not installed.
    """


class ProjectionError(CamrectError, RuntimeError):
    """Coordinate transformation failure in a camera model.

    Raised for points on the plane at infinity and for view rays that
    never meet the world plane.
    """


class DistortionError(ProjectionError):
    """Lens distortion could not be removed (iteration did not converge)."""
