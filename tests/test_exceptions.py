# -*- coding: utf-8 -*-
"""
Exception Hierarchy Tests.

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

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from camrect import exceptions as exc


class TestHierarchy:
    """Every library error is a CamrectError and a matching built-in."""

    @pytest.mark.parametrize("cls, builtin", [
        (exc.ValidationError, ValueError),
        (exc.InvalidResolutionError, ValueError),
        (exc.DegenerateROIError, ValueError),
        (exc.ProcessorError, RuntimeError),
        (exc.GridConstructionError, RuntimeError),
        (exc.GridTooLargeError, RuntimeError),
        (exc.DependencyError, ImportError),
        (exc.ProjectionError, RuntimeError),
        (exc.DistortionError, RuntimeError),
    ])
    def test_builtin_bases(self, cls, builtin):
        assert issubclass(cls, exc.CamrectError)
        assert issubclass(cls, builtin)

    def test_grid_errors(self):
        """Callers recovering from grid failures catch one class."""
        with pytest.raises(exc.GridConstructionError):
            raise exc.GridTooLargeError("too many cells")

    def test_distortion_is_projection_error(self):
        assert issubclass(exc.DistortionError, exc.ProjectionError)
        assert not issubclass(exc.ProjectionError, exc.GridConstructionError)
