# -*- coding: utf-8 -*-
"""
Plotting Tests - Rectified raster and extent overlay figures.

Dependencies
------------
pytest
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

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

pytest.importorskip("scipy")

from camrect.camera import PlaneHomography  # noqa: E402
from camrect.plotting import plot_extent, plot_rectified  # noqa: E402


SMALL_ROI = [[1, 1], [4, 1], [4, 3], [1, 3]]


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close('all')


@pytest.fixture
def small_image():
    return (np.arange(30, dtype=np.uint8) * 7).reshape(5, 6)


class TestPlotRectified:
    """Tests for the world-referenced raster display."""

    def test_world_extent(self):
        raster = np.zeros((3, 4), dtype=np.uint8)
        fig, ax = plot_rectified(raster, PlaneHomography(np.eye(3)),
                                 SMALL_ROI, 0.0, resolution=1.0)
        image = ax.get_images()[0]
        assert tuple(image.get_extent()) == (1, 4, 1, 3)
        assert ax.get_xlabel() == 'X'
        assert ax.get_ylabel() == 'Y'
        assert '1 units/pixel' in ax.get_title()

    def test_rgb_and_existing_axes(self):
        fig, ax = plt.subplots()
        raster = np.zeros((3, 4, 3), dtype=np.uint8)
        fig_out, ax_out = plot_rectified(raster, PlaneHomography(np.eye(3)),
                                         SMALL_ROI, 0.0, ax=ax, title='Beach')
        assert ax_out is ax
        assert fig_out is fig
        assert ax.get_title() == 'Beach'

    def test_show(self, monkeypatch):
        shown = []
        monkeypatch.setattr(plt, 'show', lambda: shown.append(True))
        plot_rectified(np.zeros((3, 4), dtype=np.uint8),
                       PlaneHomography(np.eye(3)), SMALL_ROI, 0.0, show=True)
        assert shown == [True]


class TestPlotExtent:
    """Tests for the source image overlay."""

    def test_outline_and_roi(self, small_image):
        u = np.array([1.0, 1.0, 4.0, 4.0])
        v = np.array([1.0, 3.0, 3.0, 1.0])
        fig, ax = plot_extent(small_image, u, v, roi=SMALL_ROI)
        lines = ax.get_lines()
        assert len(lines) == 2
        np.testing.assert_array_equal(lines[0].get_xdata(), [1, 1, 4, 4, 1])
        np.testing.assert_array_equal(lines[0].get_ydata(), [1, 3, 3, 1, 1])
        assert ax.get_legend() is not None
        # Image rows increase downwards
        assert ax.get_ylim() == (5.5, 0.5)

    def test_empty_extent(self, small_image):
        fig, ax = plot_extent(small_image, np.zeros(0), np.zeros(0))
        assert len(ax.get_lines()) == 0
        assert ax.get_legend() is None
