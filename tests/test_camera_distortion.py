# -*- coding: utf-8 -*-
"""
Radial Distortion Tests - Apply/remove two-coefficient lens distortion.

Dependencies
------------
pytest

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

from camrect.camera.distortion import RadialDistortion, distort, undistort
from camrect.exceptions import DistortionError, ValidationError


K = np.array([
    [1000.0, 0.0, 640.0],
    [0.0, 1000.0, 360.0],
    [0.0, 0.0, 1.0],
])
D = np.array([-0.2, 0.05])


@pytest.fixture
def image_points():
    """Grid of points spread over a 1280x720 frame."""
    u, v = np.meshgrid(np.linspace(1, 1280, 9), np.linspace(1, 720, 7))
    return np.column_stack([u.ravel(), v.ravel()])


class TestDistortFunctions:
    """Tests for the module-level distort/undistort functions."""

    def test_known_value(self):
        """Half a focal length right of centre: f = 1 - 0.05 + 0.003125."""
        out = distort(K, D, [1140.0, 360.0])
        assert out.shape == (2,)
        assert out[0] == pytest.approx(640.0 + 1000.0 * 0.5 * 0.953125)
        assert out[1] == pytest.approx(360.0)

    def test_principal_point_fixed(self):
        out = distort(K, D, np.array([[640.0, 360.0]]))
        np.testing.assert_allclose(out, [[640.0, 360.0]])

    def test_zero_coefficients_identity(self, image_points):
        np.testing.assert_allclose(
            distort(K, [0.0, 0.0], image_points), image_points
        )
        np.testing.assert_allclose(
            undistort(K, [0.0, 0.0], image_points), image_points
        )

    def test_barrel_moves_inward(self, image_points):
        """Negative k1 pulls points towards the principal point."""
        out = distort(K, D, image_points)
        centre = np.array([640.0, 360.0])
        r_in = np.linalg.norm(image_points - centre, axis=1)
        r_out = np.linalg.norm(out - centre, axis=1)
        moved = r_in > 1.0
        assert np.all(r_out[moved] < r_in[moved])

    def test_roundtrip(self, image_points):
        """undistort inverts distort to well below a pixel."""
        observed = distort(K, D, image_points)
        recovered = undistort(K, D, observed)
        np.testing.assert_allclose(recovered, image_points, atol=1e-6)

    def test_skewed_intrinsics_roundtrip(self, image_points):
        K_skew = K.copy()
        K_skew[0, 1] = 2.5
        observed = distort(K_skew, D, image_points)
        recovered = undistort(K_skew, D, observed)
        np.testing.assert_allclose(recovered, image_points, atol=1e-6)

    def test_no_convergence(self):
        """Strong distortion makes the fixed-point iteration diverge."""
        with pytest.raises(DistortionError, match="did not converge"):
            undistort(K, [10.0, 0.0], [1640.0, 360.0])

    def test_bad_intrinsics(self):
        with pytest.raises(ValidationError, match="3x3"):
            distort(np.eye(2), D, [1.0, 1.0])

    def test_bad_coefficients(self):
        with pytest.raises(ValidationError, match="two coefficients"):
            distort(K, [0.1, 0.0, 0.0], [1.0, 1.0])

    def test_bad_points(self):
        with pytest.raises(ValidationError, match=r"\(N, 2\)"):
            undistort(K, D, np.zeros((4, 3)))


class TestRadialDistortion:
    """Tests for the RadialDistortion model class."""

    def test_active(self):
        model = RadialDistortion(K, D)
        assert model.is_active
        assert "k1=-0.2" in repr(model)

    @pytest.mark.parametrize("k, d", [
        (None, D),
        (K, None),
        (np.empty((0, 0)), D),
        (K, []),
    ])
    def test_inactive_when_either_missing(self, k, d, image_points):
        model = RadialDistortion(k, d)
        assert not model.is_active
        np.testing.assert_array_equal(model.distort(image_points), image_points)
        np.testing.assert_array_equal(model.undistort(image_points), image_points)

    def test_none_factory(self):
        assert not RadialDistortion.none().is_active
        assert repr(RadialDistortion.none()) == "RadialDistortion(inactive)"

    def test_methods_match_functions(self, image_points):
        model = RadialDistortion(K, D)
        np.testing.assert_allclose(
            model.distort(image_points), distort(K, D, image_points)
        )
        np.testing.assert_allclose(
            model.undistort(image_points), undistort(K, D, image_points)
        )

    def test_default_iteration_settings(self):
        model = RadialDistortion(K, D)
        assert model.tolerance == 1e-10
        assert model.max_iterations == 100

    def test_invalid_tolerance(self):
        with pytest.raises(ValidationError, match="tolerance"):
            RadialDistortion(K, D, tolerance=0.0)

    def test_invalid_iterations(self):
        with pytest.raises(ValidationError, match="max_iterations"):
            RadialDistortion(K, D, max_iterations=0)

    def test_iteration_limit_applies(self):
        model = RadialDistortion(K, D, max_iterations=1)
        with pytest.raises(DistortionError):
            model.undistort([[1200.0, 700.0]])
