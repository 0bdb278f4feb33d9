"""
Tests for heading utilities.

Tests heading normalization, opposite headings and angular distances
on the compass circle.
"""

import numpy as np
import pytest

from streetview_master.geometry_utils import GeometryUtils
from tests.test_fixtures import assert_heading_close


class TestGeometryUtils:
    """Test cases for GeometryUtils class."""

    def test_normalize_heading(self):
        """Test heading normalization."""
        test_cases = [
            (0.0, 0.0),
            (180.0, 180.0),
            (360.0, 0.0),
            (540.0, 180.0),
            (-90.0, 270.0),
            (-360.0, 0.0),
        ]

        for heading, expected in test_cases:
            assert GeometryUtils.normalize_heading(heading) == pytest.approx(expected)

    def test_angular_distance(self):
        """Test unsigned angular distance."""
        test_cases = [
            (0.0, 10.0, 10.0),
            (0.0, 190.0, 170.0),
            (-180.0, 190.0, 10.0),
            (-180.0, 10.0, 170.0),
            (720.0, 0.0, 0.0),
            (5.0, -5.0, 10.0),
        ]

        for heading1, heading2, expected in test_cases:
            result = GeometryUtils.angular_distance(heading1, heading2)
            assert result == pytest.approx(expected)

    def test_angular_distances_matches_scalar(self):
        """Vectorized distances agree with the scalar version."""
        headings = [10.0, 190.0, -45.0, 359.0, 725.0]
        target = -180.0

        distances = GeometryUtils.angular_distances(headings, target)

        assert isinstance(distances, np.ndarray)
        expected = [GeometryUtils.angular_distance(h, target) for h in headings]
        np.testing.assert_allclose(distances, expected)

    def test_angular_distances_empty(self):
        """Empty input gives an empty result."""
        assert GeometryUtils.angular_distances([], 0.0).shape == (0,)

    def test_opposite_heading(self):
        """Opposite heading is half a turn away."""
        assert_heading_close(GeometryUtils.opposite_heading(0.0), 180.0)
        assert_heading_close(GeometryUtils.opposite_heading(270.0), 90.0)
