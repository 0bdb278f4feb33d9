"""
Heading utilities for the Street View master.

This module provides helpers for reducing headings onto the compass circle
and measuring angular distances between headings, in degrees.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from .types import NumberLike


class GeometryUtils:
    """
    Utility class for heading calculations.

    All angles are compass headings in degrees. Inputs may be any real
    value; results are reduced modulo 360.
    """

    FULL_TURN_DEG = 360.0
    HALF_TURN_DEG = 180.0

    @staticmethod
    def normalize_heading(heading_deg: float) -> float:
        """
        Normalize heading to [0, 360) range.

        Args:
            heading_deg: Heading in degrees

        Returns:
            Normalized heading in [0, 360) range
        """
        return heading_deg % GeometryUtils.FULL_TURN_DEG

    @staticmethod
    def angular_distance(heading1_deg: float, heading2_deg: float) -> float:
        """
        Calculate the unsigned distance between two headings on the circle.

        Args:
            heading1_deg: First heading in degrees
            heading2_deg: Second heading in degrees

        Returns:
            Distance in degrees, in range [0, 180]
        """
        delta = abs(heading1_deg - heading2_deg) % GeometryUtils.FULL_TURN_DEG
        return min(delta, GeometryUtils.FULL_TURN_DEG - delta)

    @staticmethod
    def angular_distances(
        headings_deg: Sequence[NumberLike] | npt.NDArray[np.float64],
        target_deg: float,
    ) -> npt.NDArray[np.float64]:
        """
        Vectorized angular distance from each heading to a target heading.

        Args:
            headings_deg: Headings in degrees
            target_deg: Target heading in degrees

        Returns:
            Array of distances in degrees, in range [0, 180]
        """
        headings = np.asarray(headings_deg, dtype=np.float64)
        delta = np.abs(headings - target_deg) % GeometryUtils.FULL_TURN_DEG
        return np.minimum(delta, GeometryUtils.FULL_TURN_DEG - delta)

    @staticmethod
    def opposite_heading(heading_deg: float) -> float:
        """Return the heading pointing the other way (not normalized)."""
        return heading_deg - GeometryUtils.HALF_TURN_DEG
