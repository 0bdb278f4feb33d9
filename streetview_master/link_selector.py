"""Nearest-link selection for heading based navigation."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

import numpy as np

from .domain import Link
from .geometry_utils import GeometryUtils


def select_nearest_link(
    links: Iterable[Link], desired_heading: float
) -> Optional[Link]:
    """
    Select the link departing closest to a desired heading.

    Distances are measured around the compass circle, so a link at 350
    degrees is 20 degrees away from a desired heading of 10. When several
    links are equally close, the first one in iteration order wins.

    Args:
        links: Candidate links, in producer order
        desired_heading: Heading in degrees, any real value

    Returns:
        The nearest link, or None when there are no links
    """
    candidates = list(links)
    if not candidates:
        return None

    distances = GeometryUtils.angular_distances(
        [link.heading for link in candidates], desired_heading
    )
    # argmin returns the first occurrence of the minimum
    return candidates[int(np.argmin(distances))]
