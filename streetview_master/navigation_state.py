"""
Authoritative Street View navigation state.

The state keeps track of whether its links are up to date. Changing the pano
marks the links dirty, and they stay dirty until a link set is applied. Moves
refuse to act on dirty links, which prevents navigation along stale links
left over from a previous panorama.
"""

from __future__ import annotations

import logging
from typing import Optional

from .domain import LinkSet, Pano, Pov
from .geometry_utils import GeometryUtils
from .link_selector import select_nearest_link

logger = logging.getLogger(__name__)


class NavigationState:
    """Current pano, point of view and links of one viewer session."""

    def __init__(self, pov: Optional[Pov] = None) -> None:
        """
        Initialize an empty navigation state.

        Args:
            pov: Initial point of view, level and facing north by default
        """
        self._pano: Optional[Pano] = None
        self._pov: Optional[Pov] = pov if pov is not None else Pov(0.0, 0.0)
        self._links: Optional[LinkSet] = None
        self._links_dirty: bool = True

    @property
    def pano(self) -> Optional[Pano]:
        return self._pano

    @property
    def pov(self) -> Optional[Pov]:
        return self._pov

    @property
    def links(self) -> Optional[LinkSet]:
        return self._links

    @property
    def links_dirty(self) -> bool:
        return self._links_dirty

    def set_pano(self, pano: Pano) -> bool:
        """
        Set the current panorama.

        Args:
            pano: The panorama

        Returns:
            True if the pano changed
        """
        if self._pano is None or self._pano != pano:
            self._pano = pano
            self._links_dirty = True
            return True

        return False

    def set_pov(self, pov: Pov) -> None:
        self._pov = pov

    def set_links(self, links: LinkSet) -> None:
        """Apply links for the current pano. The binding is not checked."""
        self._links = links
        self._links_dirty = False

    def move_toward(self, heading: float) -> bool:
        """
        Move to the neighboring panorama nearest to the given direction.

        Args:
            heading: Direction to move, in degrees

        Returns:
            True if the pano changed
        """
        if self._links_dirty or self._links is None:
            logger.debug("Links are stale for pano %s; not moving", self._pano)
            return False

        nearest = select_nearest_link(self._links, heading)
        if nearest is None:
            return False

        return self.set_pano(nearest.pano)

    def move_forward(self) -> bool:
        """Move to the neighbor nearest the current heading."""
        if self._pov is None:
            return False

        return self.move_toward(self._pov.heading)

    def move_backward(self) -> bool:
        """Move to the neighbor nearest the direction behind the current heading."""
        if self._pov is None:
            return False

        return self.move_toward(GeometryUtils.opposite_heading(self._pov.heading))
