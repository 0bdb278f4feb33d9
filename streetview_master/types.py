"""Shared type aliases and structured payload definitions for Street View master."""

from __future__ import annotations

from typing import Callable, TypedDict, Union

NumberLike = Union[int, float]

Millis = float
Clock = Callable[[], Millis]


class PanoPayload(TypedDict):
    """Panorama identity as broadcast on the pano channel."""

    panoid: str


class PovPayload(TypedDict):
    """Orientation as broadcast on the pov channel."""

    heading: float
    pitch: float


class LinkPayload(TypedDict):
    """Navigable neighbor link as reported by the browser."""

    pano: str
    heading: float


OutboundPayload = Union[PanoPayload, PovPayload]
Publisher = Callable[[str, OutboundPayload], None]


__all__ = [
    "Clock",
    "LinkPayload",
    "Millis",
    "NumberLike",
    "OutboundPayload",
    "PanoPayload",
    "PovPayload",
    "Publisher",
]
