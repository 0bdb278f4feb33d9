"""Street View master package exposing navigation state and input handling."""

from streetview_master.config import ChannelConfig, InputConfig, MasterConfig
from streetview_master.domain import Link, LinkSet, Pano, Pov
from streetview_master.link_selector import select_nearest_link
from streetview_master.master import StreetviewMaster
from streetview_master.momentum import (
    InputEventCodes,
    MomentumInputTranslator,
    MoveDecision,
)
from streetview_master.navigation_state import NavigationState

__all__ = [
    "ChannelConfig",
    "InputConfig",
    "InputEventCodes",
    "Link",
    "LinkSet",
    "MasterConfig",
    "MomentumInputTranslator",
    "MoveDecision",
    "NavigationState",
    "Pano",
    "Pov",
    "StreetviewMaster",
    "select_nearest_link",
]
