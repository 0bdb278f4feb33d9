"""Tests for decoding channel messages into inbound events."""

import pytest

from streetview_master.config import ChannelConfig
from streetview_master.domain import Link, Pano, Pov
from streetview_master.events import (
    AxisEvent,
    ButtonEvent,
    EventDecoder,
    EventDecodingError,
    LinksUpdate,
    PanoUpdate,
    PovUpdate,
    RefreshRequest,
    SceneSelect,
    UnknownChannelError,
)
from streetview_master.momentum import InputEventCodes
from streetview_master.scene_parser import SceneSelection


class TestEventDecoder:
    """Test cases for EventDecoder."""

    @pytest.fixture
    def decoder(self):
        return EventDecoder()

    def test_links_list(self, decoder):
        event = decoder.decode("links", [{"pano": "def", "heading": 10}])

        assert isinstance(event, LinksUpdate)
        assert list(event.links) == [Link(Pano("def"), 10.0)]
        assert event.links.pano is None

    def test_links_mapping(self, decoder):
        event = decoder.decode(
            "links", {"pano": "abc", "links": [{"pano": "def", "heading": 10}]}
        )
        assert event.links.pano == Pano("abc")

    def test_pov(self, decoder):
        assert decoder.decode("pov", {"heading": 45, "pitch": 3}) == PovUpdate(
            Pov(45.0, 3.0)
        )

    def test_pano(self, decoder):
        assert decoder.decode("pano", {"panoid": "abc"}) == PanoUpdate(Pano("abc"))

    def test_refresh(self, decoder):
        assert decoder.decode("refresh", {}) == RefreshRequest()

    def test_key(self, decoder):
        event = decoder.decode("EV_KEY", {"code": InputEventCodes.BTN_1, "value": 1})
        assert event == ButtonEvent(code=257, value=1)

    def test_single_axis(self, decoder):
        event = decoder.decode("EV_ABS", {"code": InputEventCodes.ABS_RZ, "value": 12})
        assert event == AxisEvent(values={5: 12.0})

    def test_axis_snapshot(self, decoder):
        """Snapshot keys arrive as strings from JSON."""
        event = decoder.decode("EV_ABS", {"values": {"1": -200, "3": -150, "5": 0}})
        assert event == AxisEvent(values={1: -200.0, 3: -150.0, 5: 0.0})

    def test_axis_without_values(self, decoder):
        with pytest.raises(EventDecodingError, match="EV_ABS"):
            decoder.decode("EV_ABS", {})

    def test_axis_code_without_value(self, decoder):
        with pytest.raises(EventDecodingError):
            decoder.decode("EV_ABS", {"code": 5})

    @pytest.mark.parametrize(
        "message",
        [
            {"code": 5, "value": float("nan")},
            {"code": 5, "value": float("inf")},
            {"values": {"1": float("-inf"), "3": 0}},
        ],
    )
    def test_axis_rejects_non_finite(self, decoder, message):
        with pytest.raises(EventDecodingError):
            decoder.decode("EV_ABS", message)

    def test_scene(self, decoder):
        event = decoder.decode(
            "scene", {"windows": [{"activity": "streetview", "assets": ["abc,45"]}]}
        )
        assert event == SceneSelect(SceneSelection("abc", 45.0, None))

    def test_scene_for_other_activity(self, decoder):
        message = {"windows": [{"activity": "earth", "assets": ["kml"]}]}
        assert decoder.decode("scene", message) is None

    def test_malformed_scene(self, decoder):
        message = {"windows": [{"activity": "streetview", "assets": ["abc,north"]}]}
        with pytest.raises(EventDecodingError, match="Invalid scene"):
            decoder.decode("scene", message)

    def test_malformed_pov(self, decoder):
        with pytest.raises(EventDecodingError, match="channel 'pov'"):
            decoder.decode("pov", {"pitch": 3})

    def test_non_mapping_payload(self, decoder):
        with pytest.raises(EventDecodingError, match="must be a mapping"):
            decoder.decode("pano", "abc")

    def test_non_list_links(self, decoder):
        with pytest.raises(EventDecodingError, match="Links message"):
            decoder.decode("links", "def")

    def test_unknown_channel(self, decoder):
        with pytest.raises(UnknownChannelError):
            decoder.decode("weather", {})

    def test_custom_channels(self):
        decoder = EventDecoder(ChannelConfig(pano="streetview/pano"))
        assert decoder.decode("streetview/pano", {"panoid": "abc"}) == PanoUpdate(
            Pano("abc")
        )
        with pytest.raises(UnknownChannelError):
            decoder.decode("pano", {"panoid": "abc"})
