"""
Tests for the navigation state.

Tests pano change detection, the links dirty flag and link based moves.
"""

from streetview_master.domain import LinkSet, Pano, Pov
from streetview_master.navigation_state import NavigationState
from tests.test_fixtures import make_links


class TestInitialState:
    """Test the state of a fresh session."""

    def test_defaults(self):
        state = NavigationState()

        assert state.pano is None
        assert state.links is None
        assert state.links_dirty is True
        assert state.pov == Pov(0.0, 0.0)

    def test_custom_initial_pov(self):
        state = NavigationState(Pov(90.0, -5.0))
        assert state.pov == Pov(90.0, -5.0)

    def test_moves_refused_initially(self):
        """Fresh state has dirty links and cannot move."""
        state = NavigationState()
        assert state.move_forward() is False
        assert state.move_backward() is False
        assert state.pano is None


class TestSetPano:
    """Test cases for set_pano."""

    def test_first_pano_is_a_change(self):
        state = NavigationState()
        assert state.set_pano(Pano("abc")) is True
        assert state.pano == Pano("abc")
        assert state.links_dirty is True

    def test_identical_pano_is_noop(self):
        """Same pano twice reports one change and keeps links fresh."""
        state = NavigationState()
        assert state.set_pano(Pano("abc")) is True
        state.set_links(make_links("abc", ("def", 10.0)))
        assert state.set_pano(Pano("abc")) is False
        assert state.links_dirty is False

    def test_new_pano_marks_links_dirty(self, navigation_state):
        assert navigation_state.links_dirty is False
        assert navigation_state.set_pano(Pano("xyz")) is True
        assert navigation_state.links_dirty is True

    def test_pano_equality_is_identifier_equality(self):
        state = NavigationState()
        state.set_pano(Pano("abc"))
        assert state.set_pano(Pano("a" + "bc")) is False


class TestSetPovAndLinks:
    """Test cases for set_pov and set_links."""

    def test_set_pov_does_not_touch_dirty_flag(self, navigation_state):
        navigation_state.set_pov(Pov(123.0, 4.0))
        assert navigation_state.pov == Pov(123.0, 4.0)
        assert navigation_state.links_dirty is False

        navigation_state.set_pano(Pano("xyz"))
        navigation_state.set_pov(Pov(0.0, 0.0))
        assert navigation_state.links_dirty is True

    def test_set_links_clears_dirty_flag(self):
        state = NavigationState()
        state.set_pano(Pano("abc"))
        links = make_links("abc", ("def", 10.0))

        state.set_links(links)

        assert state.links is links
        assert state.links_dirty is False

    def test_empty_links_are_valid(self):
        """An empty link set is a dead end, not missing links."""
        state = NavigationState()
        state.set_pano(Pano("abc"))
        state.set_links(LinkSet(pano=Pano("abc")))

        assert state.links_dirty is False
        assert state.move_forward() is False
        assert state.pano == Pano("abc")


class TestMoves:
    """Test cases for link based moves."""

    def test_move_forward_selects_nearest(self, navigation_state):
        assert navigation_state.move_forward() is True
        assert navigation_state.pano == Pano("def")
        assert navigation_state.links_dirty is True

    def test_move_backward_selects_behind(self, navigation_state):
        assert navigation_state.move_backward() is True
        assert navigation_state.pano == Pano("ghi")

    def test_moves_refused_while_dirty(self, navigation_state):
        """After a move the old links must not be reused."""
        assert navigation_state.move_forward() is True
        assert navigation_state.move_forward() is False
        assert navigation_state.move_backward() is False
        assert navigation_state.pano == Pano("def")

    def test_dirty_state_is_not_mutated(self, navigation_state):
        navigation_state.set_pano(Pano("xyz"))
        links_before = navigation_state.links

        assert navigation_state.move_toward(10.0) is False
        assert navigation_state.pano == Pano("xyz")
        assert navigation_state.links is links_before
        assert navigation_state.links_dirty is True

    def test_move_toward_heading(self, navigation_state):
        assert navigation_state.move_toward(200.0) is True
        assert navigation_state.pano == Pano("ghi")

    def test_move_to_current_pano_is_no_change(self):
        """A link back to the current pano does not count as a move."""
        state = NavigationState()
        state.set_pano(Pano("abc"))
        state.set_links(make_links("abc", ("abc", 0.0)))

        assert state.move_forward() is False
        assert state.links_dirty is False

    def test_moves_follow_pov_heading(self, navigation_state):
        navigation_state.set_pov(Pov(180.0, 0.0))
        assert navigation_state.move_forward() is True
        assert navigation_state.pano == Pano("ghi")

    def test_moves_without_pov(self, sample_links):
        state = NavigationState()
        state._pov = None
        state.set_pano(Pano("abc"))
        state.set_links(sample_links)

        assert state.move_forward() is False
        assert state.move_backward() is False
        assert state.pano == Pano("abc")
