"""Tests for mobile navigation drawer."""

import pytest
from siteshell.core.mobile_nav import (
    BreakpointConfig,
    MobileNavController,
    get_current_breakpoint,
)

FOCUSABLE = ("close-button", "nav-home", "nav-services", "nav-contact")


@pytest.fixture
def drawer() -> MobileNavController:
    return MobileNavController(FOCUSABLE)


class TestOpenClose:
    """Tests for opening and closing the drawer."""

    def test__initially_closed(self, drawer: MobileNavController) -> None:
        assert not drawer.is_open
        assert not drawer.scroll_locked
        assert drawer.state.to_dict() == {"is_open": False, "expanded_item_ids": []}

    def test__open__focuses_first_element(self, drawer: MobileNavController) -> None:
        drawer.open("menu-button")

        assert drawer.is_open
        assert drawer.scroll_locked
        assert drawer.focused == "close-button"

    def test__close__returns_focus_to_trigger(self, drawer: MobileNavController) -> None:
        drawer.open("menu-button")

        drawer.close()

        assert not drawer.is_open
        assert drawer.focused == "menu-button"

    def test__open_twice__keeps_trigger(self, drawer: MobileNavController) -> None:
        """Opening an open drawer is a no-op."""
        drawer.open("menu-button")
        drawer.tab()

        drawer.open("other")

        assert drawer.focused == "nav-home"
        drawer.close()
        assert drawer.focused == "menu-button"

    def test__toggle(self, drawer: MobileNavController) -> None:
        drawer.toggle("menu-button")
        assert drawer.is_open

        drawer.toggle()
        assert not drawer.is_open

    @pytest.mark.parametrize(
        "event",
        ["select_item", "escape_key", "route_changed", "auth_state_changed"],
    )
    def test__closing_events(self, drawer: MobileNavController, event: str) -> None:
        """Every closing event leaves the drawer closed."""
        drawer.open("menu-button")

        getattr(drawer, event)()

        assert not drawer.is_open
        assert drawer.focused == "menu-button"

    @pytest.mark.parametrize(
        "event",
        ["select_item", "escape_key", "route_changed", "auth_state_changed", "close"],
    )
    def test__closing_events_when_closed__no_op(self, drawer: MobileNavController, event: str) -> None:
        getattr(drawer, event)()

        assert not drawer.is_open
        assert drawer.focused is None

    def test__no_focusable__opens_without_focus(self) -> None:
        drawer = MobileNavController()

        drawer.open("menu-button")

        assert drawer.is_open
        assert drawer.focused is None


class TestExpanded:
    """Tests for expanding grouping items."""

    def test__toggle_expanded(self, drawer: MobileNavController) -> None:
        drawer.toggle_expanded("services")
        assert drawer.is_expanded("services")

        drawer.toggle_expanded("services")
        assert not drawer.is_expanded("services")

    def test__multiple_expanded(self, drawer: MobileNavController) -> None:
        drawer.toggle_expanded("services")
        drawer.toggle_expanded("resources")

        assert drawer.state.to_dict()["expanded_item_ids"] == ["resources", "services"]

    @pytest.mark.parametrize("item_id", ["", None, 3])
    def test__invalid_id__ignored(self, drawer: MobileNavController, item_id: object) -> None:
        drawer.toggle_expanded(item_id)

        assert drawer.expanded_item_ids == frozenset()

    def test__select_item__keeps_expanded(self, drawer: MobileNavController) -> None:
        drawer.open()
        drawer.toggle_expanded("services")

        drawer.select_item("tax")

        assert drawer.is_expanded("services")

    @pytest.mark.parametrize("event", ["route_changed", "auth_state_changed"])
    def test__navigation_events__collapse(self, drawer: MobileNavController, event: str) -> None:
        drawer.open()
        drawer.toggle_expanded("services")

        getattr(drawer, event)()

        assert drawer.expanded_item_ids == frozenset()


class TestFocusTrap:
    """Tests for keyboard focus while the drawer is open."""

    def test__tab__wraps_forward(self, drawer: MobileNavController) -> None:
        drawer.open("menu-button")

        seen = [drawer.tab() for _ in range(len(FOCUSABLE))]

        assert seen == ["nav-home", "nav-services", "nav-contact", "close-button"]

    def test__shift_tab__wraps_backward(self, drawer: MobileNavController) -> None:
        drawer.open("menu-button")

        assert drawer.tab(shift=True) == "nav-contact"
        assert drawer.tab(shift=True) == "nav-services"

    def test__focus_outside__pulled_back(self, drawer: MobileNavController) -> None:
        """Focus cannot leave the drawer while it is open."""
        drawer.open("menu-button")

        assert drawer.focus("page-footer-link") == "close-button"
        assert drawer.focus("nav-services") == "nav-services"

    def test__closed__focus_free(self, drawer: MobileNavController) -> None:
        assert drawer.focus("page-footer-link") == "page-footer-link"
        assert drawer.tab() == "page-footer-link"

    def test__set_focusable__refocuses(self, drawer: MobileNavController) -> None:
        drawer.open()
        drawer.tab()

        drawer.set_focusable(["close-button", "nav-tax"])

        assert drawer.focused == "close-button"
        assert drawer.tab() == "nav-tax"


class TestBreakpoints:
    """Tests for viewport handling."""

    @pytest.mark.parametrize(
        ("width", "expected"),
        [(320, "mobile"), (639, "mobile"), (640, "tablet"), (1023, "tablet"), (1024, "desktop")],
    )
    def test__get_current_breakpoint(self, width: int, expected: str) -> None:
        assert get_current_breakpoint(width) == expected

    def test__custom_breakpoints(self) -> None:
        config = BreakpointConfig(mobile=480, desktop=1280)

        assert get_current_breakpoint(500, config) == "tablet"
        assert get_current_breakpoint(1200, config) == "tablet"

    def test__resize_to_desktop__closes(self, drawer: MobileNavController) -> None:
        drawer.open("menu-button")

        assert drawer.viewport_resized(1280) == "desktop"
        assert not drawer.is_open
        assert drawer.breakpoint == "desktop"

    def test__resize_within_mobile__stays_open(self, drawer: MobileNavController) -> None:
        drawer.open("menu-button")

        drawer.viewport_resized(400)

        assert drawer.is_open
