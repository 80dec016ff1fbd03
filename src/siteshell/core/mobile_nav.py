"""Mobile navigation drawer state machine.

Tracks whether the drawer is open, which grouping items are expanded and
where keyboard focus sits while the drawer traps it.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypedDict

from siteshell.core.tree import NavigationItem
from siteshell.core.types import Breakpoint


@dataclass(frozen=True)
class BreakpointConfig:
    """Viewport widths (px) at which the layout changes.

    Widths below `mobile` are mobile, below `desktop` tablet.
    """

    mobile: int = 640
    desktop: int = 1024


def get_current_breakpoint(width: int, breakpoints: BreakpointConfig | None = None) -> Breakpoint:
    """Classify a viewport width."""
    breakpoints = breakpoints or BreakpointConfig()
    if width < breakpoints.mobile:
        return "mobile"
    if width < breakpoints.desktop:
        return "tablet"
    return "desktop"


class MobileNavStateDict(TypedDict):
    """Dictionary representation of drawer state."""

    is_open: bool
    expanded_item_ids: list[str]


@dataclass(frozen=True)
class MobileNavState:
    """Snapshot of the drawer state."""

    is_open: bool
    expanded_item_ids: frozenset[str]

    def to_dict(self) -> MobileNavStateDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_open": self.is_open,
            "expanded_item_ids": sorted(self.expanded_item_ids),
        }


class MobileNavController:
    """Open/closed drawer with focus trap.

    States are closed and open. Selecting an item, pressing Escape,
    navigating and auth changes all close the drawer. While open, Tab and
    Shift+Tab cycle through the drawer's focusable elements only; closing
    returns focus to the element that opened the drawer.
    """

    def __init__(
        self,
        focusable: Sequence[str] = (),
        *,
        breakpoints: BreakpointConfig | None = None,
    ) -> None:
        """Initialize a closed drawer.

        Args:
            focusable: Ids of focusable elements inside the drawer, in tab order
            breakpoints: Viewport breakpoints for resize handling
        """
        self._is_open = False
        self._expanded: set[str] = set()
        self._focusable: list[str] = list(focusable)
        self._focused: str | None = None
        self._return_focus: str | None = None
        self._breakpoints = breakpoints or BreakpointConfig()
        self._breakpoint: Breakpoint | None = None

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def expanded_item_ids(self) -> frozenset[str]:
        return frozenset(self._expanded)

    @property
    def focused(self) -> str | None:
        """Id of the element holding focus, as far as the drawer knows."""
        return self._focused

    @property
    def scroll_locked(self) -> bool:
        """Whether page scrolling behind the drawer is disabled."""
        return self._is_open

    @property
    def breakpoint(self) -> Breakpoint | None:
        return self._breakpoint

    @property
    def state(self) -> MobileNavState:
        return MobileNavState(is_open=self._is_open, expanded_item_ids=self.expanded_item_ids)

    def open(self, trigger: str | None = None) -> None:
        """Open the drawer and move focus to its first focusable element.

        Args:
            trigger: Id of the element that opened the drawer, focused
                again on close
        """
        if self._is_open:
            return
        self._is_open = True
        self._return_focus = trigger
        self._focused = self._focusable[0] if self._focusable else None

    def close(self) -> None:
        """Close the drawer and restore focus to the opener."""
        if not self._is_open:
            return
        self._is_open = False
        self._focused = self._return_focus
        self._return_focus = None

    def toggle(self, trigger: str | None = None) -> None:
        if self._is_open:
            self.close()
        else:
            self.open(trigger)

    def select_item(self, item: NavigationItem | str | None = None) -> None:
        """Handle selection of a destination; always closes the drawer."""
        self.close()

    def escape_key(self) -> None:
        self.close()

    def route_changed(self) -> None:
        """Close and collapse the drawer after navigation."""
        self.close()
        self._expanded.clear()

    def auth_state_changed(self) -> None:
        """Close and collapse the drawer after sign-in or sign-out."""
        self.close()
        self._expanded.clear()

    def toggle_expanded(self, item_id: object) -> None:
        """Expand or collapse a grouping item. Invalid ids are ignored."""
        if not isinstance(item_id, str) or not item_id:
            return
        if item_id in self._expanded:
            self._expanded.remove(item_id)
        else:
            self._expanded.add(item_id)

    def is_expanded(self, item_id: str) -> bool:
        return item_id in self._expanded

    def set_focusable(self, focusable: Sequence[str]) -> None:
        """Replace the drawer's focusable elements (e.g., after expanding).

        Focus that no longer points inside the drawer moves to the first
        element.
        """
        self._focusable = list(focusable)
        if self._is_open and self._focused not in self._focusable:
            self._focused = self._focusable[0] if self._focusable else None

    def tab(self, *, shift: bool = False) -> str | None:
        """Move focus forward (or backward with shift), wrapping in the drawer.

        Returns:
            Id of the newly focused element
        """
        if not self._is_open or not self._focusable:
            return self._focused

        if self._focused not in self._focusable:
            self._focused = self._focusable[-1] if shift else self._focusable[0]
            return self._focused

        index = self._focusable.index(self._focused)
        step = -1 if shift else 1
        self._focused = self._focusable[(index + step) % len(self._focusable)]
        return self._focused

    def focus(self, element_id: str) -> str | None:
        """Handle focus moving to an element.

        While open, focus outside the drawer is pulled back inside.

        Returns:
            Id of the element that ends up focused
        """
        if self._is_open and element_id not in self._focusable:
            self._focused = self._focusable[0] if self._focusable else None
        else:
            self._focused = element_id
        return self._focused

    def viewport_resized(self, width: int) -> Breakpoint:
        """Track the breakpoint; leaving mobile closes the drawer."""
        self._breakpoint = get_current_breakpoint(width, self._breakpoints)
        if self._breakpoint != "mobile":
            self.close()
        return self._breakpoint
