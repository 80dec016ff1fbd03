"""Navigation view builder.

Builds navigation views for header, footer and mobile drawer rendering.
A view is the filtered tree annotated with the active state of each item
for the current path.
"""

from dataclasses import dataclass, field
from typing import NotRequired, TypedDict

from siteshell.core.matcher import is_active, matches_path
from siteshell.core.tree import NavigationItem, NavigationTree
from siteshell.core.types import Position


class NavItemDict(TypedDict):
    """Dictionary representation of a navigation view item."""

    id: str
    label: str
    href: str
    active: bool
    current: bool
    icon: NotRequired[str]
    children: NotRequired[list["NavItemDict"]]


@dataclass
class NavItem:
    """Navigation item with active state for UI rendering.

    `current` marks the link that gets aria-current="page"; `active` also
    covers sections with an active descendant and is meant for styling.
    """

    id: str
    label: str
    href: str
    active: bool = False
    current: bool = False
    children: list["NavItem"] = field(default_factory=list)
    icon: str | None = None

    def to_dict(self) -> NavItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NavItemDict = {
            "id": self.id,
            "label": self.label,
            "href": self.href,
            "active": self.active,
            "current": self.current,
        }
        if self.icon is not None:
            result["icon"] = self.icon
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


def build_navigation(
    tree: NavigationTree,
    current_path: str,
    position: Position | None = None,
) -> list[NavItem]:
    """Build navigation view for the current path.

    Args:
        tree: Navigation tree, normally already filtered for the visitor
        current_path: Current route path
        position: Only include root items for this area, all if None

    Returns:
        List of NavItem trees for navigation UI
    """
    roots = tree.roots if position is None else tree.by_position(position)
    return [_build_nav_item(item, current_path) for item in roots]


def _build_nav_item(item: NavigationItem, current_path: str) -> NavItem:
    return NavItem(
        id=item.id,
        label=item.label,
        href=item.href,
        active=is_active(item, current_path),
        current=matches_path(item, current_path),
        children=[_build_nav_item(child, current_path) for child in item.children],
        icon=item.icon,
    )
