"""Navigation tree structure.

Immutable navigation configuration with efficient href lookups and
traversal operations. Items are stored in a flat arena with parent/children
relationships tracked by indices, similar to how a document site keeps its
page hierarchy.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import NotRequired, TypedDict

from siteshell.core.types import POSITIONS, VISIBILITIES, Position, Visibility

# Root items are level 1, their children level 2. Nothing deeper is kept.
MAX_DEPTH = 2
MAX_LABEL_LENGTH = 50


class NavigationItemDict(TypedDict):
    """Dictionary representation of a navigation item."""

    id: str
    label: str
    href: str
    visibility: Visibility
    position: Position
    order: int
    icon: NotRequired[str]
    children: NotRequired[list["NavigationItemDict"]]


@dataclass(frozen=True)
class NavigationItem:
    """Navigation entry, optionally grouping child entries."""

    id: str
    label: str
    href: str = ""
    visibility: Visibility = "public"
    position: Position = "primary"
    order: int = 0
    children: tuple["NavigationItem", ...] = field(default_factory=tuple)
    icon: str | None = None

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    @property
    def is_well_formed(self) -> bool:
        """Check that the item can be rendered at all.

        An item needs an id and a label. The href may only be empty for
        grouping items, i.e. items that declare children.
        """
        if not self.id or not self.label:
            return False
        return bool(self.href) or self.has_children

    def to_dict(self) -> NavigationItemDict:
        """Convert to dictionary for JSON serialization."""
        result: NavigationItemDict = {
            "id": self.id,
            "label": self.label,
            "href": self.href,
            "visibility": self.visibility,
            "position": self.position,
            "order": self.order,
        }
        if self.icon is not None:
            result["icon"] = self.icon
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        return result


class NavigationTree:
    """Read-only navigation tree with O(1) href and id lookups.

    Stores items in a flat pre-order list with parent/children indices.
    The first item declaring a given href or id wins the lookup, which
    matches a depth-first search over the roots.
    """

    __slots__ = ("_children", "_href_index", "_id_index", "_items", "_parents", "_roots")

    def __init__(self, items: Sequence[NavigationItem] = ()) -> None:
        """Initialize tree from root items.

        Args:
            items: Root navigation items in declaration order
        """
        self._items: list[NavigationItem] = []
        self._children: list[list[int]] = []
        self._parents: list[int | None] = []
        self._roots: list[int] = []
        self._href_index: dict[str, int] = {}
        self._id_index: dict[str, int] = {}

        # Iterative pre-order walk; reversed pushes keep declaration order
        stack: list[tuple[NavigationItem, int | None, int]] = [
            (item, None, 1) for item in reversed(items)
        ]
        while stack:
            item, parent_idx, depth = stack.pop()
            idx = len(self._items)
            self._items.append(item)
            self._children.append([])
            self._parents.append(parent_idx)

            if parent_idx is None:
                self._roots.append(idx)
            else:
                self._children[parent_idx].append(idx)

            if item.href:
                self._href_index.setdefault(item.href, idx)
            if item.id:
                self._id_index.setdefault(item.id, idx)

            if depth < MAX_DEPTH:
                stack.extend((child, idx, depth + 1) for child in reversed(item.children))

    @property
    def roots(self) -> tuple[NavigationItem, ...]:
        """Root-level items in declaration order."""
        return tuple(self._items[i] for i in self._roots)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[NavigationItem]:
        return iter(self.roots)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NavigationTree):
            return NotImplemented
        return self.roots == other.roots

    def __repr__(self) -> str:
        return f"NavigationTree({list(self.roots)!r})"

    def iter_items(self) -> Iterator[NavigationItem]:
        """Iterate over all items in depth-first pre-order."""
        return iter(self._items)

    def find_by_href(self, href: str) -> NavigationItem | None:
        """Get the first item whose href equals the given path.

        Args:
            href: Exact href to look up (e.g., "/services/tax")

        Returns:
            NavigationItem if found, None otherwise
        """
        if not href:
            return None
        idx = self._href_index.get(href)
        if idx is None:
            return None
        return self._items[idx]

    def find_by_id(self, item_id: str) -> NavigationItem | None:
        """Get item by id."""
        idx = self._id_index.get(item_id)
        if idx is None:
            return None
        return self._items[idx]

    def get_parent(self, item_id: str) -> NavigationItem | None:
        """Get the parent of an item, None for roots or unknown ids."""
        idx = self._id_index.get(item_id)
        if idx is None:
            return None
        parent_idx = self._parents[idx]
        if parent_idx is None:
            return None
        return self._items[parent_idx]

    def by_position(self, position: Position) -> list[NavigationItem]:
        """Get root items placed in the given navigation area."""
        return [item for item in self.roots if item.position == position]

    def to_dict(self) -> list[NavigationItemDict]:
        """Convert to list of dictionaries for JSON serialization."""
        return [item.to_dict() for item in self.roots]


def parse_navigation(raw: object) -> NavigationTree:
    """Build a navigation tree from raw configuration data.

    Parsing is lenient: missing or mistyped fields become empty values so
    that a single bad entry never blanks the whole navigation. Use
    validate_navigation() to report what was wrong. Items nested deeper
    than MAX_DEPTH are dropped.

    Args:
        raw: List of item tables as loaded from TOML or JSON

    Returns:
        NavigationTree with root items in declaration order
    """
    if not isinstance(raw, list):
        return NavigationTree()
    return NavigationTree(_parse_items(raw, depth=1))


def _parse_items(raw_items: list[object], depth: int) -> list[NavigationItem]:
    items: list[NavigationItem] = []
    for raw_item in raw_items:
        if not isinstance(raw_item, dict):
            continue
        items.append(_parse_item(raw_item, depth))
    return items


def _parse_item(data: dict[str, object], depth: int) -> NavigationItem:
    children: list[NavigationItem] = []
    raw_children = data.get("children")
    if depth < MAX_DEPTH and isinstance(raw_children, list):
        children = _parse_items(raw_children, depth + 1)

    visibility = data.get("visibility", "public")
    position = data.get("position", "primary")
    order = data.get("order", 0)
    icon = data.get("icon")

    return NavigationItem(
        id=_string(data.get("id")),
        label=_string(data.get("label")),
        href=_string(data.get("href")),
        # Unknown visibility fails closed: only shown to authenticated users
        visibility=visibility if visibility in VISIBILITIES else "authenticated",
        position=position if position in POSITIONS else "primary",
        order=order if _is_int(order) else 0,
        children=tuple(children),
        icon=icon if isinstance(icon, str) else None,
    )


def _string(value: object) -> str:
    return value.strip() if isinstance(value, str) else ""


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
