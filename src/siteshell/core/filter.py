"""Navigation visibility filter.

Projects a navigation tree onto the subset visible for an authentication
state, preserving hierarchy and declaration order among equal sort keys.
"""

from collections.abc import Iterable
from dataclasses import replace

from siteshell.core.tree import MAX_DEPTH, NavigationItem, NavigationTree


def is_visible(item: NavigationItem, is_authenticated: bool) -> bool:
    """Check whether an item may be shown for the authentication state."""
    return item.visibility == "public" or is_authenticated


def filter_navigation(tree: NavigationTree, is_authenticated: bool) -> NavigationTree:
    """Filter navigation tree by authentication state.

    Args:
        tree: Navigation tree to filter
        is_authenticated: Whether the current visitor is signed in

    Returns:
        New NavigationTree containing only visible, well-formed items
        sorted by ascending order
    """
    return NavigationTree(_filter_items(tree.roots, is_authenticated, depth=1))


def _filter_items(
    items: Iterable[NavigationItem],
    is_authenticated: bool,
    depth: int,
) -> list[NavigationItem]:
    result: list[NavigationItem] = []
    for item in items:
        if not item.is_well_formed or not is_visible(item, is_authenticated):
            continue

        children: list[NavigationItem] = []
        if depth < MAX_DEPTH:
            children = _filter_items(item.children, is_authenticated, depth + 1)

        # A grouping item with nothing left to group is not navigable
        if item.has_children and not children and not item.href:
            continue

        result.append(replace(item, children=tuple(children)))

    # sorted() is stable, so ties keep declaration order
    return sorted(result, key=lambda item: item.order)
