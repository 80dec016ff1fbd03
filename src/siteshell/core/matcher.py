"""Active path matching for navigation items."""

from siteshell.core.tree import NavigationItem


def matches_path(item: NavigationItem, current_path: str) -> bool:
    """Check whether the item's own destination matches the current path.

    Exact matches always count. Any other href also matches paths below it
    (a section is active while one of its pages is shown), except "/" which
    only ever matches exactly. This is what drives aria-current="page".

    Args:
        item: Navigation item to check
        current_path: Current route path (e.g., "/services/tax")

    Returns:
        True if the item itself is active for the path
    """
    href = item.href
    if not href:
        return False
    if href == current_path:
        return True
    if href == "/":
        return False
    prefix = href.rstrip("/")
    return current_path == prefix or current_path.startswith(f"{prefix}/")


def has_active_descendant(item: NavigationItem, current_path: str) -> bool:
    """Check whether any descendant of the item is active."""
    stack = list(item.children)
    while stack:
        child = stack.pop()
        if matches_path(child, current_path):
            return True
        stack.extend(child.children)
    return False


def is_active(item: NavigationItem, current_path: str) -> bool:
    """Check whether the item is active for styling purposes.

    Args:
        item: Navigation item to check
        current_path: Current route path

    Returns:
        True if the item or one of its descendants matches the path
    """
    return matches_path(item, current_path) or has_active_descendant(item, current_path)
