"""Navigation configuration validation.

Reports human-readable problems with raw navigation data. Problems are
advisory: the tree built by parse_navigation() still renders, with the
offending items skipped by the filter.
"""

from siteshell.core.tree import MAX_DEPTH, MAX_LABEL_LENGTH
from siteshell.core.types import POSITIONS, VISIBILITIES


def validate_navigation(raw: object) -> list[str]:
    """Validate raw navigation configuration.

    Checks required fields, label length, allowed visibility and position
    values, integer order, id and href uniqueness across the whole tree,
    and the maximum nesting depth.

    Args:
        raw: List of item tables as loaded from TOML or JSON

    Returns:
        List of problems, empty if the configuration is valid
    """
    if not isinstance(raw, list):
        return ["Navigation configuration must be a list of items"]

    problems: list[str] = []
    seen_ids: set[str] = set()
    seen_hrefs: set[str] = set()

    stack: list[tuple[object, str, int]] = [
        (item, f"items[{i}]", 1) for i, item in reversed(list(enumerate(raw)))
    ]
    while stack:
        item, location, depth = stack.pop()
        if not isinstance(item, dict):
            problems.append(f"Navigation item at {location} must be a table")
            continue

        item_id = item.get("id")
        if not isinstance(item_id, str) or not item_id.strip():
            problems.append(f"Navigation item at {location} is missing id")
            name = location
        else:
            name = f'"{item_id}"'
            if item_id in seen_ids:
                problems.append(f'Duplicate navigation ID: "{item_id}"')
            seen_ids.add(item_id)

        if depth > MAX_DEPTH:
            problems.append(
                f"Navigation item {name} exceeds maximum depth of {MAX_DEPTH} levels",
            )

        label = item.get("label")
        if not isinstance(label, str) or not label.strip():
            problems.append(f"Navigation item {name} has empty label")
        elif len(label) > MAX_LABEL_LENGTH:
            problems.append(
                f"Navigation item {name} label exceeds {MAX_LABEL_LENGTH} characters",
            )

        children = item.get("children")
        if children is not None and not isinstance(children, list):
            problems.append(f"Navigation item {name} children must be a list")
            children = None

        href = item.get("href")
        if href is not None and not isinstance(href, str):
            problems.append(f"Navigation item {name} href must be a string")
        elif not href or not href.strip():
            # Only grouping items may omit their own destination
            if not children:
                problems.append(f"Navigation item {name} has empty href")
        else:
            href = href.strip()
            if href in seen_hrefs:
                problems.append(f'Duplicate navigation href: "{href}"')
            seen_hrefs.add(href)

        visibility = item.get("visibility", "public")
        if visibility not in VISIBILITIES:
            problems.append(f'Navigation item {name} has invalid visibility "{visibility}"')

        position = item.get("position", "primary")
        if position not in POSITIONS:
            problems.append(f'Navigation item {name} has invalid position "{position}"')

        order = item.get("order", 0)
        if not isinstance(order, int) or isinstance(order, bool):
            problems.append(f"Navigation item {name} order must be an integer")

        if children:
            stack.extend(
                (child, f"{location}.children[{i}]", depth + 1)
                for i, child in reversed(list(enumerate(children)))
            )

    return problems
