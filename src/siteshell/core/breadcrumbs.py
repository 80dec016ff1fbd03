"""Breadcrumb trail and structured data builder.

Derives the breadcrumb trail for a pathname from the (filtered) navigation
tree and describes it as a schema.org BreadcrumbList for search engines.
"""

import json
import re
from dataclasses import dataclass, field
from typing import TypedDict

from siteshell.core.tree import NavigationTree

DEFAULT_BASE_URL = "https://cpaonweb.com"
HOME_LABEL = "Home"

_WORD_START = re.compile(r"\b\w")


class BreadcrumbSegmentDict(TypedDict):
    """Dictionary representation of a breadcrumb segment."""

    label: str
    href: str
    is_active: bool


class BreadcrumbPathDict(TypedDict):
    """Dictionary representation of a breadcrumb path."""

    segments: list[BreadcrumbSegmentDict]
    current_page: str
    full_path: str
    is_home_page: bool
    structured_data: dict[str, object]


@dataclass(frozen=True)
class BreadcrumbSegment:
    """Breadcrumb trail entry.

    An empty href marks the current page, which is shown but not linked.
    """

    label: str
    href: str
    is_active: bool = False

    def to_dict(self) -> BreadcrumbSegmentDict:
        """Convert to dictionary for JSON serialization."""
        return {"label": self.label, "href": self.href, "is_active": self.is_active}


@dataclass(frozen=True)
class BreadcrumbPath:
    """Complete breadcrumb data for one pathname."""

    segments: tuple[BreadcrumbSegment, ...]
    current_page: str
    full_path: str
    is_home_page: bool
    structured_data: dict[str, object] = field(default_factory=dict)

    def json_ld(self) -> str | None:
        """Serialize structured data for a ld+json script element.

        Returns:
            JSON string, or None on the home page where no breadcrumb
            markup is emitted
        """
        if self.is_home_page or not self.segments:
            return None
        return json.dumps(self.structured_data, separators=(",", ":"))

    def to_dict(self) -> BreadcrumbPathDict:
        """Convert to dictionary for JSON serialization."""
        return {
            "segments": [segment.to_dict() for segment in self.segments],
            "current_page": self.current_page,
            "full_path": self.full_path,
            "is_home_page": self.is_home_page,
            "structured_data": self.structured_data,
        }


def build_breadcrumbs(
    pathname: str,
    tree: NavigationTree,
    base_url: str = DEFAULT_BASE_URL,
) -> BreadcrumbPath:
    """Build breadcrumb path for the current pathname.

    Starts with Home, then one segment per path prefix ("/a", "/a/b", ...).
    Labels come from the navigation item with the exact href, falling back
    to the formatted path segment. The last segment is the current page.

    Args:
        pathname: Current route path (query string and fragment are ignored)
        tree: Navigation tree to take labels from, normally already filtered
        base_url: Site origin used for absolute URLs in structured data

    Returns:
        BreadcrumbPath for the pathname
    """
    path = _strip_query(pathname)
    parts = [part for part in path.split("/") if part]

    if not parts:
        return BreadcrumbPath(
            segments=(),
            current_page=HOME_LABEL,
            full_path="/",
            is_home_page=True,
            structured_data=build_structured_data((), base_url),
        )

    segments = [BreadcrumbSegment(label=HOME_LABEL, href="/")]
    current = ""
    for i, part in enumerate(parts):
        current += f"/{part}"
        is_current_page = i == len(parts) - 1

        item = tree.find_by_href(current)
        label = item.label if item is not None else format_path_segment(part)

        segments.append(
            BreadcrumbSegment(
                label=label,
                href="" if is_current_page else current,
                is_active=is_current_page,
            ),
        )

    return BreadcrumbPath(
        segments=tuple(segments),
        current_page=segments[-1].label,
        full_path=path,
        is_home_page=False,
        structured_data=build_structured_data(segments, base_url),
    )


def build_structured_data(
    segments: tuple[BreadcrumbSegment, ...] | list[BreadcrumbSegment],
    base_url: str = DEFAULT_BASE_URL,
) -> dict[str, object]:
    """Describe breadcrumb segments as a schema.org BreadcrumbList.

    The current page is not a separate resource, so its entry has no
    "item" URL.

    Args:
        segments: Breadcrumb segments in trail order
        base_url: Site origin for absolute URLs

    Returns:
        BreadcrumbList record ready for JSON serialization
    """
    origin = base_url.rstrip("/")
    elements: list[dict[str, object]] = []
    for position, segment in enumerate(segments, start=1):
        element: dict[str, object] = {
            "@type": "ListItem",
            "position": position,
            "name": segment.label,
        }
        if segment.href and not segment.is_active:
            element["item"] = f"{origin}{segment.href}"
        elements.append(element)

    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": elements,
    }


def format_path_segment(segment: str) -> str:
    """Format a raw path segment as a label.

    Example:
        "tax-planning" -> "Tax Planning"
    """
    text = segment.replace("-", " ")
    return _WORD_START.sub(lambda match: match.group(0).upper(), text)


def _strip_query(pathname: str) -> str:
    for separator in ("?", "#"):
        pathname = pathname.split(separator, 1)[0]
    return pathname or "/"
