"""Navigation configuration loader.

Reads the navigation TOML file, builds the tree and keeps it until
invalidated (e.g., by the live reload watcher).

File format:
    [[items]]
    id = "services"
    label = "Services"
    href = "/services"
    order = 2

    [[items.children]]
    id = "tax-services"
    label = "Tax Services"
    href = "/services/tax"
"""

import logging
import tomllib
from pathlib import Path

from siteshell.core.tree import NavigationTree, parse_navigation
from siteshell.core.validation import validate_navigation

logger = logging.getLogger(__name__)


class NavigationConfigError(ValueError):
    """Navigation file cannot be read as a list of items."""


class NavigationLoader:
    """Loads and caches the navigation tree from a TOML file."""

    def __init__(self, path: Path) -> None:
        """Initialize loader.

        Args:
            path: Navigation TOML file
        """
        self._path = path
        self._tree: NavigationTree | None = None
        self._problems: list[str] = []

    @property
    def path(self) -> Path:
        return self._path

    @property
    def problems(self) -> list[str]:
        """Validation problems found by the last load."""
        self.load()
        return list(self._problems)

    def load(self) -> NavigationTree:
        """Load navigation tree, using the cached tree when available.

        Validation problems are logged as warnings; the tree is still
        returned with malformed entries kept for the filter to skip.

        Returns:
            NavigationTree built from the file

        Raises:
            NavigationConfigError: If the file is missing or not valid TOML
        """
        if self._tree is not None:
            return self._tree

        raw = self._read_items()
        self._problems = validate_navigation(raw)
        for problem in self._problems:
            logger.warning("%s: %s", self._path, problem)

        self._tree = parse_navigation(raw)
        logger.debug("Loaded %d navigation items from %s", len(self._tree), self._path)
        return self._tree

    def invalidate(self) -> None:
        """Drop the cached tree so the next load re-reads the file."""
        self._tree = None
        self._problems = []

    def _read_items(self) -> list[object]:
        try:
            with self._path.open("rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError as e:
            raise NavigationConfigError(f"Navigation file not found: {self._path}") from e
        except OSError as e:
            raise NavigationConfigError(f"Cannot read navigation file {self._path}: {e}") from e
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise NavigationConfigError(f"Invalid navigation file {self._path}: {e}") from e

        items = data.get("items", [])
        if not isinstance(items, list):
            raise NavigationConfigError(f"{self._path}: items must be an array of tables")
        return items
