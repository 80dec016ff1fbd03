"""Bundled data discovery.

Locates data files shipped inside the siteshell package.
"""

from importlib.resources import files
from pathlib import Path


def get_default_navigation_path() -> Path:
    """Return path to the bundled default navigation configuration.

    Raises:
        FileNotFoundError: If the data file is not bundled.
    """
    navigation = files("siteshell").joinpath("data", "navigation.toml")
    if not navigation.is_file():
        msg = "Bundled navigation configuration not found. Reinstall the siteshell package."
        raise FileNotFoundError(msg)
    return Path(str(navigation))
