"""Live reload support for navigation configuration changes."""

from siteshell.live.reload import LiveReloadManager

__all__ = ["LiveReloadManager"]
