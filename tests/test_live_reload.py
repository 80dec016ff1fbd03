"""Tests for live reload manager."""

from pathlib import Path

import pytest
from siteshell.core.loader import NavigationLoader
from siteshell.live import LiveReloadManager


class TestIsWatched:
    """Tests for LiveReloadManager.is_watched()."""

    def test__navigation_file__true(self, navigation_file: Path) -> None:
        manager = LiveReloadManager(NavigationLoader(navigation_file))

        assert manager.is_watched(navigation_file)

    def test__sibling_file__false(self, navigation_file: Path) -> None:
        """Other files in the watched directory are ignored."""
        manager = LiveReloadManager(NavigationLoader(navigation_file))

        assert not manager.is_watched(navigation_file.parent / "notes.md")


class TestNotifyChanged:
    """Tests for LiveReloadManager.notify_changed()."""

    @pytest.mark.asyncio
    async def test__invalidates_cached_tree(self, navigation_file: Path) -> None:
        """Next load sees the edited file."""
        loader = NavigationLoader(navigation_file)
        loader.load()
        manager = LiveReloadManager(loader)
        navigation_file.write_text('[[items]]\nid = "about"\nlabel = "About"\nhref = "/about"\n')

        await manager.notify_changed()

        assert [item.id for item in loader.load().roots] == ["about"]

    @pytest.mark.asyncio
    async def test__start_stop(self, navigation_file: Path) -> None:
        manager = LiveReloadManager(NavigationLoader(navigation_file))

        await manager.start()
        await manager.stop()
