"""WebSocket-based live reload for development mode.

Monitors the navigation configuration file for changes, drops the cached
navigation tree and notifies connected clients via WebSocket so they can
re-fetch their navigation.
"""

import asyncio
import json
import logging
import weakref
from pathlib import Path

from aiohttp import WSMsgType, web
from watchfiles import awatch

from siteshell.core.loader import NavigationLoader

logger = logging.getLogger(__name__)


class LiveReloadManager:
    """Manages WebSocket connections and file watching for live reload.

    Coordinates between the file system watcher and connected WebSocket
    clients. watchfiles groups bursts of file events, so a save that touches
    the file several times results in a single notification.
    """

    def __init__(self, navigation: NavigationLoader) -> None:
        """Initialize the live reload manager.

        Args:
            navigation: Loader whose file is watched and whose cache is invalidated
        """
        self._navigation = navigation
        self._watch_path = navigation.path.resolve()
        self._connections: weakref.WeakSet[web.WebSocketResponse] = weakref.WeakSet()
        self._watch_task: asyncio.Task[None] | None = None

    async def start(self) -> None:
        """Start the file watcher."""
        if self._watch_task is not None:
            return
        self._watch_task = asyncio.create_task(self._watch_files())

    async def stop(self) -> None:
        """Stop the file watcher and close all connections."""
        if self._watch_task is not None:
            self._watch_task.cancel()
            try:
                await self._watch_task
            except asyncio.CancelledError:
                pass
            self._watch_task = None

        for ws in list(self._connections):
            await ws.close()

    async def handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle WebSocket connection for live reload.

        Args:
            request: aiohttp request

        Returns:
            WebSocket response
        """
        ws = web.WebSocketResponse()
        await ws.prepare(request)

        self._connections.add(ws)

        try:
            async for msg in ws:
                if msg.type == WSMsgType.ERROR:
                    break
        finally:
            self._connections.discard(ws)

        return ws

    async def _watch_files(self) -> None:
        """Watch the navigation file and broadcast reload events."""
        async for changes in awatch(self._watch_path.parent):
            if not any(self.is_watched(Path(path_str)) for _, path_str in changes):
                continue
            await self.notify_changed()

    def is_watched(self, path: Path) -> bool:
        """Check if a changed path is the navigation file."""
        return path.resolve() == self._watch_path

    async def notify_changed(self) -> None:
        """Invalidate the navigation cache and tell clients to reload."""
        logger.info("Navigation file changed: %s", self._watch_path)
        self._navigation.invalidate()
        await self._broadcast({"type": "navigation", "path": str(self._watch_path)})

    async def _broadcast(self, event: dict[str, str]) -> None:
        """Broadcast an event to all connected clients."""
        if not self._connections:
            return

        message = json.dumps(event)

        for ws in list(self._connections):
            if ws.closed:
                continue
            try:
                await ws.send_str(message)
            except ConnectionResetError:
                # Client disconnected mid-send, will be cleaned up by WeakSet
                pass


def create_live_reload_routes(manager: LiveReloadManager) -> list[web.RouteDef]:
    """Create routes for live reload WebSocket.

    Args:
        manager: LiveReloadManager instance

    Returns:
        List of route definitions
    """
    return [web.get("/ws/live-reload", manager.handle_websocket)]
