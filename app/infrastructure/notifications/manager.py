"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Set, Tuple

from fastapi import WebSocket

logger = logging.getLogger(__name__)

ConnectionKey = Tuple[str, str]


class NotificationConnectionManager:
    """Manage active websocket connections grouped by ``(recipient_id, role)``."""

    def __init__(self) -> None:
        self._connections: DefaultDict[ConnectionKey, Set[WebSocket]] = defaultdict(set)

    async def connect(self, key: ConnectionKey, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it under ``key``."""

        await websocket.accept()
        self._connections[key].add(websocket)

    def disconnect(self, key: ConnectionKey, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``key``."""

        connections = self._connections.get(key)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(key, None)

    async def send_to_recipient(self, key: ConnectionKey, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection registered under ``key``."""

        for connection in list(self._connections.get(key, set())):
            try:
                await connection.send_json(message)
            except Exception:  # pragma: no cover - socket already gone
                logger.debug("Dropping dead websocket for %s/%s", *key)
                self.disconnect(key, connection)

    async def broadcast(self, message: dict[str, Any]) -> None:
        """Send ``message`` to every connected recipient."""

        for key in list(self._connections):
            await self.send_to_recipient(key, message)


notification_manager = NotificationConnectionManager()


__all__ = ["ConnectionKey", "NotificationConnectionManager", "notification_manager"]
