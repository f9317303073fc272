"""
Per-user WebSocket fan-out for notifications and live job events.
"""
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks open sockets by user id and role."""

    def __init__(self):
        self.active_connections: Dict[int, List[WebSocket]] = defaultdict(list)
        self.roles: Dict[int, str] = {}

    async def connect(self, websocket: WebSocket, user_id: int, role: str) -> None:
        await websocket.accept()
        self.active_connections[user_id].append(websocket)
        self.roles[user_id] = role
        logger.debug(f"Realtime connected: user_id={user_id}")

    def disconnect(self, websocket: WebSocket, user_id: int) -> None:
        sockets = self.active_connections.get(user_id, [])
        if websocket in sockets:
            sockets.remove(websocket)
        if not sockets:
            self.active_connections.pop(user_id, None)
            self.roles.pop(user_id, None)

    def is_connected(self, user_id: int) -> bool:
        return bool(self.active_connections.get(user_id))

    async def send_to_user(self, user_id: int, payload: Dict[str, Any]) -> None:
        for websocket in list(self.active_connections.get(user_id, [])):
            try:
                await websocket.send_json(payload)
            except Exception as e:
                logger.warning(f"Dropping dead socket for user_id={user_id}: {e}")
                self.disconnect(websocket, user_id)

    async def send_to_users(self, user_ids: Iterable[int], payload: Dict[str, Any]) -> None:
        for user_id in user_ids:
            await self.send_to_user(user_id, payload)

    async def broadcast_to_role(self, role: str, payload: Dict[str, Any]) -> None:
        user_ids = [user_id for user_id, user_role in self.roles.items() if user_role == role]
        await self.send_to_users(user_ids, payload)


manager = ConnectionManager()
