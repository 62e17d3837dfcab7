"""
Live Channel Registry Module

Tracks which WebSocket connections have joined which per-employee room
(``user_<employee_id>``) and delivers events to the members of a room.

Delivery is best effort: no retry, no acknowledgement, no queue for employees
who are offline. Clients treat pushed events as a hint and re-fetch authoritative
state from the REST API when they (re)connect.
"""
import logging
from typing import Any, Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def room_for(employee_id) -> str:
    return f"user_{employee_id}"


class ChannelRegistry:
    """
    Process-wide room membership.

    Membership is only mutated from the event loop (connect, join, leave,
    disconnect), so no lock is taken. ``publish`` snapshots a room's members
    before sending, so sockets joining or leaving mid-publish do not disturb
    the iteration.
    """

    def __init__(self):
        self.rooms: Dict[str, Set[WebSocket]] = {}

    def join(self, websocket: WebSocket, room: str) -> None:
        self.rooms.setdefault(room, set()).add(websocket)
        logger.info("Socket %s joined room %s", id(websocket), room)

    def leave(self, websocket: WebSocket, room: str) -> None:
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self.rooms[room]

    def disconnect(self, websocket: WebSocket) -> None:
        """Remove a socket from every room it joined."""
        for room in list(self.rooms):
            self.leave(websocket, room)
        logger.info("Socket %s disconnected", id(websocket))

    def members(self, room: str) -> Set[WebSocket]:
        return set(self.rooms.get(room, ()))

    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> int:
        """
        Send ``event`` to every socket currently in ``room``.

        Returns the number of sockets the event was handed to. An empty room is a
        silent no-op. A socket whose send fails is dropped from the registry and
        does not affect delivery to the others.
        """
        delivered = 0
        for websocket in self.members(room):
            try:
                await websocket.send_json({"event": event, "data": payload})
                delivered += 1
            except Exception:
                logger.warning("Dropping socket %s from %s after failed send", id(websocket), room, exc_info=True)
                self.disconnect(websocket)
        return delivered
