"""
Live Channel WebSocket Endpoint

Protocol (JSON text frames):

    client -> server   {"event": "join", "userId": 7}
    server -> client   {"event": "joined", "room": "user_7"}
    client -> server   {"event": "leave", "userId": 7}
    server -> client   {"event": "left", "room": "user_7"}
    server -> client   {"event": "taskAssigned", "data": {"taskId": 12, "status": "pending", "message": "..."}}

A socket may join several rooms. Closing the socket leaves all of them.
Binary frames, malformed JSON and unknown events get an ``{"event": "error"}`` reply.
"""
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from app.realtime.channels import ChannelRegistry, room_for

router = APIRouter()
logger = logging.getLogger(__name__)


async def handle_message(registry: ChannelRegistry, websocket: WebSocket, raw: str) -> None:
    try:
        message = json.loads(raw)
    except json.JSONDecodeError:
        await websocket.send_json({"event": "error", "message": "Invalid JSON"})
        return

    event = message.get("event") if isinstance(message, dict) else None
    user_id = message.get("userId") if isinstance(message, dict) else None

    if event not in ("join", "leave"):
        await websocket.send_json({"event": "error", "message": f"Unknown event: {event}"})
        return
    if user_id is None or str(user_id).strip() == "":
        await websocket.send_json({"event": "error", "message": "userId is required"})
        return

    room = room_for(user_id)
    if event == "join":
        registry.join(websocket, room)
        await websocket.send_json({"event": "joined", "room": room})
    else:
        registry.leave(websocket, room)
        await websocket.send_json({"event": "left", "room": room})


@router.websocket("/ws")
async def live_channel(websocket: WebSocket):
    registry: ChannelRegistry = websocket.app.state.channels
    await websocket.accept()
    logger.info("Socket %s connected", id(websocket))
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            raw = message.get("text")
            if raw is None:
                await websocket.send_json({"event": "error", "message": "Only text frames are accepted"})
                continue
            await handle_message(registry, websocket, raw)
    except WebSocketDisconnect:
        pass
    finally:
        registry.disconnect(websocket)
