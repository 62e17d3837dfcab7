from datetime import datetime, timedelta


def join(websocket, user_id):
    """Join ``user_<user_id>`` and wait for the acknowledgement."""
    websocket.send_json({"event": "join", "userId": user_id})
    assert websocket.receive_json() == {"event": "joined", "room": f"user_{user_id}"}


def assert_no_pending_event(websocket, probe_user_id=999999):
    """
    A socket delivers in emission order, so if the ack of a fresh join is the
    next frame, nothing else was queued ahead of it.
    """
    join(websocket, probe_user_id)


def deadline_in(days):
    return (datetime(2025, 6, 1, 10, 0) + timedelta(days=days)).isoformat()
