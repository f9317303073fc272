"""
Tests for the realtime connection manager and the notification socket.
"""
import asyncio

import pytest
from sqlalchemy.orm import Session
from starlette.websockets import WebSocketDisconnect

from quickjob.core.auth_dependency import get_db
from quickjob.core.security import create_access_token
from quickjob.main import app
from quickjob.services.realtime import ConnectionManager


class FakeSocket:
    def __init__(self, fail=False):
        self.accepted = False
        self.sent = []
        self.fail = fail

    async def accept(self):
        self.accepted = True

    async def send_json(self, payload):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(payload)


def test_send_to_user_reaches_every_socket():
    manager = ConnectionManager()
    phone, laptop, other = FakeSocket(), FakeSocket(), FakeSocket()

    async def scenario():
        await manager.connect(phone, 1, "candidate")
        await manager.connect(laptop, 1, "candidate")
        await manager.connect(other, 2, "recruiter")
        await manager.send_to_user(1, {"event": "notification", "id": 5})

    asyncio.run(scenario())

    assert phone.accepted and laptop.accepted
    assert phone.sent == [{"event": "notification", "id": 5}]
    assert laptop.sent == [{"event": "notification", "id": 5}]
    assert other.sent == []


def test_broadcast_to_role():
    manager = ConnectionManager()
    candidate, recruiter = FakeSocket(), FakeSocket()

    async def scenario():
        await manager.connect(candidate, 1, "candidate")
        await manager.connect(recruiter, 2, "recruiter")
        await manager.broadcast_to_role("candidate", {"event": "new_job", "job_id": 3})

    asyncio.run(scenario())

    assert candidate.sent == [{"event": "new_job", "job_id": 3}]
    assert recruiter.sent == []


def test_dead_socket_is_dropped():
    manager = ConnectionManager()
    dead = FakeSocket(fail=True)

    async def scenario():
        await manager.connect(dead, 1, "candidate")
        await manager.send_to_user(1, {"event": "notification"})

    asyncio.run(scenario())

    assert not manager.is_connected(1)


def test_disconnect_forgets_user():
    manager = ConnectionManager()
    socket = FakeSocket()

    asyncio.run(manager.connect(socket, 1, "recruiter"))
    manager.disconnect(socket, 1)

    assert not manager.is_connected(1)
    assert 1 not in manager.roles


def test_socket_rejects_bad_token(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/notifications?token=invalid") as websocket:
            websocket.receive_text()


def test_socket_rejects_missing_token(client):
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws/notifications") as websocket:
            websocket.receive_text()


class TrackingSession(Session):
    closed = False

    def close(self):
        self.closed = True
        super().close()


def test_socket_releases_db_session_while_connected(client, db, make_user):
    user = make_user(role="candidate")
    sessions = []

    def tracking_get_db():
        session = TrackingSession(bind=db.get_bind())
        sessions.append(session)
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = tracking_get_db
    token = create_access_token({"sub": user.email})

    with client.websocket_connect(f"/ws/notifications?token={token}"):
        assert sessions and all(session.closed for session in sessions)
