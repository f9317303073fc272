from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect, status
from sqlalchemy.orm import Session

from quickjob.core.auth_dependency import get_db
from quickjob.core.security import decode_access_token
from quickjob.services.realtime import manager
from quickjob.services.user_service import find_user_by_email

router = APIRouter(tags=["Realtime"])


@router.websocket("/ws/notifications")
async def notifications_socket(
    websocket: WebSocket,
    token: str = Query(""),
    db: Session = Depends(get_db)
):
    """Push channel for the signed-in user's notifications and new job offers."""
    email = decode_access_token(token) if token else None
    try:
        user = find_user_by_email(db, email) if email else None
    finally:
        # hand the connection back to the pool before the long-lived receive loop
        db.close()
    if not user:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    user_id, role = user.id, user.role
    await manager.connect(websocket, user_id, role)

    try:
        while True:
            # clients only send keep-alives
            await websocket.receive_text()
    except WebSocketDisconnect:
        manager.disconnect(websocket, user_id)
