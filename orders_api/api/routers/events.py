# orders_api/api/routers/events.py
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from redis.exceptions import RedisError

from orders_api.api.deps import get_broadcaster
from orders_api.services.notification_service import Broadcaster
from orders_api.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["events"])


@router.websocket("/ws/orders")
async def order_events(websocket: WebSocket, broadcaster: Broadcaster = Depends(get_broadcaster)):
    """
    Pushes order_created / order_updated / order_deleted events to the client as JSON.
    Closes with 1011 when the event channel is unavailable.
    """
    await websocket.accept()
    logger.info(f"Listener connected: {websocket.client}")

    try:
        async for event in broadcaster.listen():
            await websocket.send_json(event)
    except WebSocketDisconnect:
        logger.info(f"Listener disconnected: {websocket.client}")
        return
    except RedisError as e:
        logger.warning(f"Event channel unavailable for {websocket.client}: {e}")
        await websocket.close(code=1011)
        return

    await websocket.close()
