# orders_api/services/notification_service.py
import json
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Dict

import redis
import redis.asyncio as aioredis
from redis.exceptions import RedisError

from orders_api.utils.retry import redis_retry
from orders_api.utils.settings import REDIS_URL, ORDER_EVENTS_CHANNEL, REDIS_SOCKET_TIMEOUT
from orders_api.utils.logging import get_logger

logger = get_logger(__name__)


class Broadcaster(ABC):
    """
    Fan-out channel for order events.
    publish is fire-and-forget, listen yields every event published after subscribing.
    """

    @abstractmethod
    def publish(self, event: str, payload: Dict[str, Any]) -> bool:
        ...

    @abstractmethod
    def listen(self) -> AsyncIterator[Dict[str, Any]]:
        ...


class RedisBroadcaster(Broadcaster):
    """
    Events go through a redis pub/sub channel, so every worker process
    serving websockets sees events published by any other worker.
    """

    def __init__(
        self,
        url: str | None = None,
        channel: str | None = None,
        socket_timeout: float | None = None,
    ):
        self.url = url or REDIS_URL
        self.channel = channel or ORDER_EVENTS_CHANNEL
        self.socket_timeout = socket_timeout or REDIS_SOCKET_TIMEOUT
        self.redis = redis.Redis.from_url(
            self.url,
            decode_responses=True,
            socket_connect_timeout=self.socket_timeout,
            socket_timeout=self.socket_timeout,
        )

    def publish(self, event: str, payload: Dict[str, Any]) -> bool:
        message = json.dumps({"event": event, "data": payload}, default=str)
        try:
            receivers = self._publish(message)
        except RedisError as e:
            #best-effort, never propagates
            logger.warning(f"Broadcast of {event} failed: {e}")
            return False

        logger.info(f"Broadcast {event} to {receivers} listener(s)")
        return True

    @redis_retry()
    def _publish(self, message: str) -> int:
        return self.redis.publish(self.channel, message)

    async def listen(self) -> AsyncIterator[Dict[str, Any]]:
        #connect timeout only: listen blocks until the next event
        client = aioredis.Redis.from_url(
            self.url,
            decode_responses=True,
            socket_connect_timeout=self.socket_timeout,
        )
        pubsub = client.pubsub()
        try:
            await pubsub.subscribe(self.channel)
            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                yield json.loads(message["data"])
        finally:
            await pubsub.aclose()
            await client.aclose()
