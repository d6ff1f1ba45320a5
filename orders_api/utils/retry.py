# orders_api/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type
import redis


def redis_retry(attempts: int = 3):
    """
    Retry policy for publishing order events to redis.
    Only redis errors are retried, the last one is re-raised to the caller
    (RedisBroadcaster.publish logs it and drops the event).
    """
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )
