import logging
from functools import lru_cache

import redis

from taskboard.config import settings

logger = logging.getLogger(__name__)

# built on first use so importing the app never dials redis
@lru_cache(maxsize=1)
def get_redis() -> redis.Redis:
    return redis.Redis.from_url(settings.redis_url, decode_responses=True)

def redis_ping() -> bool:
    try:
        return bool(get_redis().ping())
    except redis.RedisError as e:
        logger.warning("redis ping failed: %s", e)
        return False
