import os

import redis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# redis-py connects lazily, so importing this module never touches the network.
r = redis.Redis.from_url(REDIS_URL, decode_responses=True)


def get_redis() -> redis.Redis:
    return r
