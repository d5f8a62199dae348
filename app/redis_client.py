import redis

from app.config import settings

# from_url does not connect; the first command does
redis_client = redis.Redis.from_url(settings.redis_url, decode_responses=True)

def get_redis() -> redis.Redis:
    return redis_client

def redis_ping(client: redis.Redis | None = None) -> bool:
    try:
        return bool((client or redis_client).ping())
    except redis.RedisError:
        return False
