from fastapi import Request
import redis
from ..config.redis_config import get_redis
from ..config.settings import settings
from ..util.exceptions import RateLimitException
from ..util.logger import logger


class RateLimiter:
    def __init__(self, requests: int = 10, window: int = 60, scope: str = "rate_limit"):
        self.requests = requests
        self.window = window
        self.scope = scope
        self.redis = get_redis()

    async def __call__(self, request: Request) -> bool:
        # Identificador único
        client_id = f"{request.client.host}:{request.url.path}"
        key = f"{self.scope}:{client_id}"

        try:
            current = self.redis.incr(key)

            if current == 1:
                self.redis.expire(key, self.window)

            # Headers informativos
            request.state.rate_limit_remaining = max(0, self.requests - current)
            request.state.rate_limit_limit = self.requests

            if current > self.requests:
                ttl = self.redis.ttl(key)
                logger.warning(f"Rate limit exceeded for {client_id}")
                raise RateLimitException(retry_after=ttl)

            return True

        except redis.RedisError as e:
            logger.error(f"Redis error in rate limiter: {e}")
            return True


# Compilar é caro (download do solc + execução)
compile_limiter = RateLimiter(
    requests=settings.COMPILE_RATE_LIMIT,
    window=settings.COMPILE_RATE_WINDOW,
    scope="compile_limit"
)
