"""Redis client with connection pooling and graceful fallback."""
import logging

from redis.asyncio import ConnectionPool, Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class RedisUnavailableError(Exception):
    """A blocking read failed because the Redis connection broke."""


class RedisClient:
    """
    Async Redis client with connection pooling and graceful fallback.

    Only the list commands the enrichment queue needs are exposed. Writes and
    reads degrade to a falsy result when Redis is disabled or unreachable.
    BRPOP is the exception: a failed pop raises RedisUnavailableError so a
    polling loop can back off instead of spinning on an instant None.
    """

    def __init__(self, url: str, enabled: bool = True, pool_size: int = 20) -> None:
        self._url = url
        self._enabled = enabled
        self._pool_size = pool_size
        self._pool: ConnectionPool | None = None
        self._client: Redis | None = None

    async def connect(self) -> None:
        """Initialize connection pool."""
        if not self._enabled:
            logger.info("Redis disabled by configuration")
            return
        try:
            self._pool = ConnectionPool.from_url(self._url, max_connections=self._pool_size)
            self._client = Redis(connection_pool=self._pool)
            # Verify connection
            await self._client.ping()
            logger.info("Redis connected successfully")
        except RedisError as e:
            logger.warning("Redis connection failed: %s", e)
            self._client = None
            self._pool = None

    async def close(self) -> None:
        """Close connection pool."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._pool = None
            logger.info("Redis connection closed")

    @property
    def is_connected(self) -> bool:
        """Check if client is connected."""
        return self._client is not None

    async def ping(self) -> bool:
        """Check Redis connectivity."""
        if not self._client:
            return False
        try:
            return await self._client.ping()
        except RedisError:
            return False

    async def lpush(self, key: str, *values: str | bytes) -> bool:
        """Push value(s) onto the head of a list, returns False if Redis unavailable."""
        if not self._client:
            return False
        try:
            await self._client.lpush(key, *values)
            return True
        except RedisError as e:
            logger.warning("Redis LPUSH failed: %s", e)
            return False

    async def brpop(self, keys: list[str], timeout: int) -> tuple[str, bytes] | None:
        """
        Pop from the tail of the first non-empty list, blocking up to `timeout` seconds.

        Returns (key, value), or None on timeout or if Redis is disabled.

        Raises:
            RedisUnavailableError: If the command fails on a live connection.
        """
        if not self._client:
            return None
        try:
            result = await self._client.brpop(keys, timeout=timeout)
        except RedisError as e:
            logger.warning("Redis BRPOP failed: %s", e)
            raise RedisUnavailableError(str(e)) from e
        if result is None:
            return None
        key, value = result
        if isinstance(key, bytes):
            key = key.decode()
        return key, value

    async def ltrim(self, key: str, start: int, end: int) -> bool:
        """Trim a list to the given range, returns False if Redis unavailable."""
        if not self._client:
            return False
        try:
            await self._client.ltrim(key, start, end)
            return True
        except RedisError as e:
            logger.warning("Redis LTRIM failed: %s", e)
            return False

    async def lrange(self, key: str, start: int, end: int) -> list[bytes]:
        """Read a range of a list, returns [] if Redis unavailable."""
        if not self._client:
            return []
        try:
            return await self._client.lrange(key, start, end)
        except RedisError as e:
            logger.warning("Redis LRANGE failed: %s", e)
            return []
