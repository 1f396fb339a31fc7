"""
Background enrichment of bookmark titles and thumbnails.

Creating a bookmark without a title or thumbnail enqueues a job on a Redis
list; the worker fetches the page and patches the bookmark.

Usage:
    python -m tasks.enrichment

Queues:
    title-processing, thumbnail-processing

A job that raises is retried until it has failed `max_attempts` times, then
moved to `<queue>:failed`, which keeps only the most recent entries.
Completed jobs are not kept.
"""
import asyncio
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass, field
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.config import get_settings
from core.errors import DomainError
from core.redis import RedisClient, RedisUnavailableError
from db.session import get_session_factory
from schemas.bookmark import BookmarkRead
from services import url_scraper
from services.bookmark_service import BookmarkService
from stores.bookmark_store import BookmarkStore

logger = logging.getLogger(__name__)

TITLE_QUEUE = "title-processing"
THUMBNAIL_QUEUE = "thumbnail-processing"
QUEUES = (TITLE_QUEUE, THUMBNAIL_QUEUE)

# Seconds a worker blocks waiting for a job before polling again
POLL_TIMEOUT = 5


class EnrichmentError(Exception):
    """Raised when a job could not be applied and should be retried."""

    pass


@dataclass
class EnrichmentJob:
    """A unit of work on one of the enrichment queues."""

    queue: str
    bookmark_id: str
    url: str
    attempts: int = 0
    id: str = field(default_factory=lambda: str(uuid4()))

    def to_json(self) -> str:
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, raw: str | bytes) -> "EnrichmentJob":
        """
        Parse a queued job.

        Raises:
            ValueError: If the payload is not a valid job.
        """
        try:
            data = json.loads(raw)
            return cls(**data)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"Malformed enrichment job: {raw!r}") from e


def failed_key(queue: str) -> str:
    """Key of the list holding a queue's exhausted jobs."""
    return f"{queue}:failed"


class EnrichmentQueue:
    """Producer/consumer side of the enrichment queues, backed by Redis lists."""

    def __init__(
        self,
        redis: RedisClient,
        max_attempts: int = 3,
        failed_retention: int = 100,
    ) -> None:
        self._redis = redis
        self._max_attempts = max_attempts
        self._failed_retention = failed_retention

    @property
    def redis(self) -> RedisClient:
        return self._redis

    async def enqueue(self, queue: str, bookmark_id: UUID | str, url: str) -> bool:
        """Queue a job. Returns False (and logs) when Redis is unavailable."""
        job = EnrichmentJob(queue=queue, bookmark_id=str(bookmark_id), url=url)
        pushed = await self._redis.lpush(queue, job.to_json())
        if not pushed:
            logger.warning("Could not enqueue %s job for bookmark %s", queue, bookmark_id)
        return pushed

    async def enqueue_for_bookmark(self, bookmark: BookmarkRead) -> None:
        """Queue title and/or thumbnail jobs for whatever the bookmark is missing."""
        if not bookmark.title:
            await self.enqueue(TITLE_QUEUE, bookmark.id, bookmark.url)
        if not bookmark.thumbnail:
            await self.enqueue(THUMBNAIL_QUEUE, bookmark.id, bookmark.url)

    async def pop(self, timeout: int = POLL_TIMEOUT) -> EnrichmentJob | None:
        """
        Take the next job from any queue.

        Malformed payloads are logged and discarded. Returns None when no job
        arrived within `timeout` seconds.

        Raises:
            RedisUnavailableError: If the pop failed on a broken connection.
        """
        result = await self._redis.brpop(list(QUEUES), timeout=timeout)
        if result is None:
            return None
        _, raw = result
        try:
            return EnrichmentJob.from_json(raw)
        except ValueError:
            logger.exception("Discarding malformed enrichment job")
            return None

    async def retry_or_fail(self, job: EnrichmentJob) -> bool:
        """
        Record a failed attempt.

        Requeues the job and returns True while attempts remain; otherwise
        moves it to the failed list and returns False.
        """
        job.attempts += 1
        if job.attempts < self._max_attempts:
            await self._redis.lpush(job.queue, job.to_json())
            return True

        key = failed_key(job.queue)
        await self._redis.lpush(key, job.to_json())
        await self._redis.ltrim(key, 0, self._failed_retention - 1)
        return False

    async def failed_jobs(self, queue: str) -> list[EnrichmentJob]:
        """Exhausted jobs of a queue, most recent first."""
        raw_jobs = await self._redis.lrange(failed_key(queue), 0, -1)
        return [EnrichmentJob.from_json(raw) for raw in raw_jobs]


Fetcher = Callable[[str], Awaitable[str | None]]


class EnrichmentWorker:
    """Consumes enrichment jobs and writes results through the bookmark service."""

    def __init__(
        self,
        queue: EnrichmentQueue,
        session_factory: async_sessionmaker,
        fetch_title: Fetcher = url_scraper.fetch_title,
        fetch_thumbnail: Fetcher = url_scraper.fetch_thumbnail,
    ) -> None:
        self._queue = queue
        self._session_factory = session_factory
        self._fetchers: dict[str, tuple[str, Fetcher]] = {
            TITLE_QUEUE: ("title", fetch_title),
            THUMBNAIL_QUEUE: ("thumbnail", fetch_thumbnail),
        }

    async def process(self, job: EnrichmentJob) -> None:
        """
        Fetch metadata for one job and patch the bookmark.

        Finding nothing on the page completes the job without an update, as
        does a bookmark deleted in the meantime.

        Raises:
            EnrichmentError: If the job names an unknown queue or the update failed.
        """
        if job.queue not in self._fetchers:
            raise EnrichmentError(f"Unknown queue: {job.queue}")
        field_name, fetch = self._fetchers[job.queue]

        value = await fetch(job.url)
        if not value:
            logger.info("No %s found for %s", field_name, job.url)
            return

        async with self._session_factory() as session:
            service = BookmarkService(BookmarkStore(session))
            result = await service.update_bookmark(UUID(job.bookmark_id), {field_name: value})
            if isinstance(result, DomainError):
                if result.kind == "does-not-exist":
                    logger.info("Bookmark %s was deleted before enrichment", job.bookmark_id)
                    return
                raise EnrichmentError(result.message)
            await session.commit()

    async def run_once(self, timeout: int = POLL_TIMEOUT) -> bool:
        """Process at most one job. Returns True if a job was taken off a queue."""
        job = await self._queue.pop(timeout)
        if job is None:
            return False

        try:
            await self.process(job)
        except Exception:
            logger.exception("Job %s on %s failed (attempt %d)", job.id, job.queue, job.attempts + 1)
            if not await self._queue.retry_or_fail(job):
                logger.error("Job %s on %s moved to failed list", job.id, job.queue)
            return True

        logger.info("Job %s on %s completed", job.id, job.queue)
        return True

    async def run(self) -> None:
        """Process jobs until cancelled."""
        logger.info("Enrichment worker listening on %s", ", ".join(QUEUES))
        while True:
            if not self._queue.redis.is_connected:
                await asyncio.sleep(POLL_TIMEOUT)
                continue
            try:
                await self.run_once()
            except RedisUnavailableError:
                logger.warning("Redis unavailable, retrying in %ds", POLL_TIMEOUT)
                await asyncio.sleep(POLL_TIMEOUT)


async def run_worker() -> None:
    """Connect to Redis and the database, then run the worker loop."""
    settings = get_settings()
    redis = RedisClient(
        settings.redis_url,
        enabled=settings.redis_enabled,
        pool_size=settings.redis_pool_size,
    )
    await redis.connect()
    if not redis.is_connected:
        logger.error("Redis is unavailable; enrichment worker cannot start")
        return

    queue = EnrichmentQueue(
        redis,
        max_attempts=settings.enrichment_max_attempts,
        failed_retention=settings.enrichment_failed_retention,
    )
    timeout = settings.enrichment_fetch_timeout
    worker = EnrichmentWorker(
        queue,
        get_session_factory(),
        fetch_title=lambda url: url_scraper.fetch_title(url, timeout),
        fetch_thumbnail=lambda url: url_scraper.fetch_thumbnail(url, timeout),
    )
    try:
        await worker.run()
    finally:
        await redis.close()


def main() -> None:
    """Entry point for running the enrichment worker as a script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_worker())


if __name__ == "__main__":
    main()
