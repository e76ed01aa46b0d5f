"""RQ task queue wrapper with inline fallback for local/test runs."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

from redis import Redis
from rq import Queue, Retry

from beefmusic.core.config import settings

logger = logging.getLogger("beefmusic.services.task_queue")

# Webhook posts get a couple of chances before the job is marked failed.
DEFAULT_RETRY = Retry(max=2, interval=[5, 15])


def _maybe_async(value: Any) -> Any:
    """Normalize callables/coroutines into an awaitable result."""
    if asyncio.iscoroutine(value):
        return value
    if callable(value):
        return value()
    return value


class TaskQueue:
    """Thin wrapper around RQ that can fall back to inline execution."""

    def __init__(self) -> None:
        self.queue_names: list[str] = settings.worker_queue_names or ["default"]
        self._connection: Redis | None = None
        self._enabled = False
        self._bootstrap()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _bootstrap(self) -> None:
        """Initialize Redis connectivity unless disabled for tests."""
        if settings.environment.lower() == "test":
            logger.info("Task queue disabled in test environment")
            return
        try:
            connection = Redis.from_url(settings.redis_url)
            connection.ping()
        except Exception as exc:  # pragma: no cover - network/redis specific
            logger.warning("Redis unavailable; running jobs inline: %s", exc)
            return
        self._connection = connection
        self._enabled = True
        logger.info("Task queue ready (queues: %s)", ", ".join(self.queue_names))

    def get_queue(self, queue_name: str | None = None) -> Queue:
        """Return a configured queue instance for enqueuing jobs."""
        if not self._connection:
            raise RuntimeError("Queue connection not initialized")
        target = queue_name or (self.queue_names[0] if self.queue_names else "default")
        return Queue(target, connection=self._connection)

    async def enqueue_notification(self, *, channel: str, content: str) -> Any:
        """Dispatch a chat notification through the notifications queue."""
        from beefmusic.jobs.notifications import send_discord_notification_job

        return await self.enqueue_or_run(
            send_discord_notification_job,
            fallback=lambda: asyncio.to_thread(send_discord_notification_job, channel=channel, content=content),
            queue_name="notifications",
            description=f"discord:{channel}",
            channel=channel,
            content=content,
        )

    async def enqueue_or_run(
        self,
        func: Callable[..., Any],
        *,
        fallback: Callable[[], Any] | None = None,
        queue_name: str | None = None,
        timeout_seconds: int = 30,
        retry: Retry | None = DEFAULT_RETRY,
        description: str | None = None,
        **kwargs: Any,
    ) -> Any:
        """Enqueue a fire-and-forget job; run it inline when Redis is unavailable."""

        async def _run_fallback() -> Any:
            target = fallback or (lambda: func(**kwargs))
            result = _maybe_async(target)
            if asyncio.iscoroutine(result):
                return await result
            return result

        if not self._enabled or not self._connection:
            return await _run_fallback()

        def _enqueue() -> Any:
            queue = self.get_queue(queue_name)
            return queue.enqueue(
                func,
                kwargs=kwargs,
                job_timeout=timeout_seconds,
                description=description,
                retry=retry,
            )

        try:
            job = await asyncio.to_thread(_enqueue)
        except Exception as exc:  # pragma: no cover - network/redis specific
            logger.warning("Falling back to inline execution after queue failure: %s", exc)
            return await _run_fallback()
        return {"job_id": job.id, "queued": True}


task_queue = TaskQueue()
