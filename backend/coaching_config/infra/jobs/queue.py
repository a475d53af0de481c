"""In-process job queue that runs submitted jobs one at a time."""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol

logger = logging.getLogger(__name__)

Job = Callable[..., Awaitable[Any]]


class JobQueue(Protocol):
    """Job queue protocol."""

    async def submit(self, job_type: str, func: Job, *args: Any, **kwargs: Any) -> Any:
        """Run a job and return its result."""
        ...


class SerialTaskQueue:
    """
    Bounded asyncio queue with a single consumer.

    At most one job runs at a time, in submission order. Each submitter awaits
    its own future, which carries the job's result or exception. The consumer
    starts on the first submit.
    """

    def __init__(self, maxsize: int = 100):
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=maxsize)
        self._worker: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        if not self.running:
            self._worker = asyncio.create_task(self._worker_loop(), name="serial-task-queue")
            logger.info("Serial task queue started")

    async def stop(self) -> None:
        """Cancel the consumer. Jobs still queued get their futures cancelled."""
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
        while not self._queue.empty():
            _, _, _, _, future = self._queue.get_nowait()
            if not future.done():
                future.cancel()
            self._queue.task_done()
        logger.info("Serial task queue stopped")

    async def submit(self, job_type: str, func: Job, *args: Any, **kwargs: Any) -> Any:
        self.start()
        future = asyncio.get_running_loop().create_future()
        await self._queue.put((job_type, func, args, kwargs, future))
        return await future

    async def _worker_loop(self) -> None:
        while True:
            job_type, func, args, kwargs, future = await self._queue.get()
            try:
                if future.cancelled():
                    continue
                try:
                    result = await func(*args, **kwargs)
                except asyncio.CancelledError:
                    future.cancel()
                    raise
                except Exception as e:
                    logger.debug("Job %s failed: %s", job_type, e)
                    if not future.done():
                        future.set_exception(e)
                else:
                    if not future.done():
                        future.set_result(result)
            finally:
                self._queue.task_done()
