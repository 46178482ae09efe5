import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from fulfillment.logging_config import get_logger

logger = get_logger("scheduler")

ProcessorFn = Callable[[dict[str, Any]], Awaitable[Any]]


@dataclass
class JobProcessor:
    id: str
    processor: ProcessorFn


class JobScheduler:
    """One-shot delayed jobs running as asyncio tasks in the current process.

    Jobs are not persisted: a job still pending at shutdown is dropped.
    """

    def __init__(self):
        self._processors: dict[str, ProcessorFn] = {}
        self._tasks: set[asyncio.Task] = set()

    def register_processor(self, job: JobProcessor) -> None:
        self._processors[job.id] = job.processor

    @property
    def pending_count(self) -> int:
        return len(self._tasks)

    def schedule_once(self, job_id: str, when: datetime, data: dict[str, Any]) -> asyncio.Task:
        """Run processor ``job_id`` with ``data`` at ``when``. Must be called inside a running loop."""
        processor = self._processors.get(job_id)
        if processor is None:
            raise ValueError(f"Unknown job processor: {job_id}")

        delay = max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)
        task = asyncio.get_running_loop().create_task(self._run(job_id, processor, delay, data))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.info(
            "Job scheduled",
            extra={"context": {"job_id": job_id, "delay_seconds": delay, "when": when.isoformat()}},
        )
        return task

    async def _run(self, job_id: str, processor: ProcessorFn, delay: float, data: dict[str, Any]) -> None:
        await asyncio.sleep(delay)
        try:
            await processor(data)
        except Exception as exc:
            logger.error(
                "Job processor failed",
                extra={"context": {"job_id": job_id, "error": str(exc)}},
                exc_info=True,
            )

    async def shutdown(self) -> None:
        dropped = self.pending_count
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for task in tasks:
            try:
                await task
            except asyncio.CancelledError:
                pass
        if dropped:
            logger.warning("Dropped pending jobs on shutdown", extra={"context": {"count": dropped}})
