import asyncio
import logging
from typing import Callable, Optional
from tailorbook.config import settings
from tailorbook.repositories.order_repo import OrderRepository
from tailorbook.utils.helpers import format_timestamp, utc_now

logger = logging.getLogger(__name__)


class DueSoonNotifier:
    """
    Keeps the "urgent orders" badge count fresh.

    Polls OrderRepository.due_soon() on a fixed interval from a background
    task; the count is a cache for readers, nothing is persisted.
    """

    def __init__(
        self,
        repo_factory: Callable[[], OrderRepository],
        interval: float = None,
    ):
        self.repo_factory = repo_factory
        self.interval = interval if interval is not None else settings.DUE_SOON_POLL_SECONDS
        self.count = 0
        self.checked_at: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    def refresh(self) -> int:
        """Recount due-soon orders synchronously"""
        self.count = len(self.repo_factory().due_soon())
        self.checked_at = format_timestamp(utc_now())
        return self.count

    async def _run(self):
        while True:
            try:
                await asyncio.to_thread(self.refresh)
            except Exception as e:
                logger.error(f"Due-soon refresh failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval)

    def start(self):
        if self._task is None or self._task.done():
            logger.info(f"Starting due-soon notifier (every {self.interval}s)")
            self._task = asyncio.create_task(self._run())

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Due-soon notifier stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
