"""
Extraction slots.

Every extraction starts two Tesseract processes (header and body), so
uploads beyond MAX_CONCURRENT_EXTRACTIONS wait for a free slot instead of
starting more processes.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass

logger = logging.getLogger(__name__)

MAX_CONCURRENT_EXTRACTIONS = int(os.getenv("MAX_CONCURRENT_EXTRACTIONS", "4"))


@dataclass
class QueueStatus:
    active_requests: int
    waiting_requests: int
    max_concurrent: int
    available_slots: int


class ExtractionSlots:
    """
    Semaphore plus counters for the /queue endpoint.

    Counters change only between awaits on the event loop thread, so they
    need no lock.
    """

    def __init__(self, capacity: int = MAX_CONCURRENT_EXTRACTIONS):
        self.capacity = capacity
        self._semaphore = asyncio.Semaphore(capacity)
        self.active = 0
        self.waiting = 0

    @asynccontextmanager
    async def hold(self, request_id: str):
        """Wait for a free slot and hold it for the body of the `async with`."""
        self.waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self.waiting -= 1

        self.active += 1
        logger.debug(f"Request {request_id}: extracting ({self.active}/{self.capacity} slots in use)")
        try:
            yield
        finally:
            self.active -= 1
            self._semaphore.release()

    def status(self) -> QueueStatus:
        return QueueStatus(
            active_requests=self.active,
            waiting_requests=self.waiting,
            max_concurrent=self.capacity,
            available_slots=max(0, self.capacity - self.active),
        )


_slots = ExtractionSlots()


@asynccontextmanager
async def acquire_extraction_slot(request_id: str):
    async with _slots.hold(request_id):
        yield


def get_queue_status() -> QueueStatus:
    return _slots.status()
