"""
Frontier - Shared queue of pending work with deduplication and
termination detection.

The queue, the visited set and the pending counter are guarded by a
single condition variable. A URL is marked visited in the same critical
section that queues it, so no URL is ever queued twice.

The crawl is exhausted when the pending counter reaches zero: nothing is
queued and nothing is being processed. Workers must call task_done()
only after all links found while processing an item have been enqueued.
"""

import logging
import threading
import time
from collections import deque
from typing import Deque, Optional, Set

from .work_item import WorkItem


class Frontier:
    """
    Thread-safe crawl frontier.

    Usage:
        frontier = Frontier()
        frontier.enqueue(seed, seed, 0)
        item = frontier.dequeue()
        while item is not None:
            try:
                ...
            finally:
                frontier.task_done()
            item = frontier.dequeue()
    """

    def __init__(self):
        self._queue: Deque[WorkItem] = deque()
        self._visited: Set[str] = set()
        self._pending = 0
        self._closed = False
        self._condition = threading.Condition(threading.Lock())
        self.logger = logging.getLogger(self.__class__.__name__)

    def enqueue(self, url: str, base_url: str, depth: int) -> bool:
        """
        Queue url unless it was queued before.

        Returns:
            True if the URL was newly queued, False if already visited
            or the frontier is closed
        """
        with self._condition:
            if self._closed or url in self._visited:
                return False

            self._visited.add(url)
            self._queue.append(WorkItem(url=url, base_url=base_url, depth=depth))
            self._pending += 1
            self._condition.notify()

        self.logger.debug(f"Enqueued {url} at depth {depth}")
        return True

    def dequeue(self, timeout: Optional[float] = None) -> Optional[WorkItem]:
        """
        Take the next item, waiting while other workers may still add work.

        Args:
            timeout: Maximum seconds to wait (None = until work or exhaustion)

        Returns:
            The next WorkItem, or None if the frontier is exhausted,
            closed, or the timeout elapsed
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        with self._condition:
            while not self._queue:
                if self._pending == 0 or self._closed:
                    return None

                if deadline is None:
                    self._condition.wait()
                else:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        return None
                    self._condition.wait(remaining)

            if self._closed:
                return None
            return self._queue.popleft()

    def try_dequeue(self) -> Optional[WorkItem]:
        """Take the next item without waiting."""
        with self._condition:
            if self._closed or not self._queue:
                return None
            return self._queue.popleft()

    def task_done(self):
        """
        Mark one dequeued item as fully processed.

        Raises:
            ValueError: If called more times than items were queued
        """
        with self._condition:
            if self._pending <= 0:
                raise ValueError("task_done() called too many times")

            self._pending -= 1
            if self._pending == 0:
                self.logger.debug("Frontier exhausted")
                self._condition.notify_all()

    def is_exhausted(self) -> bool:
        with self._condition:
            return self._pending == 0

    def contains(self, url: str) -> bool:
        """Check if url has already been queued."""
        with self._condition:
            return url in self._visited

    def close(self):
        """Stop handing out work and wake every waiting worker."""
        with self._condition:
            if self._closed:
                return
            self._closed = True
            dropped = len(self._queue)
            self._condition.notify_all()

        self.logger.info(f"Frontier closed ({dropped} queued items dropped)")

    @property
    def is_closed(self) -> bool:
        with self._condition:
            return self._closed

    @property
    def visited_count(self) -> int:
        with self._condition:
            return len(self._visited)

    @property
    def pending_count(self) -> int:
        """Items queued or in flight."""
        with self._condition:
            return self._pending

    @property
    def queued_count(self) -> int:
        with self._condition:
            return len(self._queue)

    def __repr__(self) -> str:
        return (f"<Frontier queued={self.queued_count} "
                f"pending={self.pending_count} visited={self.visited_count}>")
