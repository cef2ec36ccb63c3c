"""
Worker Pool - Runs crawl workers over a shared Frontier and aggregates
their word counts.

Each worker:
- Takes an item from the frontier (blocking while others may add work)
- Processes it with the PageProcessor
- Adds the page's word counts to its own private Counter
- Marks the item done, whether processing succeeded or failed

Private counters are merged only after every worker has exited.
"""

import logging
import threading
import time
from collections import Counter
from typing import List, Optional, Tuple

from ..errors import CrawlerError, WorkerError
from .frontier import Frontier
from .page_processor import PageProcessor
from .word_counter import merge_frequencies, rank_words


class WorkerPool:
    """
    Fixed pool of crawl worker threads.

    Lifecycle:
    ---------
    1. Create the pool with a seeded frontier
    2. Call run(); it returns once the frontier is exhausted or the
       crawl was cancelled
    3. Read word_counts / get_stats()
    """

    def __init__(self, frontier: Frontier, processor: PageProcessor,
                 num_workers: int = 10, max_runtime_seconds: Optional[float] = None,
                 name: str = "Crawl"):
        """
        Initialize worker pool.

        Args:
            frontier: Shared frontier, already seeded
            processor: Processor used by every worker
            num_workers: Number of worker threads to spawn
            max_runtime_seconds: Cancel the crawl after this many seconds
            name: Prefix for worker thread names
        """
        if num_workers < 1:
            raise ValueError("num_workers must be at least 1")

        self.frontier = frontier
        self.processor = processor
        self.num_workers = num_workers
        self.max_runtime_seconds = max_runtime_seconds
        self.name = name

        self.workers: List[threading.Thread] = []
        self.stop_event = threading.Event()
        self.cancelled = False

        # Results
        self.word_counts: Counter = Counter()
        self._worker_results: List[Counter] = []
        self._failures: List[WorkerError] = []

        # Statistics
        self.pages_completed = 0
        self.pages_failed = 0
        self.start_time = None
        self.end_time = None
        self.stats_lock = threading.Lock()

        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self) -> List[Tuple[str, int]]:
        """
        Run all workers until the frontier is exhausted.

        Returns:
            (word, count) pairs sorted by count descending, word ascending

        Raises:
            WorkerError: If a worker thread terminated abnormally
        """
        self.start_time = time.time()
        self._worker_results = [Counter() for _ in range(self.num_workers)]

        timer = None
        if self.max_runtime_seconds:
            timer = threading.Timer(self.max_runtime_seconds, self._on_deadline)
            timer.daemon = True
            timer.start()

        for i in range(self.num_workers):
            worker = threading.Thread(
                target=self._worker_loop,
                args=(i,),
                name=f"{self.name}-Worker-{i+1}",
                daemon=True
            )
            worker.start()
            self.workers.append(worker)

        self.logger.info(f"Started {self.num_workers} workers")

        for worker in self.workers:
            worker.join()

        if timer is not None:
            timer.cancel()

        self.end_time = time.time()

        if self._failures:
            raise self._failures[0]

        self.logger.info("Compiling frequency data")
        self.word_counts = merge_frequencies(*self._worker_results)

        self.logger.info("Sorting frequency data")
        return rank_words(self.word_counts)

    def cancel(self):
        """Stop the crawl: workers finish their current page and exit."""
        if self.stop_event.is_set():
            return
        self.logger.warning("Cancelling crawl")
        self.cancelled = True
        self.stop_event.set()
        self.frontier.close()

    def _on_deadline(self):
        self.logger.warning(f"Maximum runtime ({self.max_runtime_seconds}s) reached")
        self.cancel()

    def _worker_loop(self, index: int):
        """Main worker loop - runs in each worker thread."""
        worker_name = threading.current_thread().name
        local_freqs = Counter()
        self.logger.debug(f"{worker_name} started")

        try:
            while not self.stop_event.is_set():
                item = self.frontier.dequeue()
                if item is None:
                    break

                try:
                    word_freqs = self.processor.process(item)
                except CrawlerError as e:
                    with self.stats_lock:
                        self.pages_failed += 1
                    self.logger.error(f"Error when processing {item.url}: {e}")
                else:
                    local_freqs.update(word_freqs)
                    with self.stats_lock:
                        self.pages_completed += 1
                finally:
                    self.frontier.task_done()

        except Exception as e:
            self.logger.critical(f"{worker_name} terminated abnormally: {e}", exc_info=True)
            with self.stats_lock:
                self._failures.append(WorkerError(worker_name, e))
            self.cancel()

        finally:
            self._worker_results[index] = local_freqs
            self.logger.debug(f"{worker_name} stopped")

    def get_stats(self) -> dict:
        """
        Get pool statistics.

        Returns:
            dict with statistics
        """
        with self.stats_lock:
            if self.start_time is None:
                runtime = 0
            else:
                runtime = (self.end_time or time.time()) - self.start_time

            return {
                'name': self.name,
                'workers': self.num_workers,
                'pages_completed': self.pages_completed,
                'pages_failed': self.pages_failed,
                'cancelled': self.cancelled,
                'runtime_seconds': round(runtime, 2),
                'urls_enqueued': self.frontier.visited_count,
                'pending': self.frontier.pending_count,
            }

    def __repr__(self) -> str:
        return (f"<{self.__class__.__name__} name='{self.name}' "
                f"workers={self.num_workers} cancelled={self.cancelled}>")
