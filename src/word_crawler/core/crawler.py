"""
Word Crawler - Main orchestrator that wires the robots policy, frontier,
page processor and worker pool together.
This is the high-level interface for running a crawl.
"""

import logging
import time
from typing import List, Optional, Tuple
from dataclasses import dataclass, field

from ..components.http_fetcher import HTTPFetcher, FetchConfig
from ..components.html_parser import PageParser, ParseConfig
from ..components.robots_policy import RobotsPolicy, RobotsConfig, robots_url_for
from ..engine.frontier import Frontier
from ..engine.page_processor import PageProcessor
from ..engine.worker_pool import WorkerPool


@dataclass
class CrawlerConfig:
    """Master configuration for a crawl."""
    robots: RobotsConfig = field(default_factory=RobotsConfig)
    fetch: FetchConfig = field(default_factory=FetchConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)

    max_depth: int = 2
    workers: int = 10
    top_n: int = 10
    max_runtime_seconds: Optional[float] = None  # None = run to completion


@dataclass(frozen=True)
class CrawlResult:
    """Ranked word counts and statistics of a finished crawl."""
    seed_url: str
    max_depth: int
    word_counts: Tuple[Tuple[str, int], ...]
    pages_crawled: int = 0
    pages_failed: int = 0
    urls_enqueued: int = 0
    runtime_seconds: float = 0.0
    cancelled: bool = False

    def top(self, n: int = 10) -> List[Tuple[str, int]]:
        """Return the n most frequent words."""
        return list(self.word_counts[:n])

    def __len__(self) -> int:
        return len(self.word_counts)


class WordCrawler:
    """
    Crawls a site from a seed URL and counts words across its pages.

    The robots policy is fetched when the crawler is created, so an
    unreachable seed host fails here rather than during crawl().
    """

    def __init__(self, seed_url: str, config: CrawlerConfig = None,
                 fetcher=None, parser=None):
        """
        Initialize word crawler.

        Args:
            seed_url: Starting URL
            config: Crawl configuration (defaults if omitted)
            fetcher: Object with fetch(url) -> str (HTTPFetcher if omitted)
            parser: Object with parse(html) (PageParser if omitted)

        Raises:
            UrlError: If seed_url cannot be parsed
            FetchError: If robots.txt cannot be fetched
            ParseError: If robots.txt cannot be parsed
        """
        self.config = config or CrawlerConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

        # Validates the seed before anything touches the network
        robots_url_for(seed_url)
        self.seed_url = seed_url

        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher or HTTPFetcher(self.config.fetch)
        self.parser = parser or PageParser(self.config.parse)

        self.robots_policy = RobotsPolicy.from_url(seed_url, self.config.robots, self.fetcher)

        self.frontier = None
        self.pool = None

        self.logger.info(f"Word crawler initialized for {seed_url}")

    def crawl(self) -> CrawlResult:
        """
        Crawl from the seed URL until no work is left.

        Returns:
            CrawlResult with ranked word counts
        """
        start_time = time.time()

        self.frontier = Frontier()
        processor = PageProcessor(
            self.frontier,
            self.fetcher,
            self.parser,
            self.robots_policy,
            max_depth=self.config.max_depth
        )
        self.pool = WorkerPool(
            self.frontier,
            processor,
            num_workers=self.config.workers,
            max_runtime_seconds=self.config.max_runtime_seconds
        )

        self.frontier.enqueue(self.seed_url, self.seed_url, 0)
        self.logger.info(
            f"Starting crawl of {self.seed_url} (max depth {self.config.max_depth}, "
            f"{self.config.workers} workers)"
        )

        try:
            ranked = self.pool.run()
        finally:
            if self._owns_fetcher:
                self.fetcher.close()

        stats = self.pool.get_stats()
        result = CrawlResult(
            seed_url=self.seed_url,
            max_depth=self.config.max_depth,
            word_counts=tuple(ranked),
            pages_crawled=stats['pages_completed'],
            pages_failed=stats['pages_failed'],
            urls_enqueued=stats['urls_enqueued'],
            runtime_seconds=time.time() - start_time,
            cancelled=stats['cancelled']
        )

        self.logger.info(
            f"Crawl finished: {result.pages_crawled} pages crawled, "
            f"{result.pages_failed} failed, {len(result)} distinct words "
            f"in {result.runtime_seconds:.2f}s"
        )
        return result

    def cancel(self):
        """Cancel a running crawl from another thread."""
        if self.pool is not None:
            self.pool.cancel()

    def get_status(self) -> dict:
        """
        Get current crawler status.

        Returns:
            dict with status information
        """
        status = {
            'seed_url': self.seed_url,
            'max_depth': self.config.max_depth,
            'robots_agent': self.robots_policy.rule_set.matched_agent,
            'robots_rules': len(self.robots_policy.rule_set),
            'sitemap': self.robots_policy.sitemap,
        }
        if self.pool is not None:
            status['pool'] = self.pool.get_stats()
        return status
