"""
Page Processor - Crawls a single WorkItem.

Fetches the page, counts its words, and queues the links it contains
that are allowed by robots.txt, unvisited and within the depth limit.
"""

import logging
from collections import Counter
from urllib.parse import urljoin, urlparse

from ..errors import UrlError
from .frontier import Frontier
from .work_item import WorkItem
from .word_counter import count_words


def resolve_url(url: str, base_url: str) -> str:
    """
    Resolve url against base_url.

    Raises:
        UrlError: If the result is not an absolute http(s) URL
    """
    try:
        absolute_url = urljoin(base_url, url.strip())
        parsed = urlparse(absolute_url)
    except ValueError as e:
        raise UrlError(url, f"unresolvable URL ({e})") from e

    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise UrlError(url, "not an http(s) URL")

    return absolute_url


class PageProcessor:
    """
    Processes one page for a worker.

    Collaborators:
    - fetcher: fetch(url) -> str, raising FetchError
    - parser: parse(html) -> page with text_fragments() and hrefs()
    - robots_policy: is_disallowed(href, resolved_url) -> bool
    """

    def __init__(self, frontier: Frontier, fetcher, parser, robots_policy,
                 max_depth: int = 2):
        self.frontier = frontier
        self.fetcher = fetcher
        self.parser = parser
        self.robots_policy = robots_policy
        self.max_depth = max_depth
        self.logger = logging.getLogger(self.__class__.__name__)

    def process(self, item: WorkItem) -> Counter:
        """
        Fetch item, count its words and queue its outbound links.

        Args:
            item: Work item taken from the frontier

        Returns:
            Word frequencies of the page

        Raises:
            UrlError: If the item URL cannot be resolved
            FetchError: If the page cannot be fetched
            ParseError: If the page cannot be parsed
        """
        page_url = resolve_url(item.url, item.base_url)
        self.logger.info(f"Processing url: {page_url}, depth: {item.depth}")

        body = self.fetcher.fetch(page_url)
        page = self.parser.parse(body)

        word_freqs = count_words(page.text_fragments())

        queued = self._queue_links(page.hrefs(), page_url, item.depth)
        self.logger.debug(
            f"{page_url}: {sum(word_freqs.values())} words, {queued} new links"
        )

        return word_freqs

    def _queue_links(self, hrefs, page_url: str, depth: int) -> int:
        child_depth = depth + 1
        queued = 0

        for href in hrefs:
            if self._is_disallowed(href, page_url):
                self.logger.info(f"Skipping {href} (disallowed by robots.txt)")
                continue

            if self.frontier.contains(href):
                continue

            if child_depth <= self.max_depth:
                if self.frontier.enqueue(href, page_url, child_depth):
                    queued += 1

        return queued

    def _is_disallowed(self, href: str, page_url: str) -> bool:
        try:
            resolved = urljoin(page_url, href.strip())
        except ValueError:
            resolved = None
        return self.robots_policy.is_disallowed(href, resolved)
