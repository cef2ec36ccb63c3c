"""
Crawler Errors - Exception hierarchy shared by all crawler components.

Construction-time errors (seed URL, robots.txt) abort the crawl.
Per-page errors are caught by the worker loop, logged and skipped.
"""

from typing import Optional


class CrawlerError(Exception):
    """Base class for all errors raised by the crawler."""
    pass


class UrlError(CrawlerError):
    """Raised when a URL cannot be parsed or resolved to an absolute http(s) URL."""

    def __init__(self, url: str, reason: str = "invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class FetchError(CrawlerError):
    """Raised when a page cannot be retrieved (transport error or bad status)."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch {url}: {reason}")


class ParseError(CrawlerError):
    """Raised when a document cannot be parsed."""
    pass


class WorkerError(CrawlerError):
    """Raised when a worker thread dies from an unexpected exception."""

    def __init__(self, worker_name: str, cause: BaseException):
        self.worker_name = worker_name
        self.cause = cause
        super().__init__(f"{worker_name} terminated abnormally: {cause!r}")
