"""
Word Crawler - A multi-threaded crawler that counts words across a website.

Features:
- Fixed pool of worker threads sharing one blocking frontier
- Deduplicated, depth-bounded link following
- Respects robots.txt for the seed host
- Configurable via YAML
"""

__version__ = "1.0.0"

from .core.crawler import WordCrawler, CrawlerConfig, CrawlResult
from .config.crawler_config import ConfigLoader, validate_config
from .errors import CrawlerError, UrlError, FetchError, ParseError, WorkerError

__all__ = [
    'WordCrawler',
    'CrawlerConfig',
    'CrawlResult',
    'ConfigLoader',
    'validate_config',
    'CrawlerError',
    'UrlError',
    'FetchError',
    'ParseError',
    'WorkerError',
]
