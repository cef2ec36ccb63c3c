"""
Core Module - High-level crawl orchestration.

Components:
-----------
- WordCrawler: Builds the robots policy, frontier and worker pool and runs a crawl
- CrawlerConfig: Complete configuration for a crawl
- CrawlResult: Ranked word counts and crawl statistics

Usage:
------
from word_crawler.core import WordCrawler, CrawlerConfig
from word_crawler.config import ConfigLoader

# Load configuration
config = ConfigLoader.load_from_yaml('config/default.yaml')

# Create crawler (fetches robots.txt)
crawler = WordCrawler('https://example.com', config)

# Crawl until the frontier is exhausted
result = crawler.crawl()

for word, count in result.top(10):
    print(word, count)
"""

from .crawler import WordCrawler, CrawlerConfig, CrawlResult

__all__ = [
    'WordCrawler',
    'CrawlerConfig',
    'CrawlResult',
]
