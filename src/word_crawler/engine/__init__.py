"""
Engine Module - The concurrent crawl engine.

Components:
-----------
- Frontier: Shared queue + visited set + pending counter
- WorkItem: A link waiting to be crawled
- PageProcessor: Fetches one page, counts words, queues new links
- WorkerPool: Runs worker threads and merges their word counts
"""

from .work_item import WorkItem
from .frontier import Frontier
from .page_processor import PageProcessor, resolve_url
from .worker_pool import WorkerPool
from .word_counter import (
    PUNCTUATION,
    normalize_word,
    count_words,
    merge_frequencies,
    rank_words,
)

__all__ = [
    'WorkItem',
    'Frontier',
    'PageProcessor',
    'resolve_url',
    'WorkerPool',
    'PUNCTUATION',
    'normalize_word',
    'count_words',
    'merge_frequencies',
    'rank_words',
]
