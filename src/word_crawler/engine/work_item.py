"""
Work Item - Unit of work handed from the frontier to a worker.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class WorkItem:
    """
    A link waiting to be crawled.

    url is the raw href as found on the page (or the seed URL);
    base_url is the absolute URL of the page it was found on.
    """
    url: str
    base_url: str
    depth: int

    def __repr__(self) -> str:
        return f"WorkItem(url='{self.url}', depth={self.depth})"
