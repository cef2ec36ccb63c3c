"""
HTML Parser - Wraps BeautifulSoup to expose the two things the crawler needs:
visible text fragments and anchor hrefs.
"""

import logging
from typing import Iterator, List, Tuple
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, FeatureNotFound
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction

from ..errors import ParseError


# Never visible, even when the markup has no <body> for us to scope to
HEAD_TAGS = ('head', 'title')


@dataclass
class ParseConfig:
    """Configuration for HTML parsing."""
    parser: str = "html.parser"  # 'html.parser', 'lxml', or 'html5lib'
    excluded_tags: List[str] = field(
        default_factory=lambda: ['script', 'style', 'noscript']
    )


class ParsedPage:
    """A parsed HTML document."""

    def __init__(self, soup: BeautifulSoup, excluded_tags: Tuple[str, ...]):
        self.soup = soup
        self.excluded_tags = excluded_tags

    def text_fragments(self) -> Iterator[str]:
        """Yield visible text fragments of the <body>, in document order."""
        root = self.soup.body or self.soup
        for string in root.find_all(string=True):
            if isinstance(string, (Comment, Declaration, Doctype, ProcessingInstruction)):
                continue
            if any(parent.name in self.excluded_tags or parent.name in HEAD_TAGS
                   for parent in string.parents):
                continue
            yield str(string)

    def hrefs(self) -> List[str]:
        """Return every anchor href value, in document order."""
        return [a['href'] for a in self.soup.find_all('a', href=True)]


class PageParser:
    """Parses raw markup into a ParsedPage."""

    def __init__(self, config: ParseConfig = None):
        self.config = config or ParseConfig()
        self.logger = logging.getLogger(self.__class__.__name__)

    def parse(self, html: str) -> ParsedPage:
        """
        Parse HTML markup.

        Raises:
            ParseError: If the configured parser is unavailable or fails
        """
        try:
            soup = BeautifulSoup(html, self.config.parser)
        except FeatureNotFound as e:
            raise ParseError(f"HTML parser '{self.config.parser}' is not installed") from e
        except (TypeError, ValueError, AssertionError) as e:
            raise ParseError(f"Failed to parse HTML: {e}") from e

        return ParsedPage(soup, tuple(self.config.excluded_tags))
