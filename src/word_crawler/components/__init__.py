"""
Components Module - Collaborators used by the crawl engine.

Components:
-----------
- HTTPFetcher: Downloads pages with pooled requests sessions
- PageParser: Parses HTML with BeautifulSoup into text fragments and links
- RobotsPolicy: Resolves the robots.txt rules for our user-agent

Usage:
------
from word_crawler.components import HTTPFetcher, RobotsPolicy, RobotsConfig

fetcher = HTTPFetcher()
policy = RobotsPolicy.from_url('https://example.com', RobotsConfig(), fetcher)
policy.is_disallowed('/private')
"""

from .http_fetcher import HTTPFetcher, FetchConfig, SessionManager
from .html_parser import PageParser, ParsedPage, ParseConfig
from .robots_policy import (
    RobotsPolicy,
    RobotsConfig,
    RobotsRuleGroup,
    RobotsFile,
    EffectiveRuleSet,
    parse_robots_txt,
    resolve_rule_set,
    resolve,
)

__all__ = [
    'HTTPFetcher',
    'FetchConfig',
    'SessionManager',
    'PageParser',
    'ParsedPage',
    'ParseConfig',
    'RobotsPolicy',
    'RobotsConfig',
    'RobotsRuleGroup',
    'RobotsFile',
    'EffectiveRuleSet',
    'parse_robots_txt',
    'resolve_rule_set',
    'resolve',
]
