"""
Robots Policy - Fetches robots.txt for the seed host, parses it into
per-agent rule groups and resolves the rule set that applies to our crawler.

The policy is built once, before any worker starts, and is read-only
afterwards, so workers share it without locking.
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from urllib.parse import urljoin, urlparse

from ..errors import FetchError, ParseError, UrlError


MISSING_ROBOTS_STATUS = (404, 410)


@dataclass
class RobotsConfig:
    """Configuration for robots.txt handling."""
    user_agent: str = "WordCrawler"
    rule_matching: str = "exact"  # 'exact' (raw href lookup) or 'prefix' (path prefix)
    treat_missing_as_allow: bool = True  # 404/410 on robots.txt means no rules


@dataclass(frozen=True)
class RobotsRuleGroup:
    """One User-agent block of a robots.txt file."""
    agents: Tuple[str, ...]
    rules: Mapping[str, bool]  # pattern -> True (Allow) / False (Disallow)


@dataclass(frozen=True)
class RobotsFile:
    """Parsed contents of a robots.txt file."""
    groups: Tuple[RobotsRuleGroup, ...]
    sitemaps: Tuple[str, ...] = ()

    @property
    def sitemap(self) -> Optional[str]:
        return self.sitemaps[0] if self.sitemaps else None


@dataclass(frozen=True)
class EffectiveRuleSet:
    """Rules chosen for one user-agent. An empty rule set allows everything."""
    rules: Mapping[str, bool] = field(default_factory=dict)
    matched_agent: Optional[str] = None

    def __contains__(self, pattern: str) -> bool:
        return pattern in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    def get(self, pattern: str) -> Optional[bool]:
        return self.rules.get(pattern)

    def as_dict(self) -> Dict[str, bool]:
        return dict(self.rules)


def _freeze(rules: Dict[str, bool]) -> Mapping[str, bool]:
    return MappingProxyType(dict(rules))


def parse_robots_txt(body: str) -> RobotsFile:
    """
    Parse robots.txt text into rule groups.

    Consecutive User-agent lines accumulate into the current group,
    Allow/Disallow lines add rules to it, and a blank line closes it.
    Comment lines, lines without a colon and unknown directives are ignored.

    Args:
        body: robots.txt contents

    Returns:
        RobotsFile with groups in file order

    Raises:
        ParseError: If the body is not a text file
    """
    if '\x00' in body:
        raise ParseError("robots.txt contains binary data")

    groups: List[RobotsRuleGroup] = []
    sitemaps: List[str] = []
    agents: List[str] = []
    rules: Dict[str, bool] = {}

    def close_group():
        if agents or rules:
            groups.append(RobotsRuleGroup(agents=tuple(agents), rules=_freeze(rules)))
        agents.clear()
        rules.clear()

    for raw_line in body.splitlines():
        line = raw_line.strip()

        if not line:
            close_group()
            continue

        if line.startswith('#'):
            continue

        if ':' not in line:
            continue

        directive, value = line.split(':', 1)
        directive = directive.strip().lower()
        value = value.split('#', 1)[0].strip()

        if directive == 'user-agent':
            if value:
                agents.append(value)
        elif directive in ('allow', 'disallow'):
            # An empty path ("Disallow:") restricts nothing
            if value:
                rules[value] = directive == 'allow'
        elif directive == 'sitemap':
            # URLs may contain '#'
            sitemap = line.split(':', 1)[1].strip()
            if sitemap:
                sitemaps.append(sitemap)

    close_group()
    return RobotsFile(groups=tuple(groups), sitemaps=tuple(sitemaps))


def resolve_rule_set(groups, user_agent: str) -> EffectiveRuleSet:
    """
    Select the rule set that applies to user_agent.

    Every (group, agent) pair is examined in file order:
    - an exact agent match wins, and the first exact match is kept;
    - otherwise an agent that is a prefix of user_agent wins if it is
      longer than the best prefix match so far;
    - otherwise '*' is used while nothing more specific has matched.

    Returns:
        EffectiveRuleSet, empty if no group applies
    """
    best_kind = None  # None, 'wildcard', 'prefix' or 'exact'
    best_agent = None
    best_rules: Mapping[str, bool] = {}

    for group in groups:
        for agent in group.agents:
            if agent == user_agent:
                if best_kind != 'exact':
                    best_kind, best_agent, best_rules = 'exact', agent, group.rules
            elif agent != '*' and user_agent.startswith(agent):
                if best_kind is None or best_kind == 'wildcard' or (
                        best_kind == 'prefix' and len(agent) > len(best_agent)):
                    best_kind, best_agent, best_rules = 'prefix', agent, group.rules
            elif agent == '*':
                if best_kind is None or best_kind == 'wildcard':
                    best_kind, best_agent, best_rules = 'wildcard', agent, group.rules

    if best_kind is None:
        return EffectiveRuleSet()

    return EffectiveRuleSet(rules=_freeze(best_rules), matched_agent=best_agent)


def robots_url_for(url: str) -> str:
    """
    Return the robots.txt location for the host of url.

    Raises:
        UrlError: If url is not an absolute http(s) URL
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise UrlError(url, f"unparsable URL ({e})") from e

    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise UrlError(url, "not an absolute http(s) URL")

    return urljoin(url, '/robots.txt')


class RobotsPolicy:
    """
    The robots.txt policy of the seed host for one user-agent.

    Usage:
        policy = RobotsPolicy.from_url("https://example.com/", config, fetcher)
        if policy.is_disallowed(href, resolved_url):
            ...
    """

    def __init__(self, robots_file: RobotsFile, user_agent: str,
                 rule_matching: str = "exact", host: Optional[str] = None):
        self.robots_file = robots_file
        self.user_agent = user_agent
        self.rule_matching = rule_matching
        self.host = host
        self.rule_set = resolve_rule_set(robots_file.groups, user_agent)
        self.logger = logging.getLogger(self.__class__.__name__)

        if self.rule_set.matched_agent is None:
            self.logger.info(f"No robots.txt group applies to {user_agent}, allowing all")
        else:
            self.logger.info(
                f"Using robots.txt group '{self.rule_set.matched_agent}' for {user_agent} "
                f"({len(self.rule_set)} rules)"
            )

    @property
    def rules(self) -> Mapping[str, bool]:
        return self.rule_set.rules

    @property
    def sitemap(self) -> Optional[str]:
        return self.robots_file.sitemap

    @classmethod
    def from_url(cls, url: str, config: RobotsConfig, fetcher) -> 'RobotsPolicy':
        """
        Fetch and parse robots.txt for the host of url.

        Args:
            url: Seed URL
            config: Robots configuration
            fetcher: Object with fetch(url) -> str that raises FetchError

        Raises:
            UrlError: If url cannot be parsed
            FetchError: If robots.txt cannot be retrieved
            ParseError: If robots.txt cannot be parsed
        """
        logger = logging.getLogger(cls.__name__)
        robots_url = robots_url_for(url)
        host = urlparse(url).netloc.lower()

        logger.info(f"Fetching robots.txt from {robots_url}")
        try:
            body = fetcher.fetch(robots_url)
        except FetchError as e:
            if config.treat_missing_as_allow and e.status_code in MISSING_ROBOTS_STATUS:
                logger.warning(f"No robots.txt at {robots_url} (HTTP {e.status_code}), allowing all")
                body = ''
            else:
                raise

        robots_file = parse_robots_txt(body)
        if robots_file.sitemap:
            logger.debug(f"Sitemap for {host}: {robots_file.sitemap}")

        return cls(robots_file, config.user_agent,
                   rule_matching=config.rule_matching, host=host)

    def is_disallowed(self, href: str, resolved_url: Optional[str] = None) -> bool:
        """
        Check whether a link is disallowed.

        In 'exact' mode the raw href must itself be a Disallow pattern.
        In 'prefix' mode the longest pattern that prefixes the resolved
        URL's path decides, Allow winning ties; other hosts are never
        disallowed.
        """
        if self.rule_matching != 'prefix':
            return self.rule_set.get(href) is False

        target = urlparse(resolved_url or href)
        if target.netloc and self.host and target.netloc.lower() != self.host:
            return False

        path = target.path or '/'
        if target.query:
            path = f"{path}?{target.query}"

        best_pattern = None
        best_allow = True
        for pattern, allow in self.rule_set.rules.items():
            if not path.startswith(pattern):
                continue
            if best_pattern is None or len(pattern) > len(best_pattern) or (
                    len(pattern) == len(best_pattern) and allow):
                best_pattern, best_allow = pattern, allow

        return not best_allow


def resolve(url: str, agent_name: str, fetcher, config: RobotsConfig = None) -> EffectiveRuleSet:
    """
    Fetch robots.txt for url and return the rule set for agent_name.

    Raises:
        UrlError: If url is not an absolute http(s) URL
        FetchError: If robots.txt cannot be retrieved
        ParseError: If robots.txt cannot be parsed
    """
    config = replace(config or RobotsConfig(), user_agent=agent_name)
    return RobotsPolicy.from_url(url, config, fetcher).rule_set


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    sample = """# example robots.txt
User-agent: *
Disallow: /private

User-agent: WordCrawler
Allow: /private
Disallow: /tmp

Sitemap: https://example.com/sitemap.xml
"""
    parsed = parse_robots_txt(sample)
    for agent in ("WordCrawler", "WordCrawler/1.0", "OtherBot"):
        print(f"{agent:20} -> {resolve_rule_set(parsed.groups, agent).as_dict()}")
    print(f"Sitemap: {parsed.sitemap}")
