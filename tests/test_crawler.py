import pytest

from word_crawler.core.crawler import CrawlerConfig, CrawlResult, WordCrawler
from word_crawler.errors import FetchError, ParseError, UrlError

from tests.fakes import FakeFetcher, ROBOTS, SEED, html_page


ROBOTS_TXT = """User-agent: *
Disallow: /secret

User-agent: WordCrawler
Disallow: /secret
Disallow: /hidden

Sitemap: https://example.com/sitemap.xml
"""

SITE = {
    ROBOTS: ROBOTS_TXT,
    SEED: html_page("Hello, world! Hello.", ["/secret", "/hidden", "/news"]),
    "https://example.com/news": html_page("Breaking: hello (again)", ["/archive"]),
    "https://example.com/archive": html_page("old news", []),
    "https://example.com/secret": html_page("password password", []),
    "https://example.com/hidden": html_page("hidden words", []),
}


def test_crawl_end_to_end():
    fetcher = FakeFetcher(SITE)
    crawler = WordCrawler(SEED, CrawlerConfig(workers=3), fetcher=fetcher)

    result = crawler.crawl()

    assert isinstance(result, CrawlResult)
    assert result.top(3) == [("hello", 3), ("again", 1), ("breaking", 1)]
    assert dict(result.word_counts) == {
        "hello": 3, "world": 1, "breaking": 1, "again": 1, "old": 1, "news": 1,
    }
    assert result.pages_crawled == 3
    assert result.pages_failed == 0
    assert result.urls_enqueued == 3
    assert not result.cancelled
    assert fetcher.fetch_count("https://example.com/secret") == 0
    assert fetcher.fetch_count("https://example.com/hidden") == 0


def test_crawl_respects_depth():
    fetcher = FakeFetcher(SITE)
    crawler = WordCrawler(SEED, CrawlerConfig(max_depth=1), fetcher=fetcher)

    result = crawler.crawl()

    assert result.max_depth == 1
    assert fetcher.fetch_count("https://example.com/archive") == 0
    assert "old" not in dict(result.word_counts)


def test_robots_fetched_once_at_startup():
    fetcher = FakeFetcher(SITE)
    crawler = WordCrawler(SEED, fetcher=fetcher)

    assert fetcher.fetched == [ROBOTS]
    assert crawler.robots_policy.rule_set.matched_agent == "WordCrawler"

    crawler.crawl()
    assert fetcher.fetch_count(ROBOTS) == 1


def test_invalid_seed_fails_before_fetching():
    fetcher = FakeFetcher(SITE)

    with pytest.raises(UrlError):
        WordCrawler("example.com/no-scheme", fetcher=fetcher)

    assert fetcher.fetched == []


def test_robots_fetch_failure_is_fatal():
    fetcher = FakeFetcher({}, errors={ROBOTS: FetchError(ROBOTS, "Request Error: refused")})

    with pytest.raises(FetchError):
        WordCrawler(SEED, fetcher=fetcher)


def test_unparsable_robots_is_fatal():
    fetcher = FakeFetcher({ROBOTS: "\x00\x00binary"})

    with pytest.raises(ParseError):
        WordCrawler(SEED, fetcher=fetcher)


def test_site_without_robots_is_crawled():
    pages = {SEED: html_page("one two two", [])}
    result = WordCrawler(SEED, fetcher=FakeFetcher(pages)).crawl()

    assert result.top() == [("two", 2), ("one", 1)]


def test_get_status():
    crawler = WordCrawler(SEED, fetcher=FakeFetcher(SITE))
    crawler.crawl()

    status = crawler.get_status()
    assert status['sitemap'] == "https://example.com/sitemap.xml"
    assert status['robots_agent'] == "WordCrawler"
    assert status['robots_rules'] == 2
    assert status['pool']['pages_completed'] == 3


def test_prefix_rule_matching():
    pages = {
        ROBOTS: "User-agent: *\nDisallow: /private/\n",
        SEED: html_page("start", ["private/a", "/private/b", "/public"]),
        "https://example.com/public": html_page("public", []),
    }
    fetcher = FakeFetcher(pages)
    config = CrawlerConfig()
    config.robots.rule_matching = "prefix"

    result = WordCrawler(SEED, config, fetcher=fetcher).crawl()

    assert dict(result.word_counts) == {"start": 1, "public": 1}
    assert fetcher.fetch_count("https://example.com/private/a") == 0
    assert fetcher.fetch_count("https://example.com/private/b") == 0
