"""
Command Line Interface for the Word Crawler.

Crawls a site from a seed URL and prints the most frequent words.

Usage Examples:
--------------

# Basic crawl (depth 2)
python -m word_crawler.cli https://example.com

# Crawl with a custom depth
python -m word_crawler.cli https://example.com -d 3

# Crawl with custom configuration
python -m word_crawler.cli https://example.com -c config/default.yaml

# Verbose logging
python -m word_crawler.cli -v https://example.com
"""

import argparse
import logging
import sys
from pathlib import Path

from .core.crawler import WordCrawler
from .config.crawler_config import ConfigLoader, validate_config, ConfigurationError
from .errors import CrawlerError


def setup_logging(verbose: bool = False):
    """
    Setup logging configuration.

    Args:
        verbose: Enable debug-level logging if True
    """
    level = logging.DEBUG if verbose else logging.INFO

    log_dir = Path('logs')
    log_dir.mkdir(exist_ok=True)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_dir / 'crawler.log')
        ]
    )

    # Set third-party loggers to WARNING to reduce noise
    if not verbose:
        logging.getLogger('urllib3').setLevel(logging.WARNING)
        logging.getLogger('requests').setLevel(logging.WARNING)


def non_negative_int(value: str) -> int:
    """argparse type for --depth."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"depth cannot be negative: {number}")
    return number


def print_results(url: str, depth: int, word_counts):
    """Print the success banner and the ranked words."""
    print("")
    print("Success!")
    print(f'Top words found on "{url}" with a depth of {depth}')
    for word, count in word_counts:
        print(f'"{word}": {count} occurrences')


def crawl_command(args):
    """
    Execute a crawl.

    Args:
        args: Parsed command-line arguments
    """
    logger = logging.getLogger(__name__)

    try:
        if args.config:
            logger.info(f"Loading configuration from {args.config}")
            config = ConfigLoader.load_from_yaml(args.config)
        else:
            config = ConfigLoader.create_default_config()

        if args.depth is not None:
            config.max_depth = args.depth
        validate_config(config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Crawl failed: {e}")
        sys.exit(1)

    crawler = None
    try:
        crawler = WordCrawler(args.url, config)
        result = crawler.crawl()
    except KeyboardInterrupt:
        logger.info("Crawl interrupted by user")
        if crawler is not None:
            crawler.cancel()
        sys.exit(1)
    except CrawlerError as e:
        logger.error(f"Crawl failed: {e}")
        print(f"Crawl failed: {e}")
        sys.exit(1)

    print_results(args.url, config.max_depth, result.top(config.top_n))
    logger.info(
        f"Crawled {result.pages_crawled} pages ({result.pages_failed} failed) "
        f"in {result.runtime_seconds:.2f} seconds"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='word-crawler',
        description='Word Crawler - count the most frequent words on a website',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s https://example.com
  %(prog)s https://example.com -d 3
  %(prog)s https://example.com -c config/default.yaml
        """
    )

    parser.add_argument(
        'url',
        help='Seed URL to start crawling from'
    )

    parser.add_argument(
        '-d', '--depth',
        type=non_negative_int,
        default=None,
        metavar='N',
        help='Maximum link depth to follow, 0 = seed page only (overrides crawl.max_depth; default: 2)'
    )

    parser.add_argument(
        '-c', '--config',
        help='Path to YAML configuration file (default: use built-in defaults)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    crawl_command(args)


if __name__ == '__main__':
    main()
