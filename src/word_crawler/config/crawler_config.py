"""
Crawler Configuration Management - Configuration loading and validation.
Supports loading from YAML files with validation and defaults.
"""

import logging
import yaml
from typing import Dict, Any
from pathlib import Path
from dataclasses import asdict

from ..components.robots_policy import RobotsConfig
from ..components.http_fetcher import FetchConfig
from ..components.html_parser import ParseConfig
from ..core.crawler import CrawlerConfig


RULE_MATCHING_MODES = ('exact', 'prefix')


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""
    pass


class ConfigLoader:
    """Loads and saves crawler configuration as YAML."""

    @staticmethod
    def load_from_yaml(config_path: str) -> CrawlerConfig:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            CrawlerConfig object

        Raises:
            ConfigurationError: If configuration is invalid
        """
        logger = logging.getLogger(__name__)

        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to read {config_path}: {e}")

        if not config_dict:
            raise ConfigurationError(f"Empty configuration file: {config_path}")

        if not isinstance(config_dict, dict):
            raise ConfigurationError(f"Configuration must be a mapping: {config_path}")

        logger.info(f"Loaded configuration from {config_path}")

        try:
            return ConfigLoader._parse_config(config_dict)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"Failed to parse configuration: {e}")

    @staticmethod
    def _parse_config(config_dict: Dict[str, Any]) -> CrawlerConfig:
        """Parse configuration dictionary into CrawlerConfig object."""

        crawl = config_dict.get('crawl') or {}
        components = config_dict.get('components') or {}

        # Robots.txt
        robots_cfg = components.get('robots') or {}
        robots = RobotsConfig(
            user_agent=robots_cfg.get('user_agent', 'WordCrawler'),
            rule_matching=robots_cfg.get('rule_matching', 'exact'),
            treat_missing_as_allow=robots_cfg.get('treat_missing_as_allow', True)
        )

        # HTTP Fetch
        fetch_cfg = components.get('fetch') or {}
        fetch = FetchConfig(
            timeout_seconds=fetch_cfg.get('timeout_seconds', 30),
            verify_ssl=fetch_cfg.get('verify_ssl', True),
            user_agent=fetch_cfg.get('user_agent', 'WordCrawler/1.0'),
            max_content_size_mb=fetch_cfg.get('max_content_size_mb', 10),
            accept_language=fetch_cfg.get('accept_language', 'en-US,en;q=0.9'),
            accept_encoding=fetch_cfg.get('accept_encoding', 'gzip, deflate'),
            pool_connections=fetch_cfg.get('pool_connections', 10),
            pool_maxsize=fetch_cfg.get('pool_maxsize', 20)
        )

        # HTML Parsing
        parse_cfg = components.get('parse') or {}
        parse = ParseConfig(
            parser=parse_cfg.get('parser', 'html.parser'),
            excluded_tags=list(parse_cfg.get('excluded_tags', ['script', 'style', 'noscript']))
        )

        return CrawlerConfig(
            robots=robots,
            fetch=fetch,
            parse=parse,
            max_depth=crawl.get('max_depth', 2),
            workers=crawl.get('workers', 10),
            top_n=crawl.get('top_n', 10),
            max_runtime_seconds=crawl.get('max_runtime_seconds')
        )

    @staticmethod
    def save_to_yaml(config: CrawlerConfig, output_path: str):
        """Save configuration to YAML file."""
        logger = logging.getLogger(__name__)

        config_dict = {
            'crawl': {
                'max_depth': config.max_depth,
                'workers': config.workers,
                'top_n': config.top_n,
                'max_runtime_seconds': config.max_runtime_seconds,
            },
            'components': {
                'robots': asdict(config.robots),
                'fetch': asdict(config.fetch),
                'parse': asdict(config.parse),
            }
        }

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, 'w') as f:
                yaml.dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)
            logger.info(f"Configuration saved to {output_path}")
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration: {e}")

    @staticmethod
    def create_default_config() -> CrawlerConfig:
        """Create a default configuration."""
        return CrawlerConfig(
            robots=RobotsConfig(),
            fetch=FetchConfig(),
            parse=ParseConfig(),
            max_depth=2,
            workers=10,
            top_n=10,
            max_runtime_seconds=None
        )


def validate_config(config: CrawlerConfig) -> bool:
    """Validate crawler configuration."""
    logger = logging.getLogger(__name__)

    if not isinstance(config.workers, int) or config.workers < 1:
        raise ConfigurationError("workers must be at least 1")

    if not isinstance(config.max_depth, int) or config.max_depth < 0:
        raise ConfigurationError("max_depth cannot be negative")

    if not isinstance(config.top_n, int) or config.top_n < 0:
        raise ConfigurationError("top_n cannot be negative")

    if config.max_runtime_seconds is not None and config.max_runtime_seconds <= 0:
        raise ConfigurationError("max_runtime_seconds must be positive")

    if config.fetch.timeout_seconds <= 0:
        raise ConfigurationError("fetch timeout_seconds must be positive")

    if config.fetch.max_content_size_mb <= 0:
        raise ConfigurationError("fetch max_content_size_mb must be positive")

    if config.robots.rule_matching not in RULE_MATCHING_MODES:
        raise ConfigurationError(
            f"robots rule_matching must be one of {RULE_MATCHING_MODES}, "
            f"got '{config.robots.rule_matching}'"
        )

    if not config.robots.user_agent:
        raise ConfigurationError("robots user_agent cannot be empty")

    logger.info("Configuration validated successfully")
    return True
