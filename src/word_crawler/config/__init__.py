"""
Configuration Module - Configuration management and loading.

Components:
-----------
- ConfigLoader: Loads and saves configurations from/to YAML files
- validate_config: Validates configuration objects
- ConfigurationError: Exception raised for invalid configurations

Usage:
------
from word_crawler.config import ConfigLoader, validate_config

config = ConfigLoader.load_from_yaml('config/default.yaml')
validate_config(config)

config.workers = 20
ConfigLoader.save_to_yaml(config, 'config/my_config.yaml')

Configuration File Format:
-------------------------
crawl:
  max_depth: 2
  workers: 10
  top_n: 10
  max_runtime_seconds: null

components:
  robots:
    user_agent: WordCrawler
    rule_matching: exact
  fetch:
    timeout_seconds: 30
  parse:
    parser: html.parser
"""

from .crawler_config import (
    ConfigLoader,
    validate_config,
    ConfigurationError
)

__all__ = [
    'ConfigLoader',
    'validate_config',
    'ConfigurationError',
]
