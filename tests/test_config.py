from pathlib import Path

import pytest

from word_crawler.config.crawler_config import (
    ConfigLoader,
    ConfigurationError,
    validate_config,
)


DEFAULT_YAML = Path(__file__).resolve().parents[1] / "config" / "default.yaml"


def test_default_config():
    config = ConfigLoader.create_default_config()

    assert config.max_depth == 2
    assert config.workers == 10
    assert config.top_n == 10
    assert config.max_runtime_seconds is None
    assert config.robots.user_agent == "WordCrawler"
    assert config.robots.rule_matching == "exact"
    assert config.parse.excluded_tags == ["script", "style", "noscript"]
    assert validate_config(config)


def test_shipped_config_file_is_valid():
    config = ConfigLoader.load_from_yaml(str(DEFAULT_YAML))

    assert validate_config(config)
    assert config == ConfigLoader.create_default_config()


def test_save_and_load(tmp_path):
    config = ConfigLoader.create_default_config()
    config.workers = 4
    config.max_runtime_seconds = 60
    config.robots.rule_matching = "prefix"
    config.fetch.timeout_seconds = 5

    path = tmp_path / "nested" / "crawler.yaml"
    ConfigLoader.save_to_yaml(config, str(path))

    assert ConfigLoader.load_from_yaml(str(path)) == config


def test_partial_file_uses_defaults(tmp_path):
    path = tmp_path / "partial.yaml"
    path.write_text("crawl:\n  workers: 3\ncomponents:\n  fetch:\n    timeout_seconds: 7\n")

    config = ConfigLoader.load_from_yaml(str(path))

    assert config.workers == 3
    assert config.fetch.timeout_seconds == 7
    assert config.max_depth == 2
    assert config.fetch.user_agent == "WordCrawler/1.0"


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        ConfigLoader.load_from_yaml(str(tmp_path / "missing.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("crawl: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        ConfigLoader.load_from_yaml(str(path))


def test_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")

    with pytest.raises(ConfigurationError, match="Empty"):
        ConfigLoader.load_from_yaml(str(path))


def test_non_mapping_file(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- one\n- two\n")

    with pytest.raises(ConfigurationError):
        ConfigLoader.load_from_yaml(str(path))


@pytest.mark.parametrize("field, value", [
    ("workers", 0),
    ("max_depth", -1),
    ("top_n", -5),
    ("max_runtime_seconds", 0),
])
def test_validate_rejects_bad_crawl_settings(field, value):
    config = ConfigLoader.create_default_config()
    setattr(config, field, value)

    with pytest.raises(ConfigurationError):
        validate_config(config)


def test_validate_rejects_unknown_rule_matching():
    config = ConfigLoader.create_default_config()
    config.robots.rule_matching = "regex"

    with pytest.raises(ConfigurationError, match="rule_matching"):
        validate_config(config)


def test_validate_rejects_empty_user_agent():
    config = ConfigLoader.create_default_config()
    config.robots.user_agent = ""

    with pytest.raises(ConfigurationError):
        validate_config(config)
