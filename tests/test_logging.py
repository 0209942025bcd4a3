"""Tests for logging helpers"""
import logging

from storefront.logging import MAX_LOGGED_LENGTH, PACKAGE_LOGGER, _level_from_env, get_logger, log_safe


def test_get_logger_cached():
    """Test loggers are cached per name"""
    assert get_logger("storefront.test") is get_logger("storefront.test")


def test_get_logger_nests_under_package():
    """Test foreign names end up under the storefront namespace"""
    assert get_logger("storefront.cart").name == "storefront.cart"
    assert get_logger("scripts.seed").name == "storefront.scripts.seed"
    assert get_logger(PACKAGE_LOGGER) is logging.getLogger(PACKAGE_LOGGER)


def test_level_from_env(monkeypatch):
    """Test the package variable wins over LOG_LEVEL, junk falls back to INFO"""
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("STOREFRONT_LOG_LEVEL", raising=False)
    assert _level_from_env() == logging.DEBUG

    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "warning")
    assert _level_from_env() == logging.WARNING

    monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "loud")
    assert _level_from_env() == logging.INFO


def test_log_safe_keeps_full_keys():
    """Test identity keys are logged whole, not cut to a prefix"""
    assert log_safe("product-123456:Color=Red") == "product-123456:Color=Red"


def test_log_safe_escapes_control_chars():
    """Test newlines can't forge log entries"""
    assert log_safe("a\nb\r\tc\x00") == "a\\nb\\r\\tc"


def test_log_safe_limits_length():
    """Test long values are cut with an ellipsis"""
    assert log_safe("x" * 60, max_length=10) == "x" * 10 + "..."
    assert log_safe("x" * (MAX_LOGGED_LENGTH + 1)).endswith("...")


def test_log_safe_empty_values():
    assert log_safe("") == "N/A"
    assert log_safe(None) == "N/A"
    assert log_safe(ValueError("boom")) == "boom"
