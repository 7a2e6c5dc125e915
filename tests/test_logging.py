"""Tests for logging helpers"""
from shop.logging import get_logger, sanitize_id_for_logging


def test_get_logger_is_cached():
    assert get_logger("shop.test") is get_logger("shop.test")


def test_sanitize_id():
    assert sanitize_id_for_logging("item-123456789") == "item-123"
    assert sanitize_id_for_logging("a\nb") == "a\\nb"
    assert sanitize_id_for_logging("a\x00b") == "ab"
    assert sanitize_id_for_logging(None) == "N/A"
