"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from bookshop.core.logger import JSONFormatter, configure_logging


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    configure_logging("DEBUG")

    assert logging.getLogger().level == logging.DEBUG


def test_json_formatter_includes_known_extras() -> None:
    record = logging.LogRecord(
        "bookshop.test", logging.INFO, __file__, 1, "Book purchased", None, None
    )
    record.user_id = 3
    record.book_id = 9
    record.request_id = "req-1"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "Book purchased"
    assert payload["level"] == "INFO"
    assert payload["user_id"] == 3
    assert payload["book_id"] == 9
    assert payload["request_id"] == "req-1"
