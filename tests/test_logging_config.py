"""Tests for logging configuration."""

import io
import json
import logging

import pytest

from ledgerkit.logging_config import setup_logging


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    logger = logging.getLogger("ledgerkit")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def test_plain_output():
    stream = io.StringIO()
    setup_logging(level="INFO", stream=stream)

    logging.getLogger("ledgerkit.domain.transaction").info("applied %s", "tx-1")

    assert "INFO ledgerkit.domain.transaction: applied tx-1" in stream.getvalue()


def test_level_filters():
    stream = io.StringIO()
    setup_logging(level="WARNING", stream=stream)

    logging.getLogger("ledgerkit").info("hidden")

    assert stream.getvalue() == ""


def test_json_output_includes_structured_fields():
    stream = io.StringIO()
    setup_logging(level="DEBUG", json_output=True, stream=stream)

    logging.getLogger("ledgerkit.domain.transaction").info(
        "applied", extra={"action": "apply", "transaction_id": "tx-1", "account_id": 3}
    )

    entry = json.loads(stream.getvalue().strip())
    assert entry["level"] == "INFO"
    assert entry["message"] == "applied"
    assert entry["action"] == "apply"
    assert entry["transaction_id"] == "tx-1"
    assert entry["account_id"] == 3
    assert "user_id" not in entry


def test_repeated_setup_does_not_duplicate_handlers():
    setup_logging()
    setup_logging()
    assert len(logging.getLogger("ledgerkit").handlers) == 1


def test_unknown_level():
    with pytest.raises(ValueError):
        setup_logging(level="LOUD")
