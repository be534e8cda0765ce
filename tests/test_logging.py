"""Tests for logger setup and secret redaction."""
import logging

from vicipack.domain import ItemList, Section
from vicipack.logging import DetailsFormatter, create_logger, redact


def test_redact_masks_secret_values():
    section = Section({
        "type": "IKE",
        "data": "s3cret",
        "owners": ["alice"],
        "key": {"secret": "hunter2", "id": "abc"},
    })
    cleaned = redact(section)
    assert cleaned["type"] == b"IKE"
    assert cleaned["data"] == b"***"
    assert cleaned["owners"] == ItemList(["alice"])
    assert cleaned["key"] == Section({"secret": "***", "id": "abc"})
    # original is untouched
    assert section["data"] == b"s3cret"


def test_redact_masks_secret_lists():
    cleaned = redact(Section({"Secrets": ["a", "b"]}))
    assert cleaned["Secrets"] == ItemList(["***", "***"])


def test_create_logger_is_idempotent():
    first = create_logger("vicipack.test", logging.DEBUG)
    second = create_logger("vicipack.test", logging.INFO)
    assert first is second
    assert len(first.handlers) == 1
    assert first.level == logging.INFO
    assert first.propagate is False


def test_details_formatter_appends_details():
    record = logging.LogRecord("vicipack", logging.DEBUG, __file__, 1, "vici_decoded", None, None)
    record.details = {"bytes": 42}
    text = DetailsFormatter("%(message)s").format(record)
    assert text == "vici_decoded bytes=42"
