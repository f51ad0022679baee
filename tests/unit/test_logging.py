import json
import logging

from stockkeeper.utils.logging import JsonFormatter, KeyValueFormatter, event_fields


def _record(**fields) -> logging.LogRecord:
    record = logging.LogRecord(
        "stockkeeper.database", logging.INFO, __file__, 10, "collection_written", None, None,
    )
    record.__dict__.update(fields)
    return record


def test_plain_record_has_no_event_fields():
    assert event_fields(_record()) == {}


def test_json_formatter_lifts_event_fields():
    payload = json.loads(JsonFormatter().format(_record(collection="stock", version=2)))
    assert payload["event"] == "collection_written"
    assert payload["logger"] == "stockkeeper.database"
    assert payload["level"] == "INFO"
    assert payload["collection"] == "stock"
    assert payload["version"] == 2
    assert "lineno" not in payload
    assert "msg" not in payload


def test_key_value_formatter_appends_event_fields():
    formatter = KeyValueFormatter("%(levelname)s %(message)s")
    line = formatter.format(_record(collection="stock", version=2))
    assert line == "INFO collection_written collection=stock version=2"


def test_key_value_formatter_without_fields():
    formatter = KeyValueFormatter("%(levelname)s %(message)s")
    assert formatter.format(_record()) == "INFO collection_written"
