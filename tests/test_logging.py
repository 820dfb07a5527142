import json
import logging

from shared.core.logging_config import REDACTED, SecurityFilter, StructuredFormatter, request_id_var


def _record(msg, **extra):
    record = logging.LogRecord("restaurant.test", logging.INFO, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_security_filter_masks_nested_fields():
    record = _record("login", extra_fields={"email": "a@b.co", "body": {"password": "x", "items": [{"token": "t"}]}})
    SecurityFilter().filter(record)
    assert record.extra_fields["email"] == "a@b.co"
    assert record.extra_fields["body"]["password"] == REDACTED
    assert record.extra_fields["body"]["items"][0]["token"] == REDACTED


def test_security_filter_masks_inline_pairs():
    record = _record("retrying with password=hunter2 for user")
    SecurityFilter().filter(record)
    assert record.getMessage() == f"retrying with password={REDACTED} for user"


def test_formatter_emits_trace_and_performance():
    token = request_id_var.set("req-1")
    try:
        line = StructuredFormatter("restaurant-api", "1.0.0").format(
            _record("done", extra_fields={"order_id": "o1"}, duration_ms=12.3456)
        )
    finally:
        request_id_var.reset(token)
    document = json.loads(line)
    assert document["service"] == "restaurant-api"
    assert document["trace"] == {"request_id": "req-1"}
    assert document["custom"] == {"order_id": "o1"}
    assert document["performance"] == {"duration_ms": 12.35}
