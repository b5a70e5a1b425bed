import logging

from app.core.logging_config import RequestIdFilter, bind_request_id


def _record():
    return logging.LogRecord("test", logging.INFO, __file__, 1, "message", None, None)


def test_filter_uses_placeholder_outside_a_request():
    record = _record()

    assert RequestIdFilter().filter(record) is True
    assert record.request_id == "-"


def test_bind_request_id_scopes_the_id():
    with bind_request_id("req-1") as request_id:
        inside = _record()
        RequestIdFilter().filter(inside)

    outside = _record()
    RequestIdFilter().filter(outside)

    assert request_id == "req-1"
    assert inside.request_id == "req-1"
    assert outside.request_id == "-"


def test_bind_request_id_resets_after_error():
    try:
        with bind_request_id("req-2"):
            raise RuntimeError("boom")
    except RuntimeError:
        pass

    record = _record()
    RequestIdFilter().filter(record)
    assert record.request_id == "-"
