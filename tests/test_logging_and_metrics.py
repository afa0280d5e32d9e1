"""
Tests for structured logging and execution metrics.
"""

import json
import logging

from prometheus_client import REGISTRY

from alchemy_http import FailureKind, HttpRequest, HttpVerb, JsonSerializer, for_verb
from alchemy_http.logging_setup import JsonFormatter, sanitize_headers, setup_structured_logger
from alchemy_http.metrics import record_execution


def _sample(verb, outcome):
    value = REGISTRY.get_sample_value(
        "alchemy_http_executions_total", {"verb": verb, "outcome": outcome}
    )
    return value or 0.0


def test_json_formatter_includes_extras():
    record = logging.LogRecord("alchemy_http.executor", logging.WARNING, __file__, 1, "failed %s", ("x",), None)
    record.verb = "GET"
    record.failure_kind = "timeout"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["msg"] == "failed x"
    assert payload["level"] == "WARNING"
    assert payload["verb"] == "GET"
    assert payload["failure_kind"] == "timeout"
    assert "url" not in payload


def test_setup_structured_logger():
    setup_structured_logger(logging.DEBUG)
    package_logger = logging.getLogger("alchemy_http")
    try:
        assert package_logger.level == logging.DEBUG
        assert isinstance(package_logger.handlers[0].formatter, JsonFormatter)
        assert package_logger.propagate is False
    finally:
        package_logger.handlers = []
        package_logger.propagate = True
        package_logger.setLevel(logging.NOTSET)


def test_sanitize_headers():
    sanitized = sanitize_headers({"Authorization": "Bearer abc", "X-Api-Key": "k", "Accept": "*/*"})

    assert sanitized == {
        "Authorization": "***REDACTED***",
        "X-Api-Key": "***REDACTED***",
        "Accept": "*/*",
    }


def test_failure_is_logged_with_kind(adapter, caplog):
    executor = for_verb(HttpVerb.GET, adapter=adapter)

    with caplog.at_level(logging.WARNING, logger="alchemy_http.executor"):
        executor.execute(HttpRequest(url="http://localhost/"), JsonSerializer(), timeout=0)

    record = caplog.records[-1]
    assert record.failure_kind == FailureKind.TIMEOUT.value
    assert record.verb == "GET"


def test_executions_are_counted(adapter):
    executor = for_verb(HttpVerb.PUT, adapter=adapter)
    ok_before = _sample("PUT", "ok")
    timeout_before = _sample("PUT", "timeout")

    executor.execute(HttpRequest(url="http://localhost/items/1", body={}), JsonSerializer())
    executor.execute(HttpRequest(url="http://localhost/items/1", body={}), JsonSerializer(), 0)

    assert _sample("PUT", "ok") == ok_before + 1
    assert _sample("PUT", "timeout") == timeout_before + 1


def test_record_execution_never_raises():
    record_execution("GET", "ok", -1.0)
