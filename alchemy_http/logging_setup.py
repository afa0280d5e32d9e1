"""
Structured JSON Logging for alchemy-http

Provides a JSON formatter for structured logging output.
Useful for log aggregation systems like ELK, Datadog, CloudWatch.
"""

import json
import logging
import sys
from typing import Any, Dict

_EXTRA_FIELDS = ("verb", "url", "status_code", "failure_kind")

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "token", "secret", "key"}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: Log record to format

        Returns:
            JSON string with timestamp, logger name, level, message
        """
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for field in _EXTRA_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for alchemy-http.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> from alchemy_http.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    package_logger = logging.getLogger("alchemy_http")
    package_logger.setLevel(level)
    package_logger.handlers = [handler]
    package_logger.propagate = False


def sanitize_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """
    Redact credential-bearing headers before they are logged.

    Example:
        >>> sanitize_headers({"Authorization": "Bearer abc", "Accept": "*/*"})
        {'Authorization': '***REDACTED***', 'Accept': '*/*'}
    """
    sanitized = {}
    for key, value in headers.items():
        lowered = key.lower()
        if any(sensitive in lowered for sensitive in SENSITIVE_HEADERS):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value
    return sanitized
