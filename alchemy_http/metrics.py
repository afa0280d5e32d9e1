"""
Prometheus Metrics for alchemy-http

Host application should expose the prometheus_client registry.
"""

import logging

from prometheus_client import Counter, Histogram

logger = logging.getLogger("alchemy_http.metrics")

EXECUTION_COUNT = Counter(
    "alchemy_http_executions_total",
    "Total number of HTTP executions",
    ["verb", "outcome"],
)

EXECUTION_LATENCY = Histogram(
    "alchemy_http_execution_latency_seconds",
    "HTTP execution latency in seconds",
    ["verb"],
)


def record_execution(verb: str, outcome: str, latency: float) -> None:
    """
    Record metrics for one executor call.

    Args:
        verb: HTTP verb (e.g., 'GET')
        outcome: 'ok' or the failure kind (e.g., 'timeout')
        latency: Call duration in seconds
    """
    try:
        EXECUTION_COUNT.labels(verb=verb, outcome=outcome).inc()
        EXECUTION_LATENCY.labels(verb=verb).observe(latency)
    except Exception as e:
        # Metrics failures should not break an execution
        logger.debug("Failed to record metrics: %s", e)
