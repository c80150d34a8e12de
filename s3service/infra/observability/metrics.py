from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

# Label values come from a fixed set of operation names; never bucket or key.
OPERATIONS = Counter(
    "s3_operations_total",
    "Total S3 operations issued through the wrapper",
    ["operation", "outcome"],
)

LATENCY = Histogram(
    "s3_operation_duration_seconds",
    "S3 operation latency in seconds",
    ["operation"],
)


@contextmanager
def track_operation(operation: str, *, enabled: bool = True) -> Iterator[None]:
    if not enabled:
        yield
        return
    start = time.perf_counter()
    outcome = "error"
    try:
        yield
        outcome = "success"
    finally:
        OPERATIONS.labels(operation=operation, outcome=outcome).inc()
        LATENCY.labels(operation=operation).observe(time.perf_counter() - start)
