import logging
import time
from typing import Optional

from prometheus_client import Counter, Histogram

logger = logging.getLogger(__name__)

# Prometheus Metrics
EXTRACTION_DURATION_SECONDS = Histogram(
    "photo_info_extraction_seconds",
    "Time spent deriving photo information",
    ["operation"]
)

DECODE_FAILURES_TOTAL = Counter(
    "photo_info_decode_failures_total",
    "Photos whose tags could not be decoded",
)


class PerformanceMonitor:
    """Helper to measure how long a derivation takes."""

    def __init__(self):
        self.start_time = 0.0
        self.end_time = 0.0

    def start(self):
        self.start_time = time.perf_counter()

    def stop(self):
        self.end_time = time.perf_counter()

    @property
    def duration(self):
        return self.end_time - self.start_time

    def report(self, label: str, count: Optional[int] = None) -> str:
        count_str = f" (N={count})" if count is not None else ""
        msg = f"[{label}]{count_str} Time: {self.duration:.4f}s"

        EXTRACTION_DURATION_SECONDS.labels(operation=label).observe(self.duration)
        logger.debug(msg)
        return msg
