"""Prometheus metrics for ingestion volume, rejections and persona mix"""

from prometheus_client import Counter, Histogram

# Analysis metrics
analysis_counter = Counter(
    "watcard_analysis_total",
    "Total analyses run",
    ["outcome"],  # ok | malformed
)

rejected_records_counter = Counter(
    "watcard_rejected_records_total",
    "Raw records dropped during normalization",
)

persona_counter = Counter(
    "watcard_persona_total",
    "Personas assigned",
    ["persona"],
)

analysis_duration_histogram = Histogram(
    "watcard_analysis_duration_seconds",
    "Time spent normalizing and aggregating one batch",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(rejected_count: int, persona: str, duration_seconds: float) -> None:
    """Record one successful analysis"""
    analysis_counter.labels(outcome="ok").inc()
    rejected_records_counter.inc(rejected_count)
    persona_counter.labels(persona=persona).inc()
    analysis_duration_histogram.observe(duration_seconds)


def record_malformed_batch() -> None:
    analysis_counter.labels(outcome="malformed").inc()
