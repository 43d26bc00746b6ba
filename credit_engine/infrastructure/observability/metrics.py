"""Prometheus metrics for monitoring approval rates, score distribution and strategy usage"""

from prometheus_client import Counter, Histogram

# Decision metrics
decision_counter = Counter(
    "credit_engine_decision_total",
    "Total loan decisions made",
    ["outcome"],  # approved | declined
)

score_histogram = Histogram(
    "credit_engine_score",
    "Scaled credit scores issued",
    buckets=[300, 550, 580, 600, 650, 700, 750, 800, 850],
)

# Scoring metrics
scoring_counter = Counter(
    "credit_engine_scoring_total",
    "Scoring calls by strategy",
    ["strategy"],
)

validation_failure_counter = Counter(
    "credit_engine_validation_failures_total",
    "Profiles rejected by validation",
)

# Service health
request_duration_histogram = Histogram(
    "credit_engine_http_request_duration_seconds",
    "HTTP request latency by route template",
    ["method", "endpoint", "status"],
)


def record_score(strategy: str | None, success: bool) -> None:
    """Record a scoring call and whether the profile passed validation"""
    scoring_counter.labels(strategy=strategy or "unknown").inc()
    if not success:
        validation_failure_counter.inc()


def record_decision(approved: bool, score: int) -> None:
    """Record decision metrics for monitoring approval rates and score distribution"""
    outcome = "approved" if approved else "declined"
    decision_counter.labels(outcome=outcome).inc()
    score_histogram.observe(score)
