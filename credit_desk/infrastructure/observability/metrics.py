"""Prometheus metrics for loan previews, delinquency tiers and rejected input"""

from prometheus_client import Counter, Histogram

from credit_desk.domain.models import DelinquencyTier

# Preview metrics
preview_counter = Counter(
    "credit_desk_preview_total",
    "Loan cost previews computed",
    ["frequency"],  # DAILY | WEEKLY | MONTHLY
)

# Delinquency metrics
delinquency_tier_counter = Counter(
    "credit_desk_delinquency_tier_total",
    "Late payments classified by tier",
    ["tier"],  # CURRENT | WARNING | CRITICAL
)

invalid_input_counter = Counter(
    "credit_desk_invalid_input_total",
    "Requests rejected for invalid loan or payment input",
    ["operation"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_preview(frequency: str) -> None:
    preview_counter.labels(frequency=frequency).inc()


def record_tiers(counts: dict[DelinquencyTier, int]) -> None:
    """Record how many late payments landed in each tier"""
    for tier, count in counts.items():
        if count:
            delinquency_tier_counter.labels(tier=tier.value).inc(count)
