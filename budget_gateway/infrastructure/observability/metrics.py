"""Prometheus metrics for forecasts, risk alerts, payment generation and notifications"""

from prometheus_client import Counter, Histogram

# Forecast metrics
forecast_counter = Counter(
    "budget_forecast_total",
    "Debt payoff forecasts computed",
    ["strategy", "outcome"],  # outcome: converged | non_convergent
)

forecast_months_histogram = Histogram(
    "budget_forecast_months",
    "Projected months to debt-free for converged forecasts",
    buckets=[6, 12, 24, 36, 60, 120, 240, 600, 1200],
)

# Risk metrics
risk_alert_counter = Counter(
    "budget_risk_alerts_total",
    "Debt-to-income alerts raised",
    ["risk_level"],  # medium | high
)

# Payment tracker
payments_generated_counter = Counter(
    "budget_payments_generated_total",
    "Automatic debt payment entries created",
)

# Notification webhook metrics
notification_latency_histogram = Histogram(
    "notification_latency_seconds",
    "Notification webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

notification_failure_counter = Counter(
    "notification_failures_total",
    "Failed notification deliveries",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_forecast(strategy: str, converged: bool, months_to_payoff: int) -> None:
    """Record forecast outcome; months are only observed when payoff was reached"""
    outcome = "converged" if converged else "non_convergent"
    forecast_counter.labels(strategy=strategy, outcome=outcome).inc()
    if converged:
        forecast_months_histogram.observe(months_to_payoff)


def record_risk_alert(risk_level: str) -> None:
    risk_alert_counter.labels(risk_level=risk_level).inc()
