from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

# Dedicated registry so the host application's default registry stays untouched.
GATEWAY_REGISTRY = CollectorRegistry()

NOTIFY_OUTCOMES = ("sent", "provider_rejection", "transport_failure", "malformed")

BALLOU_NOTIFY_TOTAL = Counter(
    'ballou_notify_total',
    'Total number of notify calls sent to Ballou, by outcome.',
    ['outcome'],
    registry=GATEWAY_REGISTRY
)
BALLOU_NOTIFY_LATENCY_SECONDS = Histogram(
    'ballou_notify_latency_seconds',
    'Latency of the SendSms HTTP call in seconds.',
    registry=GATEWAY_REGISTRY
)


def record_outcome(outcome: str) -> None:
    BALLOU_NOTIFY_TOTAL.labels(outcome=outcome).inc()


def metrics_content() -> bytes:
    """Returns the gateway metrics in the Prometheus text exposition format."""
    return generate_latest(GATEWAY_REGISTRY)


for _outcome in NOTIFY_OUTCOMES:
    BALLOU_NOTIFY_TOTAL.labels(outcome=_outcome)
