"""Prometheus metrics for the application"""
from prometheus_client import Counter, REGISTRY


def _counter(name, documentation, labelnames=()):
    # Re-importing the module (e.g. uvicorn reload) must not re-register
    try:
        return Counter(name, documentation, labelnames)
    except ValueError:
        return REGISTRY._names_to_collectors.get(name)


# Webhook metrics
webhook_events_counter = _counter(
    'payment_monitor_webhook_events_total',
    'Total number of verified Stripe webhook events received',
    ['event_type']
)

webhook_rejections_counter = _counter(
    'payment_monitor_webhook_rejections_total',
    'Total number of webhook deliveries rejected by signature verification'
)

# Alert metrics
alert_emails_counter = _counter(
    'payment_monitor_alert_emails_total',
    'Total number of payment failure alert emails submitted',
    ['status']
)

customer_lookup_failures_counter = _counter(
    'payment_monitor_customer_lookup_failures_total',
    'Total number of failed Stripe customer lookups'
)
