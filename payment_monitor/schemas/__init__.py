"""Pydantic schemas package"""
from payment_monitor.schemas.activity import LogEntry, LogLevel
from payment_monitor.schemas.payments import (
    PaymentFailureRecord, PAYMENT_FAILURE_EVENTS,
    PAYMENT_INTENT_FAILED, INVOICE_PAYMENT_FAILED, CHARGE_FAILED,
)
from payment_monitor.schemas.responses import (
    ServiceDescriptor, HealthResponse, LogsResponse, AlertTestResponse, WebhookAck,
)

# Export all for convenience
__all__ = [
    "LogEntry", "LogLevel", "PaymentFailureRecord", "PAYMENT_FAILURE_EVENTS",
    "PAYMENT_INTENT_FAILED", "INVOICE_PAYMENT_FAILED", "CHARGE_FAILED",
    "ServiceDescriptor", "HealthResponse", "LogsResponse", "AlertTestResponse", "WebhookAck",
]
