"""Webhook service - turns a verified Stripe failure event into an alert email"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from payment_monitor.core.config import Settings
from payment_monitor.schemas.payments import PaymentFailureRecord
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.email_service import GmailMailer, SendResult, send_payment_failure_alert
from payment_monitor.services.payment_event_service import (
    normalize_event, lookup_customer, apply_customer
)
from payment_monitor.services.stripe_service import StripeGateway, to_plain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WebhookOutcome:
    """What happened to one failure event; the HTTP ack does not depend on it"""
    event_type: str
    record: Optional[PaymentFailureRecord] = None
    send: Optional[SendResult] = None
    error: Optional[str] = None

    @property
    def alert_sent(self) -> bool:
        return self.send is not None and self.send.success


def process_payment_failure(
    event: Mapping[str, Any],
    gateway: StripeGateway,
    mailer: GmailMailer,
    settings: Settings,
    activity_log: ActivityLog,
) -> WebhookOutcome:
    """Process a verified payment failure event

    Normalizes the event, enriches it with customer details when the event
    references a customer, then sends the alert. Each step reports through
    its result type and is logged here.

    Args:
        event: Verified Stripe event (``stripe.Event`` or equivalent dict)
        gateway: Stripe client used for the customer lookup
        mailer: Gmail client used for the alert
        settings: Application settings (recipient, dashboard URL)
        activity_log: Activity log for this application

    Returns:
        WebhookOutcome describing the processing result
    """
    event = to_plain(event)
    event_type = event["type"]
    data_object = (event.get("data") or {}).get("object") or {}

    normalized = normalize_event(event_type, data_object, event.get("created"))
    if not normalized.ok:
        activity_log.error(f"Error processing payment failure event: {normalized.error}")
        return WebhookOutcome(event_type=event_type, error=normalized.error)

    record = normalized.record
    if normalized.customer_id:
        customer = lookup_customer(gateway, normalized.customer_id, activity_log)
        record = apply_customer(record, customer)

    activity_log.record(
        f"Processing payment failure: {record.payment_intent_id}, Amount: ${record.amount / 100.0:.2f}"
    )

    result = send_payment_failure_alert(
        record, mailer, settings.ALERT_EMAIL, activity_log, settings.STRIPE_DASHBOARD_URL
    )
    if result.success:
        activity_log.record(f"Successfully processed payment failure event: {event_type}")
    else:
        activity_log.error(f"Failed to send alert for payment failure: {record.payment_intent_id}")

    return WebhookOutcome(event_type=event_type, record=record, send=result)
