"""Stripe webhook routes"""
import stripe
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.concurrency import run_in_threadpool

from payment_monitor.api.deps import get_activity_log, get_gateway, get_mailer, get_settings
from payment_monitor.core.config import Settings
from payment_monitor.core.logging import webhook_logger as logger
from payment_monitor.core.metrics import webhook_events_counter, webhook_rejections_counter
from payment_monitor.schemas import WebhookAck, PAYMENT_FAILURE_EVENTS
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.email_service import GmailMailer
from payment_monitor.services.stripe_service import StripeGateway
from payment_monitor.services.webhook_service import process_payment_failure

router = APIRouter(tags=["webhooks"])


@router.post("/webhook", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    gateway: StripeGateway = Depends(get_gateway),
    mailer: GmailMailer = Depends(get_mailer),
    activity_log: ActivityLog = Depends(get_activity_log),
):
    """Handle Stripe webhook events

    Note: the body must reach this handler as raw bytes for signature verification.
    Every verified delivery is acknowledged with 200, even when the alert could
    not be sent, so Stripe does not redeliver it.
    """
    # Read body as raw bytes (critical for signature verification)
    payload = await request.body()
    sig_header = request.headers.get("stripe-signature")

    try:
        if not sig_header:
            raise ValueError("Missing stripe-signature header")
        event = gateway.construct_event(payload, sig_header)
    except (ValueError, stripe.SignatureVerificationError) as e:
        webhook_rejections_counter.inc()
        activity_log.error(f"Webhook signature verification failed: {e}")
        raise HTTPException(400, f"Webhook Error: {e}")

    event_type = event["type"]
    webhook_events_counter.labels(event_type=event_type).inc()
    activity_log.record(f"Received Stripe webhook event: {event_type}")

    if event_type in PAYMENT_FAILURE_EVENTS:
        try:
            # Customer lookup and Gmail send are blocking SDK calls
            outcome = await run_in_threadpool(
                process_payment_failure, event, gateway, mailer, settings, activity_log
            )
            if not outcome.alert_sent:
                logger.warning(f"Acknowledging {event_type} without a delivered alert")
        except Exception as e:
            # Unexpected error - log but still return 200 to prevent retries
            logger.error(f"Unexpected error processing webhook: {e}", exc_info=True)
            activity_log.error(f"Error processing payment failure event: {e}")
    else:
        logger.debug(f"Ignoring Stripe event type {event_type}")

    return WebhookAck(received=True, type=event_type)
