"""Alert API routes"""
import time

from fastapi import APIRouter, Depends

from payment_monitor.api.deps import get_activity_log, get_mailer, get_settings
from payment_monitor.core.config import Settings
from payment_monitor.schemas import AlertTestResponse, PaymentFailureRecord
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.email_service import GmailMailer, send_payment_failure_alert

router = APIRouter(tags=["alerts"])


def build_test_record() -> PaymentFailureRecord:
    """Fixed sample failure used by the manual test trigger"""
    now = time.time()
    return PaymentFailureRecord(
        customer_name="Test Customer",
        customer_email="test@example.com",
        amount=2000,  # $20.00
        currency="usd",
        payment_method_type="card",
        failure_code="card_declined",
        failure_message="Your card was declined.",
        payment_intent_id=f"pi_test_{int(now * 1000)}",
        created=int(now),
    )


@router.post("/test", response_model=AlertTestResponse)
def send_test_alert(
    settings: Settings = Depends(get_settings),
    mailer: GmailMailer = Depends(get_mailer),
    activity_log: ActivityLog = Depends(get_activity_log),
):
    """Send a sample payment failure alert to ALERT_EMAIL"""
    activity_log.record("Manual test triggered")

    record = build_test_record()
    result = send_payment_failure_alert(
        record, mailer, settings.ALERT_EMAIL, activity_log, settings.STRIPE_DASHBOARD_URL
    )

    return AlertTestResponse(
        success=result.success,
        message="Test alert sent successfully" if result.success else "Failed to send test alert",
        test_data=record,
    )
