"""Email service - payment failure alerts sent through the Gmail API"""
import base64
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from email.message import EmailMessage
from typing import Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from payment_monitor.core.config import Settings
from payment_monitor.core.metrics import alert_emails_counter
from payment_monitor.schemas.payments import PaymentFailureRecord
from payment_monitor.services.activity_log import ActivityLog

logger = logging.getLogger(__name__)

GMAIL_SEND_SCOPE = "https://www.googleapis.com/auth/gmail.send"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
DEFAULT_DASHBOARD_URL = "https://dashboard.stripe.com"


class EmailNotConfiguredError(RuntimeError):
    """Raised when Gmail OAuth credentials are missing"""


@dataclass(frozen=True)
class AlertMessage:
    subject: str
    body: str


@dataclass(frozen=True)
class SendResult:
    success: bool
    error: Optional[str] = None


def format_amount(amount: int, currency: Optional[str]) -> str:
    """Minor units to display form, e.g. (1999, 'usd') -> '$19.99 USD'"""
    return f"${amount / 100.0:.2f} {(currency or '').upper() or 'USD'}"


def format_timestamp(created: int) -> str:
    return datetime.fromtimestamp(created, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def render_alert(record: PaymentFailureRecord, dashboard_url: str = DEFAULT_DASHBOARD_URL) -> AlertMessage:
    """
    Render the subject and plaintext body for a payment failure alert.

    Args:
        record: Normalized payment failure
        dashboard_url: Base URL of the Stripe dashboard used for the deep link

    Returns:
        AlertMessage with subject and body
    """
    subject = f"🚨 Payment Failed Alert - {record.customer_name or 'Unknown Customer'}"

    body = f"""
A payment failure has been detected in your Stripe account:

Customer: {record.customer_name or 'Unknown'}
Customer Email: {record.customer_email or 'Not provided'}
Amount: {format_amount(record.amount, record.currency)}
Payment Method: {record.payment_method_type or 'Unknown'}
Failure Code: {record.failure_code or 'Not provided'}
Failure Message: {record.failure_message or 'No details provided'}
Payment Intent ID: {record.payment_intent_id}
Timestamp: {format_timestamp(record.created)}

Please review this failed payment in your Stripe dashboard:
{dashboard_url.rstrip('/')}/payments/{record.payment_intent_id}

---
Automated alert from Stripe Payment Monitor
    """.strip()

    return AlertMessage(subject=subject, body=body)


def build_raw_message(to: str, subject: str, body: str) -> str:
    """Encode a plaintext email in the base64url form Gmail's ``raw`` field expects"""
    message = EmailMessage()
    message["To"] = to
    message["Subject"] = subject
    message.set_content(body, charset="utf-8")
    return base64.urlsafe_b64encode(message.as_bytes()).decode().rstrip("=")


class GmailMailer:
    """Sends raw messages as the authorized Gmail user"""

    def __init__(self, client_id: str, client_secret: str, refresh_token: str):
        self.client_id = client_id
        self.client_secret = client_secret
        self.refresh_token = refresh_token
        self._service = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GmailMailer":
        return cls(settings.GMAIL_CLIENT_ID, settings.GMAIL_CLIENT_SECRET, settings.GMAIL_REFRESH_TOKEN)

    @property
    def configured(self) -> bool:
        return bool(self.client_id and self.client_secret and self.refresh_token)

    def _get_service(self):
        if self._service is None:
            # No access token yet; google-auth refreshes on the first request
            credentials = Credentials(
                token=None,
                refresh_token=self.refresh_token,
                token_uri=GOOGLE_TOKEN_URI,
                client_id=self.client_id,
                client_secret=self.client_secret,
                scopes=[GMAIL_SEND_SCOPE],
            )
            self._service = build('gmail', 'v1', credentials=credentials, cache_discovery=False)
        return self._service

    def send_raw(self, raw: str) -> dict:
        """Submit an encoded message. Raises on any transport or API error."""
        if not self.configured:
            raise EmailNotConfiguredError("Gmail credentials are not configured")
        return self._get_service().users().messages().send(
            userId="me",
            body={"raw": raw},
        ).execute()


def send_payment_failure_alert(
    record: PaymentFailureRecord,
    mailer: GmailMailer,
    recipient: str,
    activity_log: ActivityLog,
    dashboard_url: str = DEFAULT_DASHBOARD_URL,
) -> SendResult:
    """
    Render and send one alert email. Exactly one attempt is made.

    Args:
        record: Normalized payment failure
        mailer: Gmail client
        recipient: Alert destination address
        activity_log: Receives the outcome of the attempt
        dashboard_url: Base URL of the Stripe dashboard

    Returns:
        SendResult; errors are reported there, never raised
    """
    try:
        alert = render_alert(record, dashboard_url)
        raw = build_raw_message(recipient, alert.subject, alert.body)
        response = mailer.send_raw(raw)
    except Exception as exc:
        logger.debug("Alert email send failed", exc_info=True)
        alert_emails_counter.labels(status="failed").inc()
        activity_log.error(f"Failed to send email alert: {exc}")
        return SendResult(success=False, error=str(exc))

    message_id = response.get("id") if isinstance(response, dict) else None
    if message_id:
        logger.info(f"Gmail accepted alert for {record.payment_intent_id} (id: {message_id})")
    alert_emails_counter.labels(status="sent").inc()
    activity_log.record(f"Email alert sent successfully for payment {record.payment_intent_id}")
    return SendResult(success=True)
