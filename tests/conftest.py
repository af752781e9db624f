"""Shared pytest fixtures for test suite"""
import sys
from pathlib import Path
from typing import Generator
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path
project_dir = Path(__file__).parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))

from payment_monitor.core.config import Settings
from payment_monitor.main import create_app
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.email_service import GmailMailer
from payment_monitor.services.stripe_service import CustomerDetails, StripeGateway

from helpers import TEST_WEBHOOK_SECRET


@pytest.fixture(scope="function")
def settings() -> Settings:
    """Settings with Stripe configured and Gmail left blank"""
    return Settings(
        STRIPE_SECRET_KEY="sk_test_123",
        STRIPE_WEBHOOK_SECRET=TEST_WEBHOOK_SECRET,
        GMAIL_CLIENT_ID="",
        GMAIL_CLIENT_SECRET="",
        GMAIL_REFRESH_TOKEN="",
        ALERT_EMAIL="alerts@example.com",
    )


@pytest.fixture(scope="function")
def activity_log() -> ActivityLog:
    return ActivityLog(capacity=100)


@pytest.fixture(scope="function")
def gateway(settings: Settings) -> StripeGateway:
    """Real gateway so signatures are verified by the Stripe SDK; customer lookup is mocked"""
    gateway = StripeGateway(settings.STRIPE_SECRET_KEY, settings.STRIPE_WEBHOOK_SECRET)
    gateway.retrieve_customer = Mock(return_value=CustomerDetails(name="Jane Doe", email="jane@example.com"))
    return gateway


@pytest.fixture(scope="function")
def mock_mailer() -> Mock:
    """Gmail mailer that accepts every message"""
    mailer = Mock(spec=GmailMailer)
    mailer.send_raw.return_value = {"id": "msg_123", "threadId": "thr_123"}
    return mailer


@pytest.fixture(scope="function")
def app(settings, activity_log, gateway, mock_mailer):
    return create_app(settings, activity_log=activity_log, gateway=gateway, mailer=mock_mailer)


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """FastAPI test client with injected collaborators"""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def payment_intent_object() -> dict:
    return {
        "id": "pi_123",
        "object": "payment_intent",
        "amount": 1999,
        "currency": "usd",
        "created": 1700000000,
        "customer": None,
        "payment_method_types": ["card"],
        "last_payment_error": {
            "code": "card_declined",
            "message": "Your card was declined.",
        },
    }


@pytest.fixture
def invoice_object() -> dict:
    return {
        "id": "in_123",
        "object": "invoice",
        "amount_due": 5000,
        "currency": "eur",
        "customer": "cus_123",
        "payment_intent": "pi_456",
        "created": 1700000100,
    }


@pytest.fixture
def charge_object() -> dict:
    return {
        "id": "ch_123",
        "object": "charge",
        "amount": 750,
        "currency": "gbp",
        "customer": "cus_789",
        "payment_intent": "pi_789",
        "created": 1700000200,
        "failure_code": "insufficient_funds",
        "failure_message": "Your card has insufficient funds.",
        "payment_method_details": {"type": "card"},
        "source": None,
    }
