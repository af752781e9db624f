"""Helpers for building signed Stripe webhook deliveries"""
import hashlib
import hmac
import json
import time

TEST_WEBHOOK_SECRET = "whsec_test123"


def sign_payload(payload: bytes, secret: str = TEST_WEBHOOK_SECRET, timestamp: int = None) -> str:
    """Build a stripe-signature header the way Stripe signs deliveries"""
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload.decode('utf-8')}".encode("utf-8")
    signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={signature}"


def make_event(event_type: str, data_object: dict, event_id: str = "evt_test123") -> bytes:
    """Serialized Stripe event envelope"""
    return json.dumps({
        "id": event_id,
        "object": "event",
        "type": event_type,
        "created": 1700000000,
        "data": {"object": data_object},
    }).encode("utf-8")
