"""Stripe service - webhook verification and customer lookup"""
import logging
from dataclasses import dataclass
from typing import Any, Dict

import stripe

logger = logging.getLogger(__name__)


def to_plain(obj: Any) -> Any:
    """Convert a StripeObject (and its nested objects) into plain dicts

    StripeObject stopped subclassing dict in stripe 13, so ``.get()`` and
    ``dict(obj)`` only work on what this returns. Anything without
    ``to_dict`` is returned unchanged.
    """
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return obj


@dataclass(frozen=True)
class CustomerDetails:
    name: str = ""
    email: str = ""


class StripeGateway:
    """
    Thin wrapper over the Stripe SDK calls this service makes.

    Webhook signatures are verified by ``stripe.Webhook.construct_event`` and
    customers are fetched with ``stripe.Customer.retrieve``. Both are passed
    the keys held here instead of mutating the global ``stripe.api_key``.
    Results leave this class as plain Python values.
    """

    def __init__(self, secret_key: str, webhook_secret: str):
        self.secret_key = secret_key
        self.webhook_secret = webhook_secret

    def construct_event(self, payload: bytes, sig_header: str) -> Dict[str, Any]:
        """Verify a webhook delivery and parse it into a plain event dict

        Raises:
            ValueError: Payload is not valid JSON
            stripe.SignatureVerificationError: Signature does not match the webhook secret
        """
        event = stripe.Webhook.construct_event(payload, sig_header, self.webhook_secret)
        return to_plain(event)

    def retrieve_customer(self, customer_id: str) -> CustomerDetails:
        """Fetch a customer's name and email

        Raises:
            stripe.StripeError: Lookup failed (missing key, unknown customer, network)
        """
        customer = to_plain(stripe.Customer.retrieve(customer_id, api_key=self.secret_key or None))
        logger.debug(f"Retrieved Stripe customer {customer_id}")
        return CustomerDetails(
            name=customer.get("name") or "",
            email=customer.get("email") or "",
        )
