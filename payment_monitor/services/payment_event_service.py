"""Payment event service - normalizes Stripe failure events into one record shape"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from payment_monitor.core.metrics import customer_lookup_failures_counter
from payment_monitor.schemas.payments import (
    PaymentFailureRecord, PaymentIntentPayload, InvoicePayload, ChargePayload, ObjectRef, TypedRef,
    PAYMENT_INTENT_FAILED, INVOICE_PAYMENT_FAILED, CHARGE_FAILED,
)
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.stripe_service import StripeGateway, to_plain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedEvent:
    """Outcome of normalization: a record, or the reason there is none"""
    record: Optional[PaymentFailureRecord] = None
    customer_id: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class CustomerLookup:
    name: str = ""
    email: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _ref_id(value: Union[str, ObjectRef, None]) -> Optional[str]:
    """Id of a field Stripe sends either as an id string or as an expanded object"""
    if isinstance(value, ObjectRef):
        return value.id
    return value or None


def _first(*values):
    for value in values:
        if value:
            return value
    return None


# ============================================================================
# PER-KIND EXTRACTORS
# ============================================================================

def _from_payment_intent(obj: PaymentIntentPayload, created: int) -> NormalizedEvent:
    error = obj.last_payment_error
    method_type = _first(
        obj.payment_method_types[0] if obj.payment_method_types else None,
        obj.payment_method.type if isinstance(obj.payment_method, TypedRef) else None,
        error.payment_method.type if error and error.payment_method else None,
    )
    record = PaymentFailureRecord(
        payment_intent_id=obj.id or "",
        amount=obj.amount or 0,
        currency=obj.currency or "",
        failure_code=error.code if error else None,
        failure_message=error.message if error else None,
        payment_method_type=method_type,
        created=obj.created or created,
    )
    return NormalizedEvent(record=record, customer_id=_ref_id(obj.customer))


def _from_invoice(obj: InvoicePayload, created: int) -> NormalizedEvent:
    record = PaymentFailureRecord(
        payment_intent_id=_first(obj.id, _ref_id(obj.payment_intent)) or "",
        amount=obj.amount_due or 0,
        currency=obj.currency or "",
        created=obj.created or created,
    )
    return NormalizedEvent(record=record, customer_id=_ref_id(obj.customer))


def _from_charge(obj: ChargePayload, created: int) -> NormalizedEvent:
    method_type = _first(
        obj.source.type if obj.source else None,
        obj.payment_method_details.type if obj.payment_method_details else None,
    )
    record = PaymentFailureRecord(
        payment_intent_id=_first(obj.id, _ref_id(obj.payment_intent)) or "",
        amount=obj.amount or 0,
        currency=obj.currency or "",
        failure_code=obj.failure_code,
        failure_message=obj.failure_message,
        payment_method_type=method_type,
        created=obj.created or created,
    )
    return NormalizedEvent(record=record, customer_id=_ref_id(obj.customer))


EXTRACTORS: Dict[str, tuple] = {
    PAYMENT_INTENT_FAILED: (PaymentIntentPayload, _from_payment_intent),
    INVOICE_PAYMENT_FAILED: (InvoicePayload, _from_invoice),
    CHARGE_FAILED: (ChargePayload, _from_charge),
}


def normalize_event(
    event_type: str,
    data_object: Mapping[str, Any],
    event_created: Optional[int] = None,
) -> NormalizedEvent:
    """Map a Stripe failure event's ``data.object`` onto a PaymentFailureRecord

    Args:
        event_type: One of the payment failure event types
        data_object: The event's ``data.object`` (a dict or StripeObject)
        event_created: Envelope ``created``, used when the object has none

    Returns:
        NormalizedEvent with either ``record`` or ``error`` set. Never raises.
    """
    if event_type not in EXTRACTORS:
        return NormalizedEvent(error=f"Unsupported event type: {event_type}")

    model, extract = EXTRACTORS[event_type]
    created = event_created or int(time.time())
    try:
        payload = model.model_validate(dict(to_plain(data_object) or {}))
    except (ValidationError, TypeError, ValueError) as e:
        logger.warning(f"Malformed {event_type} payload: {e}")
        return NormalizedEvent(error=f"Malformed {event_type} payload: {e}")
    return extract(payload, created)


def lookup_customer(gateway: StripeGateway, customer_id: str, activity_log: ActivityLog) -> CustomerLookup:
    """Resolve a customer's name and email with one Stripe call

    A failed lookup is logged and returns blank details; alerting goes on without them.
    """
    try:
        customer = gateway.retrieve_customer(customer_id)
    except Exception as e:
        customer_lookup_failures_counter.inc()
        activity_log.error(f"Failed to retrieve customer info: {e}")
        return CustomerLookup(error=str(e))
    return CustomerLookup(name=customer.name, email=customer.email)


def apply_customer(record: PaymentFailureRecord, customer: CustomerLookup) -> PaymentFailureRecord:
    return record.model_copy(update={
        "customer_name": customer.name,
        "customer_email": customer.email,
    })
