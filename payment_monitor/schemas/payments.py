"""Pydantic schemas for Stripe payment failure events"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict


PAYMENT_INTENT_FAILED = "payment_intent.payment_failed"
INVOICE_PAYMENT_FAILED = "invoice.payment_failed"
CHARGE_FAILED = "charge.failed"

PAYMENT_FAILURE_EVENTS = (PAYMENT_INTENT_FAILED, INVOICE_PAYMENT_FAILED, CHARGE_FAILED)


class PaymentFailureRecord(BaseModel):
    """Canonical payment failure, built once per event and never stored"""
    model_config = ConfigDict(frozen=True)

    payment_intent_id: str
    amount: int
    currency: str
    failure_code: Optional[str] = None
    failure_message: Optional[str] = None
    payment_method_type: Optional[str] = None
    created: int
    customer_name: str = ""
    customer_email: str = ""


# ============================================================================
# STRIPE OBJECT SHAPES
# ============================================================================

class _StripeObject(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TypedRef(_StripeObject):
    """Any nested Stripe object where only ``type`` matters"""
    type: Optional[str] = None


class ObjectRef(_StripeObject):
    id: Optional[str] = None


class PaymentError(_StripeObject):
    code: Optional[str] = None
    message: Optional[str] = None
    payment_method: Optional[TypedRef] = None


class PaymentIntentPayload(_StripeObject):
    id: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    customer: Union[str, ObjectRef, None] = None
    created: Optional[int] = None
    payment_method_types: Optional[List[str]] = None
    payment_method: Union[str, TypedRef, None] = None
    last_payment_error: Optional[PaymentError] = None


class InvoicePayload(_StripeObject):
    id: Optional[str] = None
    payment_intent: Union[str, ObjectRef, None] = None
    amount_due: Optional[int] = None
    currency: Optional[str] = None
    customer: Union[str, ObjectRef, None] = None
    created: Optional[int] = None


class ChargePayload(_StripeObject):
    id: Optional[str] = None
    payment_intent: Union[str, ObjectRef, None] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    customer: Union[str, ObjectRef, None] = None
    created: Optional[int] = None
    failure_code: Optional[str] = None
    failure_message: Optional[str] = None
    payment_method_details: Optional[TypedRef] = None
    source: Optional[TypedRef] = None
