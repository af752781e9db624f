"""Pydantic response schemas for the HTTP API"""
from typing import Dict, List

from pydantic import BaseModel

from payment_monitor.schemas.activity import LogEntry
from payment_monitor.schemas.payments import PaymentFailureRecord


class ServiceDescriptor(BaseModel):
    service: str
    status: str
    endpoints: Dict[str, str]
    webhook_events: List[str]


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    stripe_connected: bool
    gmail_connected: bool


class LogsResponse(BaseModel):
    logs: List[LogEntry]
    total: int


class AlertTestResponse(BaseModel):
    success: bool
    message: str
    test_data: PaymentFailureRecord


class WebhookAck(BaseModel):
    received: bool
    type: str
