"""Monitoring API routes for service status, health checks, logs and metrics"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from payment_monitor.api.deps import get_activity_log, get_settings
from payment_monitor.core.config import Settings
from payment_monitor.schemas import (
    HealthResponse, LogsResponse, ServiceDescriptor, PAYMENT_FAILURE_EVENTS
)
from payment_monitor.services.activity_log import ActivityLog, DEFAULT_QUERY_LIMIT

router = APIRouter(tags=["monitoring"])

SERVICE_NAME = "Stripe Payment Failure Monitor"

ENDPOINTS = {
    "/": "Service status and available endpoints",
    "/health": "Health check endpoint",
    "/webhook": "Stripe webhook endpoint for payment events",
    "/logs": "View recent activity logs",
    "/test": "Test payment failure alert",
    "/metrics": "Prometheus metrics",
}


@router.get("/", response_model=ServiceDescriptor)
def service_status():
    """Service status and available endpoints"""
    return ServiceDescriptor(
        service=SERVICE_NAME,
        status="running",
        endpoints=ENDPOINTS,
        webhook_events=list(PAYMENT_FAILURE_EVENTS),
    )


@router.get("/health", response_model=HealthResponse)
def health_check(settings: Settings = Depends(get_settings)):
    """Health check endpoint - reports configured credentials, no live probe"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        stripe_connected=settings.stripe_connected,
        gmail_connected=settings.gmail_connected,
    )


@router.get("/logs", response_model=LogsResponse)
def recent_logs(
    limit: int = Query(DEFAULT_QUERY_LIMIT, ge=1, le=1000),
    activity_log: ActivityLog = Depends(get_activity_log),
):
    """Recent activity, newest first"""
    return activity_log.query(limit)


@router.get("/metrics")
def metrics_endpoint():
    """Prometheus metrics endpoint"""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
