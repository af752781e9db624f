"""FastAPI application entry point"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from payment_monitor import __version__
from payment_monitor.core.config import Settings, get_settings
from payment_monitor.core.logging import setup_logging
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.email_service import GmailMailer
from payment_monitor.services.stripe_service import StripeGateway

# Import routers
from payment_monitor.api import alerts, monitoring, webhooks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    settings = app.state.settings
    activity_log = app.state.activity_log

    # Startup
    activity_log.record(f"Stripe Payment Failure Monitor started on port {settings.PORT}")
    activity_log.record("Webhook endpoint: /webhook")
    activity_log.record("Ready to monitor payment failures and send email alerts")
    if not settings.stripe_connected:
        logger.warning("STRIPE_SECRET_KEY is not set; customer lookups will fail")
    if not settings.gmail_connected:
        logger.warning("Gmail credentials are not set; alert emails will fail")

    yield

    # Shutdown
    logger.info("Shutting down...")


async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    request.app.state.activity_log.error(f"Unhandled error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


def create_app(
    settings: Optional[Settings] = None,
    activity_log: Optional[ActivityLog] = None,
    gateway: Optional[StripeGateway] = None,
    mailer: Optional[GmailMailer] = None,
) -> FastAPI:
    """Build the application, wiring collaborators from settings unless given"""
    settings = settings or get_settings()

    app = FastAPI(
        title="Stripe Payment Failure Monitor",
        description="Relays Stripe payment failure webhooks to email alerts",
        version=__version__,
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.activity_log = activity_log if activity_log is not None else ActivityLog(settings.ACTIVITY_LOG_CAPACITY)
    app.state.gateway = gateway if gateway is not None else StripeGateway(
        settings.STRIPE_SECRET_KEY, settings.STRIPE_WEBHOOK_SECRET
    )
    app.state.mailer = mailer if mailer is not None else GmailMailer.from_settings(settings)

    # Include routers
    app.include_router(monitoring.router)
    app.include_router(alerts.router)
    app.include_router(webhooks.router)

    app.add_exception_handler(Exception, global_exception_handler)

    return app


def run():
    """Run the service with uvicorn"""
    settings = get_settings()
    setup_logging(settings)

    # Reload needs the app as an import string
    if settings.ENVIRONMENT == "development":
        uvicorn.run(
            "payment_monitor.main:create_app",
            factory=True,
            host=settings.HOST,
            port=settings.PORT,
            reload=True,
        )
    else:
        uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
