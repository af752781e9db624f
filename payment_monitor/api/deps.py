"""FastAPI dependencies resolving the collaborators held on ``app.state``"""
from fastapi import Request

from payment_monitor.core.config import Settings
from payment_monitor.services.activity_log import ActivityLog
from payment_monitor.services.email_service import GmailMailer
from payment_monitor.services.stripe_service import StripeGateway


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_activity_log(request: Request) -> ActivityLog:
    return request.app.state.activity_log


def get_gateway(request: Request) -> StripeGateway:
    return request.app.state.gateway


def get_mailer(request: Request) -> GmailMailer:
    return request.app.state.mailer
