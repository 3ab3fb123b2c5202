"""Webhook Gateway - FastAPI application entry point."""

import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.config import settings
from app.dispatch import LoggingHandler, WebhookDispatcher
from app.receivers import SecretStore
from app.routers import health, webhooks

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Webhook Gateway",
    description="Authenticates and normalizes inbound webhooks",
    version=health.VERSION,
)

# Rate limiting
app.state.limiter = webhooks.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Receivers and subscribers
app.state.secret_store = SecretStore.from_settings(settings)
app.state.dispatcher = WebhookDispatcher([LoggingHandler()])

# Routers (health is public; webhook routes authenticate with the code parameter)
app.include_router(health.router)
app.include_router(webhooks.router, prefix="/api/webhooks", tags=["webhooks"])
