"""Inbound webhook endpoint - routes requests to the receiver named in the path."""

import logging
from functools import partial

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings
from app.dispatch import WebhookDispatcher
from app.receivers import ReceiverServices, SecretStore, get_receiver

router = APIRouter()

limiter = Limiter(key_func=get_remote_address)

# Every method reaches the receiver so it can answer 405 itself
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("/incoming/{receiver}", methods=ALL_METHODS)
@router.api_route("/incoming/{receiver}/{id}", methods=ALL_METHODS)
@limiter.limit(settings.webhook_rate_limit)
async def incoming_webhook(request: Request, receiver: str, id: str = ""):
    """Validate an inbound webhook and dispatch it to the registered handlers."""
    webhook_receiver = get_receiver(receiver)
    if webhook_receiver is None:
        raise HTTPException(404, f"No webhook receiver is registered with the name '{receiver}'")

    secret_store: SecretStore = request.app.state.secret_store
    dispatcher: WebhookDispatcher = request.app.state.dispatcher

    services = ReceiverServices(
        secret_lookup=secret_store.lookup_for(webhook_receiver.name),
        dispatch=partial(dispatcher.dispatch, webhook_receiver.name, id),
        logger=logging.getLogger(f"app.receivers.{webhook_receiver.name}"),
        require_https=not settings.disable_https_check,
    )
    return await webhook_receiver.receive(id, request, services)
