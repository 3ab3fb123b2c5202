"""In-process dispatch of validated webhook events to registered handlers."""

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.responses import Response


logger = logging.getLogger(__name__)


class WebhookContext(BaseModel):
    """A validated webhook event as seen by handlers."""
    receiver: str
    id: str
    event_types: list[str]
    data: dict[str, Any]
    received_at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())


class WebhookHandler(ABC):
    """Abstract base class for webhook event handlers.

    Handlers run in ascending ``order``. A handler restricted to one receiver
    sets ``receiver``; None means it sees every receiver's events.
    """

    order: int = 50
    receiver: str | None = None

    @abstractmethod
    async def execute(self, context: WebhookContext) -> Response | None:
        """Handle the event. Returning a response ends the dispatch."""
        pass


class LoggingHandler(WebhookHandler):
    """Logs every received event."""

    order = 0

    async def execute(self, context: WebhookContext) -> Response | None:
        logger.info(
            f"Webhook '{context.receiver}' (id='{context.id}') received {', '.join(context.event_types)}"
        )
        return None


class WebhookDispatcher:
    """Registry of handlers; runs the matching ones for each event."""

    def __init__(self, handlers: list[WebhookHandler] | None = None):
        self._handlers: list[WebhookHandler] = list(handlers or [])

    def register(self, handler: WebhookHandler) -> None:
        self._handlers.append(handler)

    def handlers_for(self, receiver: str) -> list[WebhookHandler]:
        matching = [
            h for h in self._handlers
            if h.receiver is None or h.receiver.lower() == receiver.lower()
        ]
        return sorted(matching, key=lambda h: h.order)

    async def dispatch(
        self, receiver: str, id: str, event_types: list[str], data: dict[str, Any]
    ) -> Response:
        context = WebhookContext(receiver=receiver, id=id, event_types=event_types, data=data)

        for handler in self.handlers_for(receiver):
            response = await handler.execute(context)
            if response is not None:
                return response

        return JSONResponse({"status": "ok"})
