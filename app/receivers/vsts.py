"""Visual Studio Team Services (Azure DevOps) service hook receiver.

Webhook URI: ``https://<host>/api/webhooks/incoming/vsts/{id}?code={code}``

The ``code`` query parameter must match the secret configured for ``id`` in
``VSTS_WEBHOOK_SECRET`` (e.g. ``secret0, id1=secret1``). The event type is read
from the ``eventType`` field of the JSON body.
"""

import json
from typing import Any

from starlette.requests import Request
from starlette.responses import Response

from app.errors import WebhookRejected
from app.receivers.base import BaseReceiver, ParsedEvent, ReceiverServices
from app.receivers.validation import ensure_post, ensure_valid_code, read_json_body

EVENT_TYPE_FIELD = "eventType"
NO_EVENT_TYPE = "no event type"


def extract_event_type(data: dict[str, Any]) -> str | None:
    """Return ``eventType`` as a string, or None when missing or null."""
    value = data.get(EVENT_TYPE_FIELD)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


class VstsReceiver(BaseReceiver):
    """Receiver for VSTS service hook notifications."""

    @property
    def name(self) -> str:
        return "vsts"

    async def receive(self, id: str, request: Request, services: ReceiverServices) -> Response:
        if id is None:
            raise ValueError("id must not be None")
        if request is None:
            raise ValueError("request must not be None")
        if services is None:
            raise ValueError("services must not be None")

        try:
            event = await self._validate(id, request, services)
        except WebhookRejected as rejection:
            return rejection.to_response()

        return await services.dispatch(event.event_types, event.data)

    async def _validate(self, id: str, request: Request, services: ReceiverServices) -> ParsedEvent:
        ensure_post(request, self.name)
        ensure_valid_code(request, id, services.secret_lookup, require_https=services.require_https)

        data = await read_json_body(request)

        event_type = extract_event_type(data)
        if event_type is None:
            services.logger.error(f"The '{self.name}' webhook body has no '{EVENT_TYPE_FIELD}' field")
            raise WebhookRejected(400, NO_EVENT_TYPE)

        return ParsedEvent(event_types=[event_type], data=data)
