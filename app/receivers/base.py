"""Base receiver interface for inbound webhooks."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from pydantic import BaseModel, ConfigDict
from starlette.requests import Request
from starlette.responses import Response

SecretLookup = Callable[[str], str | None]
Dispatch = Callable[[list[str], dict[str, Any]], Awaitable[Response]]


class ParsedEvent(BaseModel):
    """Validated event extracted from a webhook body."""
    model_config = ConfigDict(frozen=True)

    event_types: list[str]
    data: dict[str, Any]


@dataclass(frozen=True)
class ReceiverServices:
    """Collaborators a receiver needs to handle one request."""
    secret_lookup: SecretLookup
    dispatch: Dispatch
    logger: logging.Logger
    require_https: bool = True


class BaseReceiver(ABC):
    """Abstract base class for webhook receivers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return receiver name, used as the route segment."""
        pass

    @abstractmethod
    async def receive(self, id: str, request: Request, services: ReceiverServices) -> Response:
        """Validate the request and hand the resulting event to ``services.dispatch``."""
        pass
