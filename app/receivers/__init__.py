"""
Webhook Receivers

Inbound webhook receivers, keyed by the route segment they are served under.
"""

from .base import BaseReceiver, ParsedEvent, ReceiverServices
from .secrets import SecretStore
from .vsts import VstsReceiver

RECEIVERS: dict[str, BaseReceiver] = {r.name: r for r in (VstsReceiver(),)}


def get_receiver(name: str) -> BaseReceiver | None:
    return RECEIVERS.get(name.lower())


__all__ = [
    "BaseReceiver",
    "ParsedEvent",
    "ReceiverServices",
    "SecretStore",
    "VstsReceiver",
    "RECEIVERS",
    "get_receiver",
]
