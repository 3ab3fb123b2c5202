from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from app.config import settings
from app.receivers import RECEIVERS, SecretStore


router = APIRouter(tags=["health"])

_startup_time = datetime.now(timezone.utc)

VERSION = "0.1.0"


class EndpointInfo(BaseModel):
    path: str
    description: str
    provider: str | None = None


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float
    endpoints: list[EndpointInfo]


class ReceiverStatus(BaseModel):
    configured: bool
    status: str
    ids: int = 0
    https_required: bool = True


ENDPOINTS = [
    EndpointInfo(path="/health", description="Gateway status and API directory"),
    EndpointInfo(path="/health/receivers", description="Webhook receiver configuration status"),
    EndpointInfo(
        path="/api/webhooks/incoming/vsts/{id}",
        description="Inbound service hooks",
        provider="Visual Studio Team Services",
    ),
]


def _check_receiver(store: SecretStore, name: str) -> ReceiverStatus:
    if not store.is_configured(name):
        return ReceiverStatus(
            configured=False,
            status="secret not configured",
            https_required=not settings.disable_https_check,
        )
    return ReceiverStatus(
        configured=True,
        status="ok",
        ids=len(store.ids(name)),
        https_required=not settings.disable_https_check,
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    uptime = (datetime.now(timezone.utc) - _startup_time).total_seconds()

    return HealthResponse(
        status="ok",
        version=VERSION,
        uptime_seconds=round(uptime, 2),
        endpoints=ENDPOINTS,
    )


@router.get("/health/receivers", response_model=dict[str, ReceiverStatus])
async def get_receivers(request: Request):
    store: SecretStore = request.app.state.secret_store
    return {name: _check_receiver(store, name) for name in RECEIVERS}
