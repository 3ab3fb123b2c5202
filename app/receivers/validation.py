"""Validation steps shared by webhook receivers.

Each step raises WebhookRejected on failure. Receivers compose them in order
and convert the rejection into a response.
"""

import hmac
import json
import logging
from typing import Any

from starlette.requests import Request

from app.errors import WebhookRejected
from app.receivers.base import SecretLookup

logger = logging.getLogger(__name__)
security_logger = logging.getLogger("app.receivers.security")

CODE_QUERY_PARAMETER = "code"

NO_HTTPS = "WebHook receiver requires HTTPS"
NO_CODE = "missing code parameter"
BAD_CODE = "invalid code parameter"
BAD_JSON = "invalid JSON"


def ensure_post(request: Request, receiver: str) -> None:
    if request.method != "POST":
        raise WebhookRejected(
            405,
            f"The HTTP '{request.method}' method is not supported by the '{receiver}' WebHook receiver",
            headers={"Allow": "POST"},
        )


def secret_equal(supplied: str, secret: str) -> bool:
    """Constant-time comparison of two secrets."""
    return hmac.compare_digest(supplied.encode("utf-8"), secret.encode("utf-8"))


def ensure_secure_connection(request: Request) -> None:
    if request.url.scheme != "https":
        security_logger.warning(f"Rejected webhook over '{request.url.scheme}' from {_client_host(request)}")
        raise WebhookRejected(400, NO_HTTPS)


def ensure_valid_code(
    request: Request, id: str, secret_lookup: SecretLookup, require_https: bool = True
) -> None:
    """Check transport and the ``code`` query parameter against the secret for ``id``.

    Unknown ids and wrong codes produce the same rejection so callers cannot
    probe which ids are configured.
    """
    if require_https:
        ensure_secure_connection(request)

    code = request.query_params.get(CODE_QUERY_PARAMETER)
    if not code:
        security_logger.warning(f"Rejected webhook without code parameter from {_client_host(request)}")
        raise WebhookRejected(400, NO_CODE)

    secret = secret_lookup(id)
    if secret is None:
        security_logger.warning(f"Rejected webhook for unconfigured id '{id}'")
        raise WebhookRejected(400, BAD_CODE)

    if not secret_equal(code, secret):
        security_logger.warning(f"Rejected webhook with invalid code for id '{id}'")
        raise WebhookRejected(400, BAD_CODE)


async def read_json_body(request: Request) -> dict[str, Any]:
    """Read the whole body and parse it as a JSON object."""
    body = await request.body()
    if not body:
        logger.debug("Webhook body is empty")
        raise WebhookRejected(400, BAD_JSON)

    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        logger.debug(f"Webhook body is not valid JSON: {e}")
        raise WebhookRejected(400, BAD_JSON) from e

    if not isinstance(data, dict):
        logger.debug(f"Webhook body is a JSON {type(data).__name__}, expected an object")
        raise WebhookRejected(400, BAD_JSON)
    return data


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"
