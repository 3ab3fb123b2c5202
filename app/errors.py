"""Rejection type shared by the webhook receivers."""

from fastapi.responses import JSONResponse


class WebhookRejected(Exception):
    """A request failed receiver validation.

    Carries the status code and the client-visible reason. Receivers catch it
    and turn it into a response, so it never leaves a receiver.
    """

    def __init__(self, status_code: int, detail: str, headers: dict[str, str] | None = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.headers = headers

    def to_response(self) -> JSONResponse:
        """Render in FastAPI's error shape: {"detail": "..."}."""
        return JSONResponse(
            status_code=self.status_code,
            content={"detail": self.detail},
            headers=self.headers,
        )
