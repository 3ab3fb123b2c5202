"""Shared-secret configuration for webhook receivers.

Secrets are configured per receiver as a comma-separated list::

    secret0, id1=secret1, id2=secret2

An entry without an ``id=`` prefix is the default secret (id ``""``). Ids are
matched case-insensitively.
"""

from typing import Callable

from app.config import Settings

CODE_MIN_LENGTH = 32
CODE_MAX_LENGTH = 128


class SecretConfigError(ValueError):
    """Receiver secret configuration is malformed."""


def parse_secret_config(text: str) -> dict[str, str]:
    """Parse a secret configuration string into an ordered id -> secret map."""
    secrets: dict[str, str] = {}
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            continue

        if "=" in entry:
            key, secret = entry.split("=", 1)
            key = key.strip().lower()
            secret = secret.strip()
            if not key:
                raise SecretConfigError("Secret entry has an empty id before '='")
        else:
            key, secret = "", entry

        if not CODE_MIN_LENGTH <= len(secret) <= CODE_MAX_LENGTH:
            label = f"id '{key}'" if key else "default id"
            raise SecretConfigError(
                f"Secret for {label} must be between {CODE_MIN_LENGTH} "
                f"and {CODE_MAX_LENGTH} characters long"
            )
        if key in secrets:
            label = f"id '{key}'" if key else "default id"
            raise SecretConfigError(f"Duplicate secret for {label}")

        secrets[key] = secret
    return secrets


class SecretStore:
    """Read-only lookup of receiver secrets, built once at startup."""

    def __init__(self, configs: dict[str, dict[str, str]] | None = None):
        self._configs = {
            name.lower(): dict(secrets) for name, secrets in (configs or {}).items() if secrets
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "SecretStore":
        return cls({"vsts": parse_secret_config(settings.vsts_webhook_secret)})

    def get(self, receiver: str, id: str) -> str | None:
        """Return the secret for ``id``, or None when nothing is configured."""
        secrets = self._configs.get(receiver.lower())
        if not secrets:
            return None
        return secrets.get(id.lower())

    def is_configured(self, receiver: str) -> bool:
        return receiver.lower() in self._configs

    def ids(self, receiver: str) -> list[str]:
        return list(self._configs.get(receiver.lower(), {}))

    def lookup_for(self, receiver: str) -> Callable[[str], str | None]:
        """Bind the store to one receiver, giving the (id) -> secret callable receivers expect."""
        def lookup(id: str) -> str | None:
            return self.get(receiver, id)

        return lookup
