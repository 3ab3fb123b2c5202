"""Application configuration via pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Webhook receivers
    # Format: "secret0, id1=secret1, id2=secret2" (each secret 32-128 chars)
    vsts_webhook_secret: str = ""
    # Development only: accept plain http requests
    disable_https_check: bool = False
    webhook_rate_limit: str = "120/minute"


settings = Settings()
