from functools import lru_cache
from urllib.parse import urlparse

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Delivery Pipeline"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool = True

    # Security
    log_user_emails: bool = False  # Set to False in production for GDPR compliance
    allowed_app_url_domains: list[str] = ["localhost", "127.0.0.1"]  # Allowed domains for APP_URL

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Redis (project records, push registry, email log)
    redis_url: str | None = None  # e.g., "redis://localhost:6379/0"
    redis_pool_size: int = 10
    redis_retry_seconds: float = 1.0  # Wait between reconnect attempts after a failure

    # Email (Resend)
    resend_api_key: str | None = None  # If not set, attempts are audited but not sent
    email_from: str = "noreply@example.com"
    email_send_timeout_seconds: int = 10
    developer_email: str = "developer@example.com"  # Recipient for change requests and client messages
    app_url: str = "http://localhost:3000"  # Frontend URL for links in emails and push payloads

    # Web push (VAPID)
    vapid_public_key: str | None = None
    vapid_private_key: str | None = None  # If not set, push is skipped
    vapid_subject: str = "mailto:developer@example.com"
    push_ttl_seconds: int = 86400
    push_send_timeout_seconds: int = 10

    # Projects
    default_revisions_total: int = 5

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v

    @field_validator("app_url")
    @classmethod
    def validate_app_url(cls, v: str, info: ValidationInfo) -> str:
        """Validate APP_URL is from allowed domain list so emailed links stay on our site."""
        allowed = info.data.get("allowed_app_url_domains", ["localhost", "127.0.0.1"])
        parsed = urlparse(v)
        hostname = parsed.hostname or ""

        if not any(hostname == domain or hostname.endswith(f".{domain}") for domain in allowed):
            raise ValueError(
                f"APP_URL domain '{hostname}' not in allowed list. "
                f"Add it to ALLOWED_APP_URL_DOMAINS or use: {allowed}"
            )
        return v

    @field_validator("default_revisions_total")
    @classmethod
    def validate_default_revisions(cls, v: int) -> int:
        if v < 0:
            raise ValueError("DEFAULT_REVISIONS_TOTAL cannot be negative")
        return v

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_public_key and self.vapid_private_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
