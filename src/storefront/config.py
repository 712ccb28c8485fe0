"""Runtime settings read from the environment.

Protean's own configuration (providers, brokers, event store) is resolved by
the framework from ``PROTEAN_ENV`` and an optional ``domain.toml``. The values
here cover the storefront's collaborators: token signing, the asset store and
CORS.
"""

import os
from dataclasses import dataclass, field


def _csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    jwt_secret: str = "storefront-dev-secret"
    jwt_algorithm: str = "HS256"
    jwt_ttl_seconds: int = 24 * 60 * 60
    bcrypt_rounds: int = 12
    asset_store: str = "fake"
    asset_store_url: str | None = None
    asset_store_api_key: str | None = None
    asset_store_timeout: float = 10.0
    asset_upload_workers: int = 4
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    """Build settings from environment variables, falling back to development defaults."""
    defaults = Settings()
    return Settings(
        jwt_secret=os.getenv("JWT_SECRET", defaults.jwt_secret),
        jwt_ttl_seconds=int(os.getenv("JWT_TTL_SECONDS", defaults.jwt_ttl_seconds)),
        bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", defaults.bcrypt_rounds)),
        asset_store=os.getenv("ASSET_STORE", defaults.asset_store).lower(),
        asset_store_url=os.getenv("ASSET_STORE_URL"),
        asset_store_api_key=os.getenv("ASSET_STORE_API_KEY"),
        asset_store_timeout=float(os.getenv("ASSET_STORE_TIMEOUT", defaults.asset_store_timeout)),
        asset_upload_workers=int(os.getenv("ASSET_UPLOAD_WORKERS", defaults.asset_upload_workers)),
        allowed_origins=_csv(os.getenv("ALLOWED_ORIGINS")) or defaults.allowed_origins,
    )


settings = load_settings()
