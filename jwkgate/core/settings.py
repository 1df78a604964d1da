"""Application settings loaded from environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict

JWKS_REFRESH_INTERVAL_DEFAULT = 120
JWKS_STORE_NAME_DEFAULT = "Auth0"
DB_POOL_SIZE_DEFAULT = 5
DB_MAX_OVERFLOW_DEFAULT = 10


class DatabaseSettings(BaseSettings):
    """Durable key-value store connection settings."""

    model_config = SettingsConfigDict(env_prefix="AUTH_DB_")

    url: str = "sqlite+aiosqlite:///./jwkgate.db"
    pool_size: int = DB_POOL_SIZE_DEFAULT
    max_overflow: int = DB_MAX_OVERFLOW_DEFAULT

    @property
    def is_sqlite(self) -> bool:
        """SQLite engines do not accept pool sizing arguments."""
        return self.url.startswith("sqlite")


class VerifierSettings(BaseSettings):
    """Token verification settings."""

    model_config = SettingsConfigDict(env_prefix="AUTH_")

    jwks_url: str = "https://example.auth0.com/.well-known/jwks.json"
    jwks_store_name: str = JWKS_STORE_NAME_DEFAULT
    jwks_refresh_interval: float = JWKS_REFRESH_INTERVAL_DEFAULT
    jwks_allow_empty: bool = True
    user_metadata_key: str = "https://example.com/user_metadata"
    log_level: str = "info"
