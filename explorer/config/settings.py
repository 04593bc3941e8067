"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str
    database_echo: bool = False

    # Blockchain RPC (WebSocket endpoints, one per network flavor)
    logistics_ws_url: str | None = None
    token_ws_url: str | None = None
    poa_chain: bool = Field(
        default=True,
        description="Inject the extra-data PoA middleware (private networks)",
    )

    # Root contracts and genesis blocks (CLI arguments override these)
    logistics_service_address: str | None = None
    logistics_start_block: int | None = Field(default=None, ge=0)
    token_address: str | None = None
    token_start_block: int | None = Field(default=None, ge=0)

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("logistics_service_address", "token_address")
    @classmethod
    def validate_eth_address(cls, v: str | None) -> str | None:
        """Validate Ethereum address format."""
        if v is None:
            return v
        if not v.startswith("0x") or len(v) != 42:
            raise ValueError(
                f"Invalid Ethereum address: {v}. "
                "Must start with 0x and be 42 characters long."
            )
        try:
            int(v[2:], 16)
        except ValueError as exc:
            raise ValueError(f"Invalid Ethereum address format: {v}") from exc
        return v.lower()

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(
            ("postgresql://", "postgresql+asyncpg://", "sqlite+aiosqlite://")
        ):
            raise ValueError(
                "DATABASE_URL must start with postgresql+asyncpg:// "
                "(or sqlite+aiosqlite:// for local runs)"
            )
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level name."""
        level = v.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    def ws_url_for(self, flavor: str) -> str | None:
        """Return the WebSocket RPC endpoint configured for a flavor."""
        if flavor == "token":
            return self.token_ws_url
        return self.logistics_ws_url


def get_settings() -> Settings:
    """Load settings from the environment (and .env file)."""
    return Settings()
