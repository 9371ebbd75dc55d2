import logging

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=True, extra="ignore"
    )

    PROJECT_NAME: str = "Zerodha Mock MCP Server"
    SERVER_NAME: str = "zerodha-mock"
    SERVER_VERSION: str = "1.0.0"
    PROTOCOL_VERSION: str = "2024-11-05"

    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_DIR: str | None = None  # overrides the platform default

    # HTTP transport
    HTTP_HOST: str = "0.0.0.0"
    HTTP_PORT: int = 3000

    # CORS - all origins by default
    CORS_ORIGINS: str = "*"
    SESSION_HEADER: str = "x-session-id"

    # Accounts
    DEFAULT_SESSION_ID: str = "demo-session"
    STARTING_BALANCE: float = 100000.0

    # Market simulation
    MARKET_REFRESH_INTERVAL_SECONDS: float = 5.0
    MARKET_RANDOM_SEED: int | None = None
    SIMULATION_MODE: str = "market"  # "market" or "simple"

    def get_cors_origins(self) -> list[str]:
        """Convert CORS origins string to list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def enforce_limits(self) -> bool:
        """Whether orders are checked against funds and holdings."""
        return self.SIMULATION_MODE.lower() != "simple"


settings = Settings()
