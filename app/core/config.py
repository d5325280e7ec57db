from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Environment mode: dev or prod
    ENV: Literal["dev", "prod"] = "dev"

    # Database
    DATABASE_URL: str
    DB_STATEMENT_TIMEOUT_MS: int = 30_000  # 0 disables the server-side timeout
    RUN_MIGRATIONS: bool = False

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    SLACK_WEBHOOK_URL: str | None = None

    # Publication model
    SUCCESS_STAGE: str = "Success"
    DOI_RESOLVER_BASE: str = "http://dx.doi.org/"

    # Search
    TEXT_SEARCH_CONFIG: str = "english"
    SEARCH_BATCH_SIZE: int = 100

    # People directory used to resolve creator identifiers
    PEOPLE_SERVICE_URL: str | None = None
    PEOPLE_SERVICE_TIMEOUT_SECONDS: float = 5.0

    # Docs Configuration
    DOCS_ENABLED: bool | None = None  # Override docs setting (None = auto based on ENV)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # ignore unrelated keys in local .env
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENV == "prod"

    @property
    def is_development(self) -> bool:
        return self.ENV == "dev"

    @property
    def debug_enabled(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.is_development

    @property
    def effective_log_level(self) -> str:
        """Log level after the production floor is applied."""
        level = (self.LOG_LEVEL or "INFO").strip().upper()
        if self.is_production and level in {"TRACE", "DEBUG"}:
            return "INFO"
        return level

    @property
    def docs_enabled(self) -> bool:
        if self.DOCS_ENABLED is not None:
            return self.DOCS_ENABLED
        return self.is_development


settings = Settings()
