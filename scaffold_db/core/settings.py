# ==============================================================================
# SETTINGS CONFIGURATION - Environment Management
# ==============================================================================
# Pydantic Settings for type-safe environment variable management
# Selects the active storage backend and carries its connection options
# ==============================================================================

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseProvider(str, Enum):
    """
    Supported storage backends.

    Attributes:
        SUPABASE: Hosted Postgres reached through the Supabase REST client
        SQLITE: Embedded file-backed SQLite engine
    """
    SUPABASE = "supabase"
    SQLITE = "sqlite"


class Environment(str, Enum):
    """Application environment types."""
    DEVELOPMENT = "development"
    TEST = "test"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """
    Application Settings Configuration.

    Manages all environment variables with type validation and defaults.
    Uses Pydantic BaseSettings for automatic .env file loading and
    environment variable parsing.

    Example:
        >>> from scaffold_db.core.settings import settings
        >>> settings.DATABASE_PROVIDER
        <DatabaseProvider.SQLITE: 'sqlite'>
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # --------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # --------------------------------------------------------------------------
    APP_NAME: str = Field(
        default="api-scaffold",
        description="Application display name"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application semantic version"
    )
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (SQL echo, verbose logs)"
    )
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Current deployment environment"
    )

    # --------------------------------------------------------------------------
    # DATABASE PROVIDER SELECTION
    # --------------------------------------------------------------------------
    DATABASE_PROVIDER: DatabaseProvider = Field(
        default=DatabaseProvider.SQLITE,
        description="Active storage backend (supabase, sqlite)"
    )

    # --------------------------------------------------------------------------
    # SQLITE CONFIGURATION
    # --------------------------------------------------------------------------
    SQLITE_PATH: str = Field(
        default="./data/app.db",
        description="SQLite database file path (':memory:' for in-memory)"
    )
    SQLITE_ENABLE_WAL: bool = Field(
        default=True,
        description="Use write-ahead logging journal mode"
    )
    SQLITE_ENABLE_FOREIGN_KEYS: bool = Field(
        default=True,
        description="Enforce foreign key constraints"
    )
    SQLITE_TIMEOUT: int = Field(
        default=5000,
        ge=0,
        description="Busy timeout in milliseconds"
    )

    # --------------------------------------------------------------------------
    # SUPABASE CONFIGURATION
    # --------------------------------------------------------------------------
    SUPABASE_URL: str = Field(
        default="",
        description="Supabase project URL"
    )
    SUPABASE_ANON_KEY: str = Field(
        default="",
        description="Supabase anonymous (public) key"
    )
    SUPABASE_SERVICE_KEY: str = Field(
        default="",
        description="Supabase service role key (preferred over anon key)"
    )
    SUPABASE_CLIENT_INFO: str = Field(
        default="api-scaffold",
        description="Value of the X-Client-Info header sent with every request"
    )
    SUPABASE_TIMEOUT: int = Field(
        default=10,
        ge=1,
        le=300,
        description="PostgREST request timeout in seconds"
    )

    # --------------------------------------------------------------------------
    # PAGINATION DEFAULTS
    # --------------------------------------------------------------------------
    DEFAULT_PAGE_SIZE: int = Field(
        default=10,
        ge=1,
        description="Page size used when pagination is omitted"
    )

    # --------------------------------------------------------------------------
    # LOGGING CONFIGURATION
    # --------------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_FORMAT: str = Field(
        default="text",
        description="Log format (json, text)"
    )

    # --------------------------------------------------------------------------
    # COMPUTED PROPERTIES
    # --------------------------------------------------------------------------
    @computed_field
    @property
    def sqlite_async_url(self) -> str:
        """
        Construct SQLite async connection URL.

        Returns:
            Async SQLite connection string with aiosqlite driver
        """
        if self.SQLITE_PATH == ":memory:":
            return "sqlite+aiosqlite://"
        return f"sqlite+aiosqlite:///{self.SQLITE_PATH}"

    @computed_field
    @property
    def supabase_key(self) -> str:
        """Service key when configured, otherwise the anon key."""
        return self.SUPABASE_SERVICE_KEY or self.SUPABASE_ANON_KEY

    @computed_field
    @property
    def is_supabase_configured(self) -> bool:
        """Check that both a URL and a key are present and not placeholders."""
        key = self.supabase_key
        if not self.SUPABASE_URL or not key:
            return False
        return "your_supabase" not in self.SUPABASE_URL and "your_supabase" not in key

    @computed_field
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == Environment.PRODUCTION

    # --------------------------------------------------------------------------
    # VALIDATORS
    # --------------------------------------------------------------------------
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid LOG_LEVEL: {v}")
        return level

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in {"json", "text"}:
            raise ValueError(f"Invalid LOG_FORMAT: {v}")
        return fmt


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Uses lru_cache to ensure settings are only loaded once,
    providing a singleton-like behavior for the settings object.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Module-level settings instance for convenient imports
settings = get_settings()
