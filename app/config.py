"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="RecipeKeeper", description="Application name")
    app_version: str = Field(default="2.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Database settings - embedded SQLite file
    database_path: str = Field(
        default="recipe_keeper.db",
        description="SQLite database file path (':memory:' for a private in-memory store)",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")

    # Repository behaviour
    default_page_size: int = Field(
        default=100, ge=1, le=1000, description="Row limit used by list operations"
    )

    # Bootstrap
    seed_on_startup: bool = Field(
        default=True, description="Populate sample recipes when the store is empty"
    )
    slow_init_warning_ms: int = Field(
        default=2000, ge=0, description="Warn when initialization takes longer than this"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v


# Global settings instance
settings = Settings()
