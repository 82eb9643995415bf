import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues."""
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    # Use absolute path for SQLite (LOCAL DEVELOPMENT ONLY)
    db_path = Path(__file__).parent.parent.parent / "journey.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.info(f"Using default database path: {db_url}")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    admin_mode_storage_key: str = Field(
        default="aerial-journey-admin-mode",
        validation_alias="ADMIN_MODE_STORAGE_KEY",
        description="Client storage key holding the persisted admin mode",
    )
    premium_roles: str = Field(
        default="premium,trainer,admin",
        validation_alias="PREMIUM_ROLES",
        description="Comma-separated roles that carry premium access without a subscription",
    )
    label_locale: str = Field(
        default="en",
        validation_alias="LABEL_LOCALE",
        description="Locale for admin mode labels (en, pl)",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("label_locale")
    @classmethod
    def validate_label_locale(cls, value: str) -> str:
        """Validate that the label locale is one we ship labels for."""
        valid_locales = {"en", "pl"}
        lower_value = value.lower()
        if lower_value not in valid_locales:
            logger.warning(f"Invalid LABEL_LOCALE '{value}'. Valid locales are: {', '.join(sorted(valid_locales))}. Defaulting to en.")
            return "en"
        return lower_value

    def premium_role_set(self) -> frozenset[str]:
        """Parse the comma-separated premium roles."""
        return frozenset(role.strip().lower() for role in self.premium_roles.split(",") if role.strip())

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
