"""
Application configuration loaded from environment variables.

Uses Pydantic Settings to:
1. Read from .env file automatically
2. Validate values at startup
3. Provide type-safe access throughout the app

Usage:
    from app.config import settings
    print(settings.REPORT_BRAND_NAME)

Note: A validator prefers .env values over empty shell environment
variables, so an exported-but-empty REPORT_FOOTER_TEXT="" doesn't shadow
the real value in .env.

Nothing here is read by the layout engine (app/layout) directly. The
report service turns these values into PageDecoration / CardGeometry
parameters, which keeps the engine free of global state.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All application configuration in one place."""

    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file
        env_file_encoding="utf-8",
        case_sensitive=True,     # ENV_VAR must match exactly
    )

    @model_validator(mode="before")
    @classmethod
    def prefer_dotenv_over_empty_env(cls, data):
        """If an env var is empty but .env has a value, use the .env value.

        Pydantic Settings prioritizes real env vars over .env file values,
        even when the env var is an empty string. Fill those blanks from
        .env instead.
        """
        from dotenv import dotenv_values

        dotenv_vals = dotenv_values(".env")
        for key, dotenv_value in dotenv_vals.items():
            # If the field is missing or empty, use the .env value
            if dotenv_value and (key not in data or not data.get(key)):
                data[key] = dotenv_value
        return data

    # --- Application ---
    APP_ENV: str = "development"
    DEBUG: bool = True
    CORS_ORIGINS: str = "http://localhost:3000"

    # --- Reports ---
    REPORT_BRAND_NAME: str = "LinxIQ Skill Gap Analysis Report"
    REPORT_FOOTER_TEXT: str = "LinxIQ Assessment Platform - Confidential Report"
    REPORT_FONT: str = "Helvetica"
    REPORT_BOLD_FONT: str = "Helvetica-Bold"
    REPORT_FILE_PREFIX: str = "Report"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]


# Singleton instance, import this everywhere
settings = Settings()
