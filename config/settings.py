"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Form destination. The prefilled link doubles as the template for
    # the submission endpoint and the baseline form answers.
    google_form_url: str | None = Field(
        None,
        description="Prefilled Google Form link used to derive the submission endpoint",
        validation_alias=AliasChoices("GOOGLE_FORM_URL", "VITE_GOOGLE_FORM_URL"),
    )

    # Catalog Configuration
    itunes_search_url: str = Field(
        default="https://itunes.apple.com/search", description="iTunes Search API endpoint"
    )
    search_limit: int = Field(default=25, description="Maximum tracks returned per search")
    user_agent: str = Field(
        default="djrequests/1.0 (+https://github.com/denhamparry/djrequests)",
        description="User-Agent sent to the catalog API",
    )

    # Playlist formatting
    display_timezone: str = Field(
        default="Europe/London", description="Timezone used to render request timestamps"
    )

    # Application Configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to run the server on")
    log_level: str = Field(default="INFO", description="Logging level")

    # Feature Flags
    enable_telemetry: bool = Field(default=True, description="Enable PostHog telemetry")

    # PostHog Configuration
    posthog_api_key: str | None = Field(None, description="PostHog API key for telemetry")
    posthog_host: str = Field(default="https://us.i.posthog.com", description="PostHog host URL")

    # Sentry Configuration
    sentry_dsn: str | None = Field(None, description="Sentry DSN for error tracking")

    # Application Metadata
    app_name: str = Field(default="DJ-Requests", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def resolved_google_form_url(self) -> str | None:
        """Get the form URL, treating an empty env var as unset."""
        if self.google_form_url is None or not self.google_form_url.strip():
            return None
        return self.google_form_url.strip()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
