from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Pydantic Settings automatically reads env vars matching field names (case-insensitive).
    In development, it also reads from .env file if present.
    """

    # Included as "service" in every log line
    app_name: str = "apierror"

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    # json for production log shipping, console for local development
    log_format: Literal["json", "console"] = Field(default="json", alias="LOG_FORMAT")

    # Page size bounds for GET /errors
    catalog_default_limit: int = 20
    catalog_max_limit: int = 100

    model_config = SettingsConfigDict(
        env_file=".env",  # Load from .env in development
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
        populate_by_name=True,
    )


settings = Settings()
