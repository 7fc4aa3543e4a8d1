"""Application configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="REALESTATE_",
        extra="ignore",
    )

    # Database
    database_path: str = Field(
        default="data/realestate.db",
        description="SQLite database file, or ':memory:' for a throwaway store",
    )

    # Web server
    web_host: str = Field(default="0.0.0.0", description="Web server host")
    web_port: int = Field(default=8000, ge=1, le=65535, description="Web server port")
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:3001,https://localhost:3000",
        description="Comma-separated list of origins allowed by CORS",
    )

    # Development conveniences
    seed_on_startup: bool = Field(
        default=False,
        description="Insert demo owners, properties, images and traces when collections are empty",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON logs instead of the pretty console renderer",
    )

    def get_cors_origins(self) -> list[str]:
        """Parse cors_origins string into a list of origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]
