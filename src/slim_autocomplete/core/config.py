"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Path: src/slim_autocomplete/core/config.py -> core -> slim_autocomplete -> src -> project root
_this_file = Path(__file__).resolve()
_project_root = _this_file.parent.parent.parent.parent
_env_file = _project_root / ".env"
_default_app_config = str(_project_root / "config" / "app.yaml")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_env_file) if _env_file.exists() else ".env",
        env_file_encoding="utf-8",
        env_prefix="SLIM_AUTOCOMPLETE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Slim Autocomplete"
    app_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["text", "json"] = "text"

    # Central YAML configuration
    app_config_path: str = _default_app_config

    # Wiki page tree (FitNesseRoot)
    pages_root: str = "FitNesseRoot"

    # Server
    server_host: str = "127.0.0.1"
    server_port: int = 8085

    # CORS (stored as comma-separated string, accessed via cors_origins_list property)
    cors_origins: str = "http://localhost:8080"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        return v.upper() if isinstance(v, str) else v

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def pages_root_path(self) -> Path:
        """Resolved location of the wiki page tree."""
        return Path(self.pages_root).expanduser().resolve()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
