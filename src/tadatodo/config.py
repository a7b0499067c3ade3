"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TADA_TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # TODO file settings
    default_file_name: str = "TODO.md"

    # Manifest settings
    json_config_name: str = "tada-todo.json"
    binary_config_name: str = "tada-todo.b"  # msgpack encoded
    config_search_depth: int = 10  # parent directories walked when looking for a manifest

    # Scanner settings
    scan_max_depth: int = 10
    scan_exclude_dirs: list[str] = ["node_modules", ".git", "dist", "build", ".next"]

    # Logging
    log_level: str = "WARNING"


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()
