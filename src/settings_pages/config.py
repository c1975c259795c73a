"""Server configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


PROJECT_ROOT = Path(__file__).resolve().parents[2]


def get_default_database_url() -> str:
    """Return the default database URL anchored to the project root.

    Returns:
        The sqlite connection URL pointing at settings.db in the project root.
    """
    database_path = PROJECT_ROOT / "settings.db"
    return f"sqlite:///{database_path.as_posix()}"


class Settings(BaseSettings):
    """Settings-pages server configuration.

    Loads from ``SETTINGS_PAGES_*`` environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SETTINGS_PAGES_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    api_prefix: str = Field(
        default="/pos/v1",
        description="Path prefix for the REST routes.",
    )

    # Security
    secret_key: str = Field(
        default="CHANGE-ME-IN-PRODUCTION",
        description="Secret key for JWT signing",
    )
    access_token_expire_minutes: int = 60

    # Storage
    storage_backend: Literal["memory", "yaml", "sql"] = "yaml"
    storage_path: Path = Field(
        default_factory=lambda: PROJECT_ROOT / "data" / "settings.yaml",
        description="YAML file used by the yaml storage backend.",
    )
    database_url: str = Field(default_factory=get_default_database_url)
    option_prefix: str = Field(
        default="settings_",
        description="Prefix of the key under which each page's settings are stored.",
    )
    media_manifest: Path = Field(
        default_factory=lambda: PROJECT_ROOT / "data" / "media.yaml",
        description="YAML list of attachments known to image fields.",
    )

    # Demo content
    load_demo_pages: bool = False

    # Logging
    log_dir: Path = Field(
        default_factory=lambda: PROJECT_ROOT / "logs",
        description="Directory to store log files.",
    )
    log_max_bytes: int = Field(
        default=1_048_576,
        description="Maximum log file size before rotation (in bytes).",
    )
    log_retention_days: int = Field(
        default=5,
        ge=0,
        description="Number of days to retain rotated log files.",
    )
    uvicorn_log_level: str = Field(
        default="info",
        description="Log level for uvicorn loggers (e.g., info, warning, error).",
    )

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_api_prefix(cls, value: str) -> str:
        """Ensure the prefix starts with a slash and has no trailing slash."""
        value = "/" + str(value).strip("/")
        return "" if value == "/" else value

    @field_validator("database_url", mode="before")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        """Anchor relative sqlite paths to the project root.

        Args:
            value: The configured database URL.

        Returns:
            A database URL with a root-relative sqlite path resolved.
        """
        sqlite_prefix = "sqlite:///"
        absolute_prefix = "sqlite:////"
        if (
            value.startswith(sqlite_prefix)
            and not value.startswith(absolute_prefix)
            and value != "sqlite:///:memory:"
        ):
            relative_path = value.split(sqlite_prefix, 1)[1]
            database_path = (PROJECT_ROOT / relative_path).resolve()
            return f"{sqlite_prefix}{database_path.as_posix()}"
        return value

    @field_validator("log_dir", "storage_path", "media_manifest", mode="before")
    @classmethod
    def normalize_path(cls, value: Union[str, Path]) -> Path:
        """Resolve relative paths against the project root.

        Args:
            value: The configured path.

        Returns:
            An absolute path.
        """
        path = value if isinstance(value, Path) else Path(value)
        if not path.is_absolute():
            return (PROJECT_ROOT / path).resolve()
        return path


def get_settings() -> Settings:
    """Load configuration from the environment."""
    return Settings()
