"""Configuration management for the font catalog browser."""

import os
from pathlib import Path

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import (
    ConfigFileNotFoundError,
    ConfigLoadError,
    ConfigurationError,
    EmptyConfigFileError,
    InvalidYamlError,
)
from .models import FontSort


class ProviderConfig(BaseSettings):
    """Google Fonts developer API settings."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_FONTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field("", description="Google Fonts developer API key")
    base_url: str = Field(
        "https://www.googleapis.com/webfonts/v1/webfonts",
        description="Catalog endpoint",
    )
    timeout_seconds: float = Field(30.0, gt=0.0, description="Per request timeout")
    max_retries: int = Field(3, ge=1, le=10, description="Fetch attempts before giving up")
    retry_backoff_seconds: float = Field(1.0, ge=0.0, description="Base backoff delay")
    verify_ssl: bool = Field(True, description="Verify TLS certificates")
    user_agent: str = Field("fontcatalog/0.1.0", description="HTTP User-Agent header")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError("base_url must start with https:// or http://")
        return v.rstrip("?")


class BrowserConfig(BaseSettings):
    """Search session and presentation settings."""

    model_config = SettingsConfigDict(
        env_prefix="BROWSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    page_size: int = Field(20, ge=1, le=500, description="Families shown per page")
    search_delay: float = Field(0.25, ge=0.0, description="Search debounce in seconds")
    sample_delay: float = Field(0.01, ge=0.0, description="Sample/size debounce in seconds")
    splash_delay: float = Field(3.0, ge=0.0, description="Delay before the first search")
    status_clear_delay: float = Field(3.0, ge=0.0, description="Transient status lifetime")
    default_sort: FontSort = Field(FontSort.POPULARITY, description="Initial sort order")
    font_size: str = Field("12pt", description="Initial sample size")
    sample_text: str = Field("", description="Custom sample text, empty for a pangram")

    @field_validator("font_size")
    @classmethod
    def validate_font_size(cls, v: str) -> str:
        if not v.endswith("pt") or not v[:-2].strip().replace(".", "", 1).isdigit():
            raise ValueError("font_size must look like '12pt'")
        return v


class AppConfig(BaseSettings):
    """Main application configuration that loads from multiple sources."""

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field("INFO", description="Application log level")
    download_dir: Path = Field(Path("./fonts"), description="Default download directory")

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"invalid log level: {v}")
        return level

    def model_post_init(self, __context) -> None:
        """Reload nested configs so their own env prefixes are honoured."""
        env_keys = [key.upper() for key in os.environ]
        if "provider" not in self.model_fields_set and any(
            key.startswith("GOOGLE_FONTS_") for key in env_keys
        ):
            self.provider = ProviderConfig()
        if "browser" not in self.model_fields_set and any(
            key.startswith("BROWSER_") for key in env_keys
        ):
            self.browser = BrowserConfig()

    @classmethod
    def load_from_env(cls, env_file: str | Path | None = ".env") -> "AppConfig":
        """Load configuration from environment variables and .env file."""
        if env_file:
            env_file = Path(env_file)
            if env_file.exists():
                return cls(_env_file=env_file)
        return cls()

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from a YAML file."""
        return load_config_from_yaml(config_path, cls)


def load_config_from_yaml(config_path: str | Path, config_class: type) -> BaseSettings:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigFileNotFoundError(str(config_path))

    try:
        with config_path.open() as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidYamlError(str(config_path), str(e)) from e

    if config_data is None:
        raise EmptyConfigFileError(str(config_path))

    try:
        return config_class(_env_file=None, **config_data)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigLoadError(str(e)) from e
