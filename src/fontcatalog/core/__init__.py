"""Core components for the font catalog browser."""

from .config import AppConfig, BrowserConfig, ProviderConfig
from .exceptions import (
    ConfigurationError,
    FontCatalogError,
    FontLookupError,
    FontWriteError,
    NetworkError,
    ParseError,
    ResourceError,
)
from .models import (
    FontCategory,
    FontSort,
    FontStyle,
    FontWeight,
    SelectedFont,
    describe_variant,
)

__all__ = [
    "AppConfig",
    "BrowserConfig",
    "ConfigurationError",
    "FontCatalogError",
    "FontCategory",
    "FontLookupError",
    "FontSort",
    "FontStyle",
    "FontWeight",
    "FontWriteError",
    "NetworkError",
    "ParseError",
    "ProviderConfig",
    "ResourceError",
    "SelectedFont",
    "describe_variant",
]
