"""Custom exceptions for the font catalog browser."""

from typing import Any


class FontCatalogError(Exception):
    """Base exception for all font catalog errors."""

    def __init__(self, message: str, details: Any | None = None):
        super().__init__(message)
        self.details = details


class NetworkError(FontCatalogError):
    """Exception raised when a catalog or font file fetch fails."""


class ParseError(FontCatalogError):
    """Exception raised for malformed provider responses."""


class FontLookupError(FontCatalogError, LookupError):
    """Exception raised for unknown families, variants or font ids."""


class FontWriteError(FontCatalogError, OSError):
    """Exception raised when a downloaded font cannot be written."""


class ResourceError(FontCatalogError):
    """Exception raised when a bundled resource cannot be found."""


class ConfigurationError(FontCatalogError):
    """Exception raised for configuration errors."""


# Specific exception classes for TRY003 compliance
class FetchFailedError(NetworkError):
    """Exception raised when a URL cannot be fetched."""

    def __init__(self, url: str, error: str):
        super().__init__(f"Failed to fetch {url}: {error}", details={"url": url})


class FetchFailedAfterRetriesError(NetworkError):
    """Exception raised when every fetch attempt failed."""

    def __init__(self, url: str, attempts: int):
        super().__init__(f"Fetch failed after {attempts} attempts: {url}", details={"url": url})


class InvalidJsonError(ParseError):
    """Exception raised when a response body is not valid JSON."""

    def __init__(self, url: str, error: str):
        super().__init__(f"Invalid JSON from {url}: {error}", details={"url": url})


class UnexpectedDocumentError(ParseError):
    """Exception raised when a response is JSON but not a catalog document."""

    def __init__(self, kind: str):
        super().__init__(f"Expected a JSON object, got {kind}")


class MalformedItemError(ParseError):
    """Exception raised when a catalog item is missing a required field."""

    def __init__(self, field: str):
        super().__init__(f"Catalog item has missing or invalid field: {field}")


class UnknownWeightError(ParseError):
    """Exception raised for variant ids with an unrecognized weight token."""

    def __init__(self, token: str):
        super().__init__(f"Unknown font weight token: {token!r}")


class UnknownFamilyError(FontLookupError):
    """Exception raised when a family name is not in any catalog."""

    def __init__(self, name: str):
        super().__init__(f"Unable to find font family: {name}")


class UnknownVariantError(FontLookupError):
    """Exception raised when a variant id is not part of a family."""

    def __init__(self, family: str, variant_id: str | None):
        super().__init__(f"Unable to find variant {variant_id!r} in family {family}")


class MalformedFontIdError(FontLookupError):
    """Exception raised for font ids not shaped like 'family|variant'."""

    def __init__(self, font_id: str):
        super().__init__(f"Malformed font id: {font_id!r}")


class DestinationWriteError(FontWriteError):
    """Exception raised when writing a font file fails."""

    def __init__(self, path: str, error: str):
        super().__init__(f"Failed to write {path}: {error}")


class TemplateNotFoundError(ResourceError):
    """Exception raised when a template resource does not exist."""

    def __init__(self, key: str):
        super().__init__(f"Error finding resource: {key}")


class MissingApiKeyError(ConfigurationError):
    """Exception raised when no provider API key is configured."""

    def __init__(self):
        super().__init__("Google Fonts API key is not configured (set GOOGLE_FONTS_API_KEY)")


class ConfigFileNotFoundError(ConfigurationError):
    """Exception raised when configuration file is not found."""

    def __init__(self, config_path: str):
        super().__init__(f"Configuration file not found: {config_path}")


class EmptyConfigFileError(ConfigurationError):
    """Exception raised when configuration file is empty."""

    def __init__(self, config_path: str):
        super().__init__(f"Empty configuration file: {config_path}")


class InvalidYamlError(ConfigurationError):
    """Exception raised for invalid YAML content."""

    def __init__(self, config_path: str, error: str):
        super().__init__(f"Invalid YAML in {config_path}: {error}")


class ConfigLoadError(ConfigurationError):
    """Exception raised when configuration loading fails."""

    def __init__(self, error: str):
        super().__init__(f"Failed to load configuration: {error}")


class ExecutorShutdownError(FontCatalogError):
    """Exception raised when work is submitted to a stopped executor."""

    def __init__(self, name: str):
        super().__init__(f"Executor {name} has been shut down")
