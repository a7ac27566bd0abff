"""Font Catalog Browser
====================

Browse remote font catalogs, filter, sort and page through the results,
preview them as HTML samples, keep a selection across searches and download
the selected font files.
"""

__version__ = "0.1.0"
__author__ = "Font Catalog Team"
__copyright__ = "Copyright (c) 2017-2026 Font Catalog Team"

from .core.config import AppConfig, BrowserConfig, ProviderConfig
from .core.exceptions import FontCatalogError, FontLookupError, NetworkError, ParseError
from .core.models import FontCategory, FontSort, FontStyle, FontWeight, SelectedFont
from .fonts import FontManager, GoogleFontsProvider

__all__ = [
    "AppConfig",
    "BrowserConfig",
    "FontCatalogError",
    "FontCategory",
    "FontLookupError",
    "FontManager",
    "FontSort",
    "FontStyle",
    "FontWeight",
    "GoogleFontsProvider",
    "NetworkError",
    "ParseError",
    "ProviderConfig",
    "SelectedFont",
]
