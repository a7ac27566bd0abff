"""Font Providers
==============

Remote font catalogs and the manager that aggregates them.
"""

from .base import FontFamily, FontProvider, FontVariant
from .google import GoogleFontFamily, GoogleFontsProvider, GoogleFontVariant
from .http import HttpFetcher
from .manager import FontManager

__all__ = [
    "FontFamily",
    "FontManager",
    "FontProvider",
    "FontVariant",
    "GoogleFontFamily",
    "GoogleFontVariant",
    "GoogleFontsProvider",
    "HttpFetcher",
]
