"""
Google Fonts Provider
=====================

Provider for the Google Fonts developer API. The catalog is fetched once per
sort mode when the provider is created: every response carries the full
catalog, and its item order is that mode's ordering. A failed fetch only
empties that mode's ordering, the provider stays usable for the others.
"""

import html
import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any
from urllib.parse import urlencode

from fontcatalog.core.config import ProviderConfig
from fontcatalog.core.exceptions import (
    FetchFailedError,
    FontCatalogError,
    MalformedItemError,
    ParseError,
    UnexpectedDocumentError,
    UnknownVariantError,
)
from fontcatalog.core.models import FontCategory, FontSort, FontStyle, FontWeight
from fontcatalog.rendering.templates import TemplateLoader, default_loader

from .base import FontFamily, FontProvider, FontVariant
from .http import HttpFetcher, upgrade_to_https

logger = logging.getLogger(__name__)

FAMILY_TEMPLATE = "GoogleFontsFamily"
VARIANT_TEMPLATE = "GoogleFontsVariant"

# Sort parameter understood by the webfonts API, None for its default order
SORT_PARAMS: dict[FontSort, str | None] = {
    FontSort.ALPHA: None,
    FontSort.NEWEST: "date",
    FontSort.POPULARITY: "popularity",
    FontSort.TRENDING: "trending",
}

WEIGHT_TOKENS = {
    FontWeight.THIN: "Thin",
    FontWeight.EXTRA_LIGHT: "ExtraLight",
    FontWeight.LIGHT: "Light",
    FontWeight.NORMAL: "Regular",
    FontWeight.MEDIUM: "Medium",
    FontWeight.SEMI_BOLD: "SemiBold",
    FontWeight.BOLD: "Bold",
    FontWeight.EXTRA_BOLD: "ExtraBold",
    FontWeight.BLACK: "Black",
}

ITALIC = "italic"
FONT_EXTENSION = ".ttf"


def escape_family_id(name: str) -> str:
    """Escape quotes so a family name can sit inside a JavaScript string."""
    return name.replace("'", "\\'").replace('"', '\\"')


def parse_variant_id(variant_id: str) -> tuple[FontWeight, FontStyle]:
    """Split a Google variant id such as ``700italic`` into weight and style.

    Raises:
        ParseError: if the weight token is not recognized
    """
    style = FontStyle.ITALIC if ITALIC in variant_id else FontStyle.REGULAR
    weight = FontWeight.from_token(variant_id.replace(ITALIC, ""))
    return weight, style


@dataclass(frozen=True)
class GoogleFontVariant(FontVariant):
    """One weight/style of a Google font family."""

    id: str
    family_name: str
    weight: FontWeight
    style: FontStyle
    url: str
    templates: TemplateLoader = field(default=default_loader, repr=False, compare=False)

    @property
    def filename(self) -> str:
        base_name = self.family_name.replace(" ", "")
        style_token = "Italic" if self.style is FontStyle.ITALIC else ""
        return f"{base_name}-{WEIGHT_TOKENS[self.weight]}{style_token}{FONT_EXTENSION}"

    @property
    def css_weight(self) -> str:
        return "400" if self.weight is FontWeight.NORMAL else self.weight.value

    def html(self, sample: str, size: str, selected: bool = False) -> str:
        return self.templates.render(
            VARIANT_TEMPLATE,
            {
                "familyId": escape_family_id(self.family_name),
                "variantId": self.id,
                "checked": "checked" if selected else "",
                "style": self.style.value,
                "weight": self.css_weight,
                "description": self.description,
                "sample": html.escape(sample),
                "size": size,
            },
        )


@dataclass(frozen=True, eq=False)
class GoogleFontFamily(FontFamily):
    """A Google Fonts catalog entry."""

    name: str
    category: FontCategory
    variant_ids: tuple[str, ...]
    variants: Mapping[str, GoogleFontVariant]
    kind: str | None = None
    subsets: tuple[str, ...] = ()
    version: str | None = None
    last_modified: date | None = None
    fetcher: HttpFetcher | None = field(default=None, repr=False, compare=False)
    templates: TemplateLoader = field(default=default_loader, repr=False, compare=False)

    def download(self, variant_id: str | None) -> bytes:
        variant = self.variants.get(variant_id) if variant_id else None
        if variant is None:
            raise UnknownVariantError(self.name, variant_id)
        if self.fetcher is None:
            raise FetchFailedError(variant.url, "no HTTP fetcher configured")
        return self.fetcher.fetch(variant.url)

    def html(
        self,
        sample: str,
        size: str,
        ids: Iterable[str] | None = None,
        selected: Iterable[str] | None = None,
    ) -> str:
        font_ids = self.variant_ids if ids is None else list(ids)
        checked = set(selected or ())
        samples = [
            self.variants[variant_id].html(sample, size, selected=variant_id in checked)
            for variant_id in font_ids
            if variant_id in self.variants
        ]
        return self.templates.render(
            FAMILY_TEMPLATE,
            {
                "family": self.name,
                "familyId": escape_family_id(self.name),
                "familyQuery": self.name.replace(" ", "+"),
                "variants": ",".join(self.variant_ids),
                "samples": "\n".join(samples),
            },
        )


def _optional_str(item: Mapping[str, Any], key: str) -> str | None:
    value = item.get(key)
    return value if isinstance(value, str) else None


def _parse_date(raw: Any) -> date | None:
    if not isinstance(raw, str):
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_item(
    item: Any,
    fetcher: HttpFetcher | None = None,
    templates: TemplateLoader = default_loader,
) -> GoogleFontFamily:
    """Build a family from one ``items`` entry of a catalog document.

    Raises:
        ParseError: if a required field is missing or no variant is usable
    """
    if not isinstance(item, Mapping):
        raise MalformedItemError("item")

    family = item.get("family")
    if not isinstance(family, str) or not family:
        raise MalformedItemError("family")

    variant_ids = item.get("variants")
    if not isinstance(variant_ids, list):
        raise MalformedItemError("variants")

    files = item.get("files")
    if not isinstance(files, Mapping):
        raise MalformedItemError("files")

    variants: dict[str, GoogleFontVariant] = {}
    ordered_ids: list[str] = []
    for variant_id in variant_ids:
        url = files.get(variant_id) if isinstance(variant_id, str) else None
        if not isinstance(url, str):
            logger.warning(f"Skipping variant {variant_id!r} of {family}: no file URL")
            continue
        try:
            weight, style = parse_variant_id(variant_id)
        except ParseError as e:
            logger.warning(f"Skipping variant {variant_id!r} of {family}: {e}")
            continue
        if variant_id in variants:
            continue
        variants[variant_id] = GoogleFontVariant(
            id=variant_id,
            family_name=family,
            weight=weight,
            style=style,
            url=upgrade_to_https(url),
            templates=templates,
        )
        ordered_ids.append(variant_id)

    if not variants:
        raise MalformedItemError("variants")

    subsets = item.get("subsets")
    return GoogleFontFamily(
        name=family,
        category=FontCategory.parse(item.get("category")),
        variant_ids=tuple(ordered_ids),
        variants=variants,
        kind=_optional_str(item, "kind"),
        subsets=tuple(s for s in subsets if isinstance(s, str)) if isinstance(subsets, list) else (),
        version=_optional_str(item, "version"),
        last_modified=_parse_date(item.get("lastModified")),
        fetcher=fetcher,
        templates=templates,
    )


def parse_catalog(
    document: Any,
    fetcher: HttpFetcher | None = None,
    templates: TemplateLoader = default_loader,
) -> list[GoogleFontFamily]:
    """Parse every usable item of a catalog document, in document order.

    Malformed items are logged and skipped individually.

    Raises:
        ParseError: if the document itself is not a JSON object
    """
    if not isinstance(document, Mapping):
        raise UnexpectedDocumentError(type(document).__name__)

    items = document.get("items")
    if not isinstance(items, list):
        logger.warning("Catalog document has no items")
        return []

    families = []
    for index, item in enumerate(items):
        try:
            families.append(parse_item(item, fetcher, templates))
        except ParseError as e:
            logger.warning(f"Skipping catalog item {index}: {e}")
    return families


class GoogleFontsProvider(FontProvider):
    """Font provider backed by the Google Fonts developer API."""

    name = "Google Fonts"

    def __init__(
        self,
        config: ProviderConfig | None = None,
        fetcher: HttpFetcher | None = None,
        templates: TemplateLoader | None = None,
    ):
        """Fetch the catalog once per sort mode.

        Args:
            config: API settings, read from the environment when omitted
            fetcher: HTTP collaborator, created from ``config`` when omitted
            templates: template loader used for HTML rendering
        """
        self.config = config or ProviderConfig()
        self.fetcher = fetcher or HttpFetcher(self.config)
        self.templates = templates or default_loader

        if not self.config.api_key:
            logger.warning("No Google Fonts API key configured, catalog requests may fail")

        self.fonts: dict[str, GoogleFontFamily] = {}
        self.families: dict[FontSort, list[str]] = {}
        self._load()

        logger.info(
            f"{self.name} loaded {len(self.fonts)} families "
            f"({', '.join(f'{s.value}={len(n)}' for s, n in self.families.items())})"
        )

    def sort_url(self, sort: FontSort) -> str:
        params = {"key": self.config.api_key}
        if SORT_PARAMS[sort]:
            params["sort"] = SORT_PARAMS[sort]
        return f"{self.config.base_url}?{urlencode(params)}"

    def _fetch_sort(self, sort: FontSort) -> list[GoogleFontFamily] | None:
        try:
            document = self.fetcher.fetch_json(self.sort_url(sort))
            return parse_catalog(document, self.fetcher, self.templates)
        except FontCatalogError as e:
            logger.error(f"Failed to load {self.name} ordering '{sort.value}': {e}")
            return None

    def _load(self) -> None:
        sorts = FontSort.values()
        with ThreadPoolExecutor(max_workers=len(sorts)) as executor:
            results = list(executor.map(self._fetch_sort, sorts))

        # Alpha first so the default catalog wins when responses disagree
        for families in results:
            for family in families or ():
                self.fonts.setdefault(family.name, family)

        for sort, families in zip(sorts, results, strict=True):
            if families is None:
                self.families[sort] = []
            elif sort is FontSort.ALPHA:
                self.families[sort] = sorted({family.name for family in families})
            else:
                self.families[sort] = list(dict.fromkeys(family.name for family in families))

    def query(self, search: str, sort: FontSort) -> list[FontFamily]:
        needle = search.lower()
        return [
            self.fonts[name]
            for name in self.families.get(sort, [])
            if not needle or needle in name.lower()
        ]

    def get_font(self, name: str) -> FontFamily | None:
        return self.fonts.get(name)

    def download(self, family: FontFamily, variant_id: str) -> bytes | None:
        try:
            return family.download(variant_id)
        except FontCatalogError as e:
            logger.error(f"Failed to download {family.name} {variant_id}: {e}")
            return None

    def close(self) -> None:
        self.fetcher.close()
