"""
Pytest configuration and fixtures for font catalog tests.
"""

import json
from unittest.mock import Mock

import pytest

from fontcatalog.core.config import BrowserConfig, ProviderConfig
from fontcatalog.core.exceptions import FetchFailedError, FontCatalogError
from fontcatalog.fonts.base import FontFamily, FontProvider
from fontcatalog.fonts.google import GoogleFontsProvider, parse_item
from fontcatalog.fonts.http import HttpFetcher
from fontcatalog.rendering.templates import TemplateLoader

FONT_BYTES = b"\x00\x01\x00\x00fake-ttf"


def catalog_item(name, category="sans-serif", variants=("regular", "italic", "700")):
    """Build one ``items`` entry of a webfonts document."""
    slug = name.lower().replace(" ", "")
    return {
        "kind": "webfonts#webfont",
        "family": name,
        "category": category,
        "variants": list(variants),
        "subsets": ["latin"],
        "version": "v1",
        "lastModified": "2024-01-15",
        "files": {v: f"http://fonts.example.com/{slug}/{v}.ttf" for v in variants},
    }


def catalog_document(*items):
    return {"kind": "webfonts#webfontList", "items": list(items)}


def make_family(name, category="sans-serif", variants=("regular", "italic", "700"), fetcher=None):
    """A parsed family backed by ``fetcher`` (a Mock returning FONT_BYTES by default)."""
    if fetcher is None:
        fetcher = Mock(spec=HttpFetcher)
        fetcher.fetch.return_value = FONT_BYTES
    return parse_item(catalog_item(name, category, variants), fetcher)


class StubProvider(FontProvider):
    """In-memory provider with one fixed ordering for every sort mode."""

    def __init__(self, name, families, orderings=None):
        self.name = name
        self.fonts = {family.name: family for family in families}
        self.orderings = orderings or {}
        self.downloads = []

    def query(self, search, sort):
        names = self.orderings.get(sort, list(self.fonts))
        needle = search.lower()
        return [self.fonts[n] for n in names if not needle or needle in n.lower()]

    def get_font(self, name) -> FontFamily | None:
        return self.fonts.get(name)

    def download(self, family, variant_id):
        self.downloads.append((family.name, variant_id))
        try:
            return family.download(variant_id)
        except FontCatalogError:
            return None


class FakeFetcher:
    """Serves catalog documents keyed by the ``sort`` query parameter."""

    def __init__(self, documents, failing=()):
        self.documents = documents
        self.failing = set(failing)
        self.urls = []

    def _sort_of(self, url):
        for sort in ("date", "popularity", "trending"):
            if f"sort={sort}" in url:
                return sort
        return "alpha"

    def fetch(self, url):
        self.urls.append(url)
        if url.endswith(".ttf"):
            return FONT_BYTES
        sort = self._sort_of(url)
        if sort in self.failing:
            raise FetchFailedError(url, "connection refused")
        return json.dumps(self.documents.get(sort, catalog_document())).encode()

    def fetch_json(self, url):
        return json.loads(self.fetch(url))

    def close(self):
        pass


@pytest.fixture
def templates():
    """A fresh template loader over the bundled templates."""
    return TemplateLoader()


@pytest.fixture
def provider_config():
    return ProviderConfig(_env_file=None, api_key="test-key", max_retries=1)


@pytest.fixture
def fast_browser_config():
    """Browser settings with debounce delays short enough for tests."""
    return BrowserConfig(
        _env_file=None,
        search_delay=0.05,
        sample_delay=0.01,
        splash_delay=0.0,
        status_clear_delay=0.05,
        sample_text="Sphinx of black quartz",
    )


@pytest.fixture
def sample_documents():
    """Catalog documents for every sort mode over the same four families."""
    roboto = catalog_item("Roboto", "sans-serif", ("100", "regular", "italic", "700", "700italic"))
    lora = catalog_item("Lora", "serif", ("regular", "italic"))
    mono = catalog_item("Roboto Mono", "monospace", ("regular", "500"))
    pacifico = catalog_item("Pacifico", "handwriting", ("regular",))
    return {
        "alpha": catalog_document(lora, pacifico, roboto, mono),
        "date": catalog_document(pacifico, mono, lora, roboto),
        "popularity": catalog_document(roboto, mono, lora, pacifico),
        "trending": catalog_document(mono, pacifico, roboto, lora),
    }


@pytest.fixture
def fake_fetcher(sample_documents):
    return FakeFetcher(sample_documents)


@pytest.fixture
def google_provider(provider_config, fake_fetcher, templates):
    return GoogleFontsProvider(provider_config, fetcher=fake_fetcher, templates=templates)


@pytest.fixture
def many_families():
    """45 single-variant families named Family 00..Family 44."""
    return [make_family(f"Family {i:02d}", variants=("regular",)) for i in range(45)]


@pytest.fixture
def stub_provider(many_families):
    return StubProvider("Stub", many_families)
