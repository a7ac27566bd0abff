"""
Font Management System
======================

Central catalog aggregator. Routes queries to every registered provider,
merges their results in registration order and applies the category, weight
and style filters. It holds no font data of its own.
"""

import logging
import threading
from collections.abc import Iterable

from fontcatalog.core.exceptions import FontLookupError, UnknownFamilyError, UnknownVariantError
from fontcatalog.core.models import FontCategory, FontSort, FontStyle, FontWeight, SelectedFont

from .base import FontFamily, FontProvider

logger = logging.getLogger(__name__)


class FontManager:
    """
    Aggregates one or more font providers behind a single query interface.

    Providers are consulted in registration order. Families with the same name
    from different providers are not merged; both are returned.
    """

    def __init__(self, providers: Iterable[FontProvider] | None = None):
        """
        Initialize font manager.

        Args:
            providers: Optional providers to register, in precedence order
        """
        self._providers: list[FontProvider] = []
        self._lock = threading.Lock()

        for provider in providers or ():
            self.add_provider(provider)

        logger.info(f"FontManager initialized with {len(self._providers)} providers")

    def add_provider(self, provider: FontProvider) -> None:
        """Register a provider after all previously registered ones."""
        with self._lock:
            self._providers.append(provider)
        logger.info(f"Registered font provider: {provider.name}")

    @property
    def providers(self) -> list[FontProvider]:
        with self._lock:
            return list(self._providers)

    def query_fonts(
        self,
        search: str = "",
        sort: FontSort = FontSort.ALPHA,
        categories: Iterable[FontCategory] | None = None,
        weights: Iterable[FontWeight] | None = None,
        styles: Iterable[FontStyle] | None = None,
    ) -> list[FontFamily]:
        """
        Query every provider and filter the merged results.

        A family passes the weight and style filters when any one of its
        variants matches; per-variant filtering is left to the display layer.

        Args:
            search: Case-insensitive substring of the family name
            sort: Result ordering
            categories: Allowed categories (all when None)
            weights: Allowed weights (all when None)
            styles: Allowed styles (all when None)

        Returns:
            Matching families, provider by provider in registration order
        """
        categories = set(FontCategory.values() if categories is None else categories)
        weights = set(FontWeight.values() if weights is None else weights)
        styles = set(FontStyle.values() if styles is None else styles)

        results = []
        for provider in self.providers:
            for family in provider.query(search, sort):
                if family.category not in categories:
                    continue
                if weights.isdisjoint(family.weights):
                    continue
                if styles.isdisjoint(family.styles):
                    continue
                results.append(family)

        logger.debug(
            f"Query search={search!r} sort={sort.value} matched {len(results)} families"
        )
        return results

    def get_font(self, name: str) -> FontFamily | None:
        """
        Get font family by exact name.

        Args:
            name: Family name (case-sensitive)

        Returns:
            First matching family across providers, None otherwise
        """
        for provider in self.providers:
            family = provider.get_font(name)
            if family is not None:
                return family
        return None

    def provider_for(self, family: FontFamily) -> FontProvider | None:
        """Return the provider that owns ``family``."""
        for provider in self.providers:
            if provider.get_font(family.name) is family:
                return provider
        return None

    def resolve(self, selection: SelectedFont) -> FontFamily:
        """
        Resolve a selection to its family, checking the variant exists.

        Raises:
            FontLookupError: if the family or variant is unknown
        """
        family = self.get_font(selection.family_name)
        if family is None:
            raise UnknownFamilyError(selection.family_name)
        if selection.variant_id not in family.variants:
            raise UnknownVariantError(family.name, selection.variant_id)
        return family

    def download(self, selection: SelectedFont) -> bytes | None:
        """
        Download the font file for a selection.

        Returns:
            The font data, or None if the lookup or transfer failed
        """
        try:
            family = self.resolve(selection)
        except FontLookupError as e:
            logger.error(str(e))
            return None

        provider = self.provider_for(family)
        if provider is None:
            logger.error(f"No provider owns font family: {family.name}")
            return None
        return provider.download(family, selection.variant_id)

    def get_statistics(self) -> dict[str, int]:
        """Count families per provider for the default ordering."""
        return {
            provider.name: len(provider.query("", FontSort.ALPHA)) for provider in self.providers
        }
