"""
Font Provider Interfaces
========================

Abstract interfaces implemented once per remote font catalog. Each provider
ships a concrete family/variant pair, so callers never need to downcast to
reach provider specific behaviour such as HTML rendering.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence

from fontcatalog.core.models import (
    FontCategory,
    FontSort,
    FontStyle,
    FontWeight,
    describe_variant,
)


class FontVariant(ABC):
    """A specific weight and style of a font family."""

    id: str
    family_name: str
    weight: FontWeight
    style: FontStyle

    @property
    @abstractmethod
    def filename(self) -> str:
        """Canonical file name used when saving the variant."""

    @abstractmethod
    def html(self, sample: str, size: str, selected: bool = False) -> str:
        """Render a sample of this variant."""

    @property
    def description(self) -> str:
        return describe_variant(self.weight, self.style)

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.weight.order, self.style.order)

    def __str__(self) -> str:
        return self.description


class FontFamily(ABC):
    """A named catalog entry with one or more variants."""

    name: str
    category: FontCategory
    variant_ids: Sequence[str]
    variants: Mapping[str, FontVariant]

    @abstractmethod
    def download(self, variant_id: str | None) -> bytes:
        """Fetch the binary font data of a variant.

        Raises:
            FontLookupError: if the variant id is unknown
            NetworkError: if the transfer fails
        """

    @abstractmethod
    def html(
        self,
        sample: str,
        size: str,
        ids: Iterable[str] | None = None,
        selected: Iterable[str] | None = None,
    ) -> str:
        """Render the family with the given variant ids (all when None)."""

    @property
    def weights(self) -> set[FontWeight]:
        return {variant.weight for variant in self.variants.values()}

    @property
    def styles(self) -> set[FontStyle]:
        return {variant.style for variant in self.variants.values()}

    def display_variant_ids(
        self, weights: Iterable[FontWeight], styles: Iterable[FontStyle]
    ) -> list[str]:
        """Variant ids matching the filters, ordered by weight then style."""
        weights = set(weights)
        styles = set(styles)
        matching = [
            variant
            for variant in self.variants.values()
            if variant.weight in weights and variant.style in styles
        ]
        return [variant.id for variant in sorted(matching, key=lambda v: v.sort_key)]

    def __str__(self) -> str:
        return f"{self.name} ({self.category}, {len(self.variants)} variants)"


class FontProvider(ABC):
    """A remote catalog source exposing query, lookup and download."""

    name: str = "provider"

    @abstractmethod
    def query(self, search: str, sort: FontSort) -> list[FontFamily]:
        """Families in ``sort`` order whose name contains ``search``.

        Matching is case-insensitive and an empty search matches everything.
        Category, weight and style filtering is not the provider's job.
        """

    @abstractmethod
    def get_font(self, name: str) -> FontFamily | None:
        """Exact, case-sensitive lookup by family name."""

    @abstractmethod
    def download(self, family: FontFamily, variant_id: str) -> bytes | None:
        """Download a variant, logging failures and returning None."""
