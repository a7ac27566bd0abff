"""Value types describing fonts, filters and selections."""

from dataclasses import dataclass
from enum import Enum
from functools import total_ordering

from .exceptions import MalformedFontIdError, UnknownWeightError

FONT_ID_SEPARATOR = "|"


class FontCategory(Enum):
    """Supported font categories."""

    SERIF = "serif"
    SANS_SERIF = "sans-serif"
    DISPLAY = "display"
    HANDWRITING = "handwriting"
    MONOSPACE = "monospace"
    UNKNOWN = "unknown"

    @classmethod
    def values(cls) -> list["FontCategory"]:
        return list(cls)

    @classmethod
    def parse(cls, raw: object) -> "FontCategory":
        """Map a provider category string, falling back to UNKNOWN."""
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


_WEIGHT_RANKS = {
    "100": 0,
    "200": 1,
    "300": 2,
    "regular": 3,
    "500": 4,
    "600": 5,
    "700": 6,
    "800": 7,
    "900": 8,
}

_WEIGHT_LABELS = {
    "100": "thin",
    "200": "extra light",
    "300": "light",
    "regular": "normal",
    "500": "medium",
    "600": "semi bold",
    "700": "bold",
    "800": "extra bold",
    "900": "black",
}


@total_ordering
class FontWeight(Enum):
    """Supported font weights, ordered thin (100) to black (900)."""

    THIN = "100"
    EXTRA_LIGHT = "200"
    LIGHT = "300"
    NORMAL = "regular"
    MEDIUM = "500"
    SEMI_BOLD = "600"
    BOLD = "700"
    EXTRA_BOLD = "800"
    BLACK = "900"

    @property
    def order(self) -> int:
        return _WEIGHT_RANKS[self.value]

    @property
    def label(self) -> str:
        return _WEIGHT_LABELS[self.value]

    @classmethod
    def values(cls) -> list["FontWeight"]:
        return sorted(cls)

    @classmethod
    def from_token(cls, token: str) -> "FontWeight":
        """Parse a raw weight token. An empty token means the normal weight."""
        try:
            return cls(token or cls.NORMAL.value)
        except ValueError:
            if token == "400":
                return cls.NORMAL
            raise UnknownWeightError(token) from None

    def __lt__(self, other):
        if not isinstance(other, FontWeight):
            return NotImplemented
        return self.order < other.order

    def __str__(self) -> str:
        return self.label


@total_ordering
class FontStyle(Enum):
    """Supported font styles."""

    REGULAR = "normal"
    ITALIC = "italic"

    @property
    def order(self) -> int:
        return 0 if self is FontStyle.REGULAR else 1

    @classmethod
    def values(cls) -> list["FontStyle"]:
        return sorted(cls)

    def __lt__(self, other):
        if not isinstance(other, FontStyle):
            return NotImplemented
        return self.order < other.order

    def __str__(self) -> str:
        return self.value


class FontSort(Enum):
    """Supported result orderings."""

    ALPHA = "alpha"
    NEWEST = "newest"
    POPULARITY = "popularity"
    TRENDING = "trending"

    @classmethod
    def values(cls) -> list["FontSort"]:
        return list(cls)

    def __str__(self) -> str:
        return self.value


def describe_variant(weight: FontWeight, style: FontStyle) -> str:
    """Human readable description of a weight/style combination."""
    if style is FontStyle.REGULAR:
        return weight.label
    if weight is FontWeight.NORMAL:
        return "italic"
    return f"{weight.label} italic"


@total_ordering
@dataclass(frozen=True)
class SelectedFont:
    """A (family name, variant id) pair marked for download."""

    family_name: str
    variant_id: str

    @classmethod
    def from_font_id(cls, font_id: str) -> "SelectedFont":
        """Parse a composite ``"<family>|<variant>"`` id."""
        if not isinstance(font_id, str):
            raise MalformedFontIdError(repr(font_id))
        family_name, sep, variant_id = font_id.partition(FONT_ID_SEPARATOR)
        if not sep or not family_name or not variant_id:
            raise MalformedFontIdError(font_id)
        return cls(family_name, variant_id)

    @property
    def font_id(self) -> str:
        return f"{self.family_name}{FONT_ID_SEPARATOR}{self.variant_id}"

    def __lt__(self, other):
        if not isinstance(other, SelectedFont):
            return NotImplemented
        if self.family_name == other.family_name:
            return self.variant_id < other.variant_id
        return self.family_name < other.family_name

    def __str__(self) -> str:
        return self.font_id
