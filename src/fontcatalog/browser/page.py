"""Composition of the results page from query results and selections."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from fontcatalog.core.models import FontStyle, FontWeight
from fontcatalog.fonts.base import FontFamily
from fontcatalog.fonts.manager import FontManager
from fontcatalog.rendering.pagination import Page, paginate, pagination_html
from fontcatalog.rendering.templates import TemplateLoader, default_loader

from .selection import SelectionSet

logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "FontsView"
PREVIOUSLY_SELECTED_HEADING = "Previously Selected Fonts"


@dataclass(frozen=True)
class RenderedPage:
    """A rendered results document and the window it shows."""

    html: str
    page: Page
    shown: tuple[str, ...]
    previously_selected: tuple[str, ...]


def result_summary(count: int) -> str:
    return "No results" if count == 0 else f"{count} results"


class PageRenderer:
    """Renders a page of results plus selections that fell off the page."""

    def __init__(
        self,
        manager: FontManager,
        selections: SelectionSet,
        templates: TemplateLoader | None = None,
        page_size: int = 20,
    ):
        self.manager = manager
        self.selections = selections
        self.templates = templates or default_loader
        self.page_size = page_size

    def render(
        self,
        results: Sequence[FontFamily],
        page: int,
        sample: str,
        size: str,
        weights: Iterable[FontWeight] | None = None,
        styles: Iterable[FontStyle] | None = None,
    ) -> RenderedPage:
        weights = set(FontWeight.values() if weights is None else weights)
        styles = set(FontStyle.values() if styles is None else styles)
        window, shown = paginate(results, page, self.page_size)

        selected: dict[str, set[str]] = {}
        for font in self.selections.snapshot():
            selected.setdefault(font.family_name, set()).add(font.variant_id)

        fonts_html = "".join(
            family.html(
                sample,
                size,
                ids=family.display_variant_ids(weights, styles),
                selected=selected.get(family.name, set()),
            )
            for family in shown
        )

        shown_names = {family.name for family in shown}
        previous: dict[str, str] = {}
        for name in sorted(set(selected) - shown_names):
            fragment = self._selected_family_html(name, selected[name], sample, size)
            if fragment is not None:
                previous[name] = fragment
        selections_html = "".join(previous.values())

        html = self.templates.render(
            PAGE_TEMPLATE,
            {
                "summary": result_summary(window.count),
                "index": pagination_html(window.page, window.count, self.page_size),
                "pages": window.label,
                "fonts": fonts_html,
                "selectedFonts": (
                    f"<h2>{PREVIOUSLY_SELECTED_HEADING}</h2>" if selections_html else ""
                ),
                "selections": selections_html,
            },
        )
        return RenderedPage(
            html=html,
            page=window,
            shown=tuple(family.name for family in shown),
            previously_selected=tuple(previous),
        )

    def _selected_family_html(
        self, name: str, variant_ids: set[str], sample: str, size: str
    ) -> str | None:
        """Render only the selected variants of a family, in display order."""
        family = self.manager.get_font(name)
        if family is None:
            logger.error(f"Unable to find selected font family: {name}")
            return None
        ids = [
            variant_id
            for variant_id in family.display_variant_ids(FontWeight.values(), FontStyle.values())
            if variant_id in variant_ids
        ]
        if not ids:
            return None
        return family.html(sample, size, ids=ids, selected=ids)
