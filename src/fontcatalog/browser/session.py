"""
Browser Session
===============

Connects the catalog, the selection set and the rendered results page.

Three serial executors keep concurrent edits consistent:

- ``search``: query text, sort, filters, sample text, size, paging and the
  catalog queries themselves
- ``selection``: the selection set (and transient status bookkeeping)
- ``download``: download batches, so a long batch never blocks searching

Presentation updates are handed to the ``ui`` dispatcher, which a GUI shell
replaces with its main-thread scheduler.
"""

import logging
import random
import time
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from pathlib import Path

from fontcatalog import __copyright__, __version__
from fontcatalog.core.config import BrowserConfig
from fontcatalog.core.exceptions import FontLookupError
from fontcatalog.core.models import FontCategory, FontSort, FontStyle, FontWeight, SelectedFont
from fontcatalog.fonts.base import FontFamily, FontProvider
from fontcatalog.fonts.manager import FontManager
from fontcatalog.rendering.templates import TemplateLoader, default_loader

from .downloads import DownloadReport, FontDownloader
from .executors import Debouncer, SerialExecutor
from .messages import LoadPage, SelectFont, UnselectFont, parse_message
from .page import PageRenderer, RenderedPage
from .selection import SelectionSet

logger = logging.getLogger(__name__)

PANGRAMS = [
    "Grumpy wizards make toxic brew for the evil Queen and Jack.",
    "The quick brown fox jumps over the lazy dog.",
    "Jack amazed a few girls by dropping the antique onyx vase.",
    "Six crazy kings vowed to abolish my quite pitiful jousts.",
    "Five or six big jet planes zoomed quickly by the tower.",
    "My grandfather picks up quartz and valuable onyx jewels.",
    "Pack my box with five dozen liquor jugs.",
]

WELCOME_TEMPLATE = "Welcome"

DisplayCallback = Callable[[str, str], None]
StatusCallback = Callable[[str], None]
EnabledCallback = Callable[[bool], None]
UiDispatcher = Callable[[Callable[[], None]], None]


def _inline(fn: Callable[[], None]) -> None:
    fn()


def _ignore(*args) -> None:
    pass


def normalize_size(size: str | int | float) -> str:
    """Sample size as CSS points, e.g. ``14`` -> ``"14pt"``."""
    if isinstance(size, int | float):
        return f"{size:g}pt"
    size = str(size).strip()
    return size if size.endswith("pt") else f"{size}pt"


class BrowserSession:
    """State and event handling for one font browsing session."""

    def __init__(
        self,
        manager: FontManager | None = None,
        config: BrowserConfig | None = None,
        templates: TemplateLoader | None = None,
        display: DisplayCallback = _ignore,
        status: StatusCallback = _ignore,
        download_enabled: EnabledCallback = _ignore,
        ui: UiDispatcher = _inline,
        show_progress: bool = False,
    ):
        self.config = config or BrowserConfig()
        self.manager = manager or FontManager()
        self.templates = templates or default_loader
        self._display = display
        self._status = status
        self._download_enabled = download_enabled
        self._ui = ui

        self.search_executor = SerialExecutor("search")
        self.download_executor = SerialExecutor("download")
        self.selections = SelectionSet(SerialExecutor("selection"))

        self._search_debouncer = Debouncer(self.search_executor, self.config.search_delay)
        self._sample_debouncer = Debouncer(self.search_executor, self.config.sample_delay)
        self._size_debouncer = Debouncer(self.search_executor, self.config.sample_delay)
        self._status_clear = Debouncer(self.selections.executor, self.config.status_clear_delay)

        self.renderer = PageRenderer(
            self.manager, self.selections, self.templates, self.config.page_size
        )
        self.downloader = FontDownloader(
            self.manager, status=self.update_status, show_progress=show_progress
        )

        # Owned by the search executor
        self.last_search = ""
        self.custom_text = self.config.sample_text
        self.sample_text = random.choice(PANGRAMS)
        self.font_size = self.config.font_size
        self.sorting = self.config.default_sort
        self.category_filter: set[FontCategory] = set(FontCategory.values())
        self.weight_filter: set[FontWeight] = set(FontWeight.values())
        self.style_filter: set[FontStyle] = set(FontStyle.values())
        self.results: list[FontFamily] = []
        self.current_page = 1
        self.searches_completed = 0
        self.last_rendered: RenderedPage | None = None

    # Lifecycle

    def welcome_html(self) -> str:
        return self.templates.render(
            WELCOME_TEMPLATE, {"version": __version__, "copyright": __copyright__}
        )

    def start(self, provider_factories: Iterable[Callable[[], FontProvider]] = ()) -> Future:
        """Show the welcome page, register providers, then run the first search.

        Providers are created on the search executor so slow catalog fetches
        never block the caller. The first search is debounced, so typing
        before it fires replaces it.
        """
        welcome = self.welcome_html()
        self._ui(lambda: self._display(welcome, self.templates.base_url))
        deadline = time.monotonic() + self.config.splash_delay
        factories = list(provider_factories)

        def initialize() -> None:
            for factory in factories:
                self.update_status("Initializing font providers...")
                try:
                    provider = factory()
                except Exception as e:
                    logger.exception(f"Failed to initialize font provider: {e}")
                    self.update_status("Font provider failed to initialize", cleanup=True)
                    continue
                self.manager.add_provider(provider)
                self.update_status(f"{provider.name} Ready", cleanup=True)
            remaining = max(0.0, deadline - time.monotonic())
            self._search_debouncer.schedule(self._perform_search, delay=remaining)

        return self.search_executor.submit(initialize)

    def close(self) -> None:
        self._search_debouncer.cancel()
        self._sample_debouncer.cancel()
        self._size_debouncer.cancel()
        self._status_clear.cancel()
        self.search_executor.shutdown()
        self.download_executor.shutdown()
        self.selections.close()

    def wait_idle(self) -> None:
        """Block until work queued so far on the search executor has run."""
        self.search_executor.call(lambda: None)

    # Search inputs

    def search(self, text: str):
        """Debounced search for text typed into the search field."""
        query = text.strip()

        def run() -> None:
            if query != self.last_search:
                self.last_search = query
                self._perform_search()

        return self._search_debouncer.schedule(run)

    def submit_search(self, text: str) -> Future:
        """Immediate search, used when the user presses enter."""
        query = text.strip()

        def run() -> None:
            if query != self.last_search:
                self.last_search = query
                self._perform_search()

        return self.search_executor.submit(run)

    def set_sort(self, sort: FontSort) -> Future:
        def run() -> None:
            self.sorting = sort
            logger.debug(f"Sorting: {sort}")
            self._perform_search()

        return self.search_executor.submit(run)

    def set_categories(self, categories: Iterable[FontCategory]) -> Future:
        return self._set_filter("category_filter", categories, FontCategory.values())

    def set_weights(self, weights: Iterable[FontWeight]) -> Future:
        return self._set_filter("weight_filter", weights, FontWeight.values())

    def set_styles(self, styles: Iterable[FontStyle]) -> Future:
        return self._set_filter("style_filter", styles, FontStyle.values())

    def _set_filter(self, attribute: str, values: Iterable, all_values: list) -> Future:
        # an empty filter means "all", as with the All segment of the filter bar
        selected = set(values) or set(all_values)

        def run() -> None:
            logger.debug(f"{attribute}: {sorted(str(v) for v in selected)}")
            setattr(self, attribute, selected)
            self._perform_search()

        return self.search_executor.submit(run)

    def set_sample_text(self, text: str):
        """Debounced change of the custom sample text."""
        sample = text.strip()

        def run() -> None:
            if sample != self.custom_text:
                self.custom_text = sample
                self._update_view()

        return self._sample_debouncer.schedule(run)

    def set_font_size(self, size: str | int | float):
        """Debounced change of the sample size."""
        font_size = normalize_size(size)

        def run() -> None:
            if font_size != self.font_size:
                self.font_size = font_size
                self._update_view()

        return self._size_debouncer.schedule(run)

    def load_page(self, page: int) -> Future:
        return self.search_executor.submit(self._update_view, page)

    # Web view events

    def handle_message(self, name: str, body) -> None:
        """Handle a message from the web view; malformed ones are dropped."""
        logger.debug(f"Got javascript message: {name}")
        message = parse_message(name, body)

        if isinstance(message, LoadPage):
            self.load_page(message.page)
        elif isinstance(message, SelectFont):
            if self._check_selection(message.selection):
                logger.debug(f"Selecting: {message.selection}")
                enabled = self.selections.select(message.selection)
                self._ui(lambda: self._download_enabled(enabled))
        elif isinstance(message, UnselectFont):
            if self._check_selection(message.selection):
                logger.debug(f"Unselecting: {message.selection}")
                enabled = self.selections.unselect(message.selection)
                self._ui(lambda: self._download_enabled(enabled))

    def select(self, font_id: str) -> None:
        self.handle_message("selectFont", font_id)

    def unselect(self, font_id: str) -> None:
        self.handle_message("unselectFont", font_id)

    def _check_selection(self, selection: SelectedFont) -> bool:
        try:
            self.manager.resolve(selection)
        except FontLookupError as e:
            logger.error(f"Unable to lookup font: {e}")
            return False
        return True

    # Downloads

    def download(self, destination: str | Path) -> "Future[DownloadReport]":
        """Download every selection into ``destination``.

        The selection set is drained before this returns, so fonts selected
        while the batch runs belong to the next batch.
        """
        selections = self.selections.drain()
        self._ui(lambda: self._download_enabled(False))

        def run() -> DownloadReport:
            report = self.downloader.download_batch(selections, destination)
            self.update_status("Font Downloads Complete", cleanup=True)
            return report

        return self.download_executor.submit(run)

    # Rendering

    def render_current(self) -> RenderedPage:
        """Render the current results, synchronously."""
        return self.search_executor.call(self._render, self.current_page)

    def _perform_search(self) -> None:
        self.update_status("Searching...")
        self.results = self.manager.query_fonts(
            search=self.last_search,
            sort=self.sorting,
            categories=self.category_filter,
            weights=self.weight_filter,
            styles=self.style_filter,
        )
        self.searches_completed += 1
        self.update_status()
        self._update_view(page=1)

    def _render(self, page: int) -> RenderedPage:
        sample = self.custom_text or self.sample_text
        return self.renderer.render(
            self.results,
            page,
            sample,
            self.font_size,
            weights=self.weight_filter,
            styles=self.style_filter,
        )

    def _update_view(self, page: int | None = None) -> None:
        rendered = self._render(page or self.current_page)
        self.current_page = rendered.page.page
        self.last_rendered = rendered
        self.update_status("Loading...")
        self._ui(lambda: self._display(rendered.html, self.templates.base_url))

    def page_loaded(self) -> None:
        """Called by the shell once the web view finished loading a page."""
        self.update_status()

    # Status bar

    def update_status(self, status: str | None = None, cleanup: bool = False) -> None:
        """Show a status message; cleanup messages clear after a short delay."""
        text = status or ""
        logger.debug(f"Status update: {text or '[cleared]'}")
        self._status_clear.cancel()
        if cleanup:
            self._status_clear.schedule(lambda: self._ui(lambda: self._status("")))
        self._ui(lambda: self._status(text))
