"""
HTML Templates
==============

A very small handlebars-like template engine. Templates are bundled HTML
files whose ``{{name}}`` tokens are replaced with caller supplied values.
There are no conditionals or loops; unbound tokens are left untouched.
"""

import logging
import re
import threading
from collections.abc import Mapping
from importlib import resources
from pathlib import Path

from fontcatalog.core.exceptions import TemplateNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "fontcatalog"
TEMPLATE_DIR = "templates"
TEMPLATE_SUFFIX = ".html"
TOKEN_PATTERN = re.compile(r"\{\{(\w+)\}\}")


class HtmlTemplate:
    """A template string that renders by literal token substitution."""

    def __init__(self, html: str, key: str = "<inline>"):
        self.key = key
        self.html = html

    def render(self, data: Mapping[str, str] | None = None) -> str:
        data = data or {}
        # single pass, so inserted values are never scanned for tokens
        return TOKEN_PATTERN.sub(
            lambda match: str(data[match[1]]) if match[1] in data else match[0], self.html
        )

    def __repr__(self) -> str:
        return f"HtmlTemplate({self.key!r})"


def _templates_root():
    return resources.files(TEMPLATE_PACKAGE).joinpath(TEMPLATE_DIR)


def read_template(key: str) -> str:
    """Read a bundled template, raising TemplateNotFoundError when missing."""
    resource = _templates_root().joinpath(f"{key}{TEMPLATE_SUFFIX}")
    try:
        return resource.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError, OSError) as e:
        raise TemplateNotFoundError(key) from e


class TemplateLoader:
    """Lazily loads and memoizes templates by key.

    Loading never fails: a missing resource yields a template whose text is a
    diagnostic message naming the key, so rendering stays total.
    """

    def __init__(self, reader=read_template):
        self._reader = reader
        self._templates: dict[str, HtmlTemplate] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> HtmlTemplate:
        with self._lock:
            template = self._templates.get(key)
            if template is None:
                try:
                    html = self._reader(key)
                except TemplateNotFoundError as e:
                    logger.error(str(e))
                    html = str(e)
                template = HtmlTemplate(html, key)
                self._templates[key] = template
            return template

    def render(self, key: str, data: Mapping[str, str] | None = None) -> str:
        return self.get(key).render(data)

    @property
    def base_url(self) -> str:
        """URL that relative references in rendered pages resolve against."""
        root = Path(str(_templates_root())).resolve()
        return root.as_uri() + "/"


default_loader = TemplateLoader()


def render(key: str, data: Mapping[str, str] | None = None) -> str:
    """Render a bundled template with the shared loader."""
    return default_loader.render(key, data)
