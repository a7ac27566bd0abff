"""HTML rendering: templates and pagination."""

from .pagination import Page, page_tokens, paginate, pagination_html, total_pages
from .templates import HtmlTemplate, TemplateLoader, default_loader, render

__all__ = [
    "HtmlTemplate",
    "Page",
    "TemplateLoader",
    "default_loader",
    "page_tokens",
    "paginate",
    "pagination_html",
    "render",
    "total_pages",
]
