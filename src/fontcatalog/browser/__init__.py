"""Browsing session: selection, paging, downloads and web view events."""

from .downloads import DownloadReport, FontDownloader
from .executors import Debouncer, ScheduledTask, SerialExecutor
from .messages import LoadPage, SelectFont, UnselectFont, parse_message
from .page import PageRenderer, RenderedPage
from .selection import SelectionSet
from .session import BrowserSession

__all__ = [
    "BrowserSession",
    "Debouncer",
    "DownloadReport",
    "FontDownloader",
    "LoadPage",
    "PageRenderer",
    "RenderedPage",
    "ScheduledTask",
    "SelectFont",
    "SelectionSet",
    "SerialExecutor",
    "UnselectFont",
    "parse_message",
]
