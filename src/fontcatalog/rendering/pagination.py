"""Page windows and pagination link markup for result lists."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

COLLAPSED = "-"


@dataclass(frozen=True)
class Page:
    """A window over an ordered result list."""

    page: int
    page_size: int
    count: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.count, self.page_size)

    @property
    def start(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def end(self) -> int:
        return min(self.page * self.page_size, self.count)

    @property
    def label(self) -> str:
        return f"Page {self.page} of {self.total_pages}"


def total_pages(count: int, page_size: int) -> int:
    return max(1, -(-count // page_size))


def paginate(results: Sequence[T], page: int, page_size: int) -> tuple[Page, list[T]]:
    """Return the page window and the items shown on it.

    Pages are 1-indexed; a requested page outside the valid range is clamped.
    """
    count = len(results)
    page = min(max(page, 1), total_pages(count, page_size))
    window = Page(page=page, page_size=page_size, count=count)
    return window, list(results[window.start : window.end])


def page_tokens(page: int, pages: int) -> list[str | int]:
    """Tokens for pages 1..pages.

    The current page is the string form of its number, linked pages are ints
    and runs of hidden pages collapse into a single ``"-"``.
    """
    tokens: list[str | int] = []
    for i in range(1, pages + 1):
        if i == page:
            tokens.append(str(i))
        elif i in (1, pages) or i % 5 == 0 or abs(i - page) < 3:
            tokens.append(i)
        elif not tokens or tokens[-1] != COLLAPSED:
            tokens.append(COLLAPSED)
    return tokens


def pagination_html(page: int, count: int, page_size: int) -> str:
    """Render ``[ 1 | 2 | - | 5 ]`` style markup, empty when one page suffices."""
    if count <= page_size:
        return ""

    links = []
    for token in page_tokens(page, total_pages(count, page_size)):
        if isinstance(token, int):
            links.append(f"<a href='javascript:loadPage({token})'>{token}</a>")
        else:
            links.append(token)
    return "[ " + " | ".join(links) + " ]"
