"""Tests for result paging and pagination markup."""

import pytest

from fontcatalog.rendering.pagination import (
    COLLAPSED,
    Page,
    page_tokens,
    paginate,
    pagination_html,
    total_pages,
)


class TestPaginate:
    """Test page windows."""

    def test_total_pages(self):
        assert total_pages(0, 20) == 1
        assert total_pages(20, 20) == 1
        assert total_pages(21, 20) == 2
        assert total_pages(45, 20) == 3

    def test_last_page_is_partial(self):
        window, items = paginate(list(range(45)), 3, 20)

        assert window.page == 3
        assert items == list(range(40, 45))
        assert window.label == "Page 3 of 3"

    def test_page_clamped_low(self):
        window, items = paginate(list(range(45)), 0, 20)
        assert window.page == 1
        assert items == list(range(20))

    def test_page_clamped_high(self):
        window, items = paginate(list(range(45)), 99, 20)
        assert window.page == 3
        assert len(items) == 5

    def test_empty_results(self):
        window, items = paginate([], 1, 20)
        assert window == Page(page=1, page_size=20, count=0)
        assert items == []
        assert window.label == "Page 1 of 1"


class TestPageTokens:
    """Test the collapsing rule for page links."""

    def test_few_pages_all_shown(self):
        assert page_tokens(2, 3) == [1, "2", 3]

    def test_twelve_pages_from_first(self):
        assert page_tokens(1, 12) == ["1", 2, 3, COLLAPSED, 5, COLLAPSED, 10, COLLAPSED, 12]

    def test_twelve_pages_from_middle(self):
        assert page_tokens(7, 12) == [1, COLLAPSED, 5, 6, "7", 8, 9, 10, COLLAPSED, 12]

    @pytest.mark.parametrize("pages", [1, 2, 7, 12, 23, 60])
    def test_invariants(self, pages):
        for page in range(1, pages + 1):
            tokens = page_tokens(page, pages)
            assert tokens.count(str(page)) == 1
            assert tokens[0] in (1, "1")
            assert tokens[-1] in (pages, str(pages))
            for a, b in zip(tokens, tokens[1:]):
                assert not (a == COLLAPSED and b == COLLAPSED)


class TestPaginationHtml:
    """Test rendered pagination markup."""

    def test_single_page_is_empty(self):
        assert pagination_html(1, 20, 20) == ""
        assert pagination_html(1, 0, 20) == ""

    def test_links(self):
        html = pagination_html(2, 45, 20)
        assert html == (
            "[ <a href='javascript:loadPage(1)'>1</a> | 2 | "
            "<a href='javascript:loadPage(3)'>3</a> ]"
        )
