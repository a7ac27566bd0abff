"""Tests for the selection set."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from fontcatalog.browser.selection import SelectionSet
from fontcatalog.core.models import SelectedFont


@pytest.fixture
def selections():
    selections = SelectionSet()
    yield selections
    selections.close()


class TestSelectionSet:
    """Test selecting, unselecting and draining."""

    def test_select_enables_download(self, selections):
        assert selections.select(SelectedFont("Lora", "regular")) is True
        assert SelectedFont("Lora", "regular") in selections
        assert len(selections) == 1

    def test_select_is_idempotent(self, selections):
        selections.select(SelectedFont("Lora", "regular"))
        selections.select(SelectedFont("Lora", "regular"))
        assert len(selections) == 1

    def test_unselect_reports_remaining(self, selections):
        selections.select(SelectedFont("Lora", "regular"))
        selections.select(SelectedFont("Lora", "italic"))

        assert selections.unselect(SelectedFont("Lora", "regular")) is True
        assert selections.unselect(SelectedFont("Lora", "italic")) is False

    def test_unselect_missing(self, selections):
        assert selections.unselect(SelectedFont("Lora", "regular")) is False

    def test_family_and_variant_queries(self, selections):
        selections.select(SelectedFont("Lora", "regular"))
        selections.select(SelectedFont("Lora", "700"))
        selections.select(SelectedFont("Roboto", "italic"))

        assert selections.selected_family_names() == {"Lora", "Roboto"}
        assert selections.selected_variant_ids("Lora") == {"regular", "700"}
        assert selections.selected_variant_ids("Abel") == set()

    def test_snapshot_is_sorted(self, selections):
        for selection in [SelectedFont("Roboto", "regular"), SelectedFont("Lora", "italic")]:
            selections.select(selection)

        assert selections.snapshot() == [
            SelectedFont("Lora", "italic"),
            SelectedFont("Roboto", "regular"),
        ]
        assert len(selections) == 2

    def test_drain_empties_the_set(self, selections):
        selections.select(SelectedFont("Roboto", "regular"))
        selections.select(SelectedFont("Lora", "italic"))

        drained = selections.drain()

        assert drained == [SelectedFont("Lora", "italic"), SelectedFont("Roboto", "regular")]
        assert len(selections) == 0
        assert selections.drain() == []

    def test_concurrent_selects(self, selections):
        ids = [SelectedFont(f"Family {i}", "regular") for i in range(200)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(selections.select, ids))

        assert sorted(selections.snapshot()) == sorted(ids)

    def test_drain_races_with_selects(self, selections):
        """Every selection ends up either drained or still in the set, never both."""
        ids = [SelectedFont(f"Family {i:03d}", "regular") for i in range(200)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            selected = pool.map(selections.select, ids)
            drained = selections.drain()
            list(selected)

        remaining = selections.snapshot()
        assert set(drained).isdisjoint(remaining)
        assert set(drained) | set(remaining) == set(ids)
