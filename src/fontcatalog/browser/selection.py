"""
Selection Set
=============

The set of font variants marked for download. Selections survive new
searches and are only changed by explicit select/unselect calls or by a
download draining the set. All access goes through one serial executor.
"""

import logging

from fontcatalog.core.models import SelectedFont

from .executors import SerialExecutor

logger = logging.getLogger(__name__)


class SelectionSet:
    """Thread-safe set of (family name, variant id) selections."""

    def __init__(self, executor: SerialExecutor | None = None):
        self.executor = executor or SerialExecutor("selection")
        self._selected: set[SelectedFont] = set()

    def select(self, selection: SelectedFont) -> bool:
        """Add a selection. Returns True, there is now something to download."""

        def _select() -> bool:
            self._selected.add(selection)
            logger.debug(f"Selected {selection}")
            return True

        return self.executor.call(_select)

    def unselect(self, selection: SelectedFont) -> bool:
        """Remove a selection. Returns whether anything is still selected."""

        def _unselect() -> bool:
            self._selected.discard(selection)
            logger.debug(f"Unselected {selection}")
            return bool(self._selected)

        return self.executor.call(_unselect)

    def selected_family_names(self) -> set[str]:
        return self.executor.call(lambda: {s.family_name for s in self._selected})

    def selected_variant_ids(self, family_name: str) -> set[str]:
        return self.executor.call(
            lambda: {s.variant_id for s in self._selected if s.family_name == family_name}
        )

    def snapshot(self) -> list[SelectedFont]:
        """Sorted copy of the current selections."""
        return self.executor.call(lambda: sorted(self._selected))

    def drain(self) -> list[SelectedFont]:
        """Atomically take every selection, sorted, leaving the set empty."""

        def _drain() -> list[SelectedFont]:
            taken = sorted(self._selected)
            self._selected = set()
            return taken

        return self.executor.call(_drain)

    def __contains__(self, selection: SelectedFont) -> bool:
        return self.executor.call(lambda: selection in self._selected)

    def __len__(self) -> int:
        return self.executor.call(lambda: len(self._selected))

    def close(self) -> None:
        self.executor.shutdown()
