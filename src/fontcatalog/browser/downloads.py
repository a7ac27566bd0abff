"""
Font Downloader
===============

Writes selected font variants to a destination directory. A failure on one
file is logged and the batch moves on to the next selection.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from tqdm import tqdm

from fontcatalog.core.exceptions import DestinationWriteError, FontLookupError, FontWriteError
from fontcatalog.core.models import SelectedFont
from fontcatalog.fonts.manager import FontManager

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


@dataclass
class DownloadReport:
    """Outcome of a download batch."""

    destination: Path
    written: list[Path] = field(default_factory=list)
    failed: list[SelectedFont] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.written) + len(self.failed)

    @property
    def success_rate(self) -> float:
        if self.total == 0:
            return 100.0
        return len(self.written) / self.total * 100.0


def write_font(path: Path, data: bytes) -> None:
    """Write font data, replacing any existing file.

    Raises:
        FontWriteError: if the file cannot be written
    """
    try:
        path.write_bytes(data)
    except OSError as e:
        raise DestinationWriteError(str(path), str(e)) from e


class FontDownloader:
    """Downloads batches of selections through the font manager."""

    def __init__(
        self,
        manager: FontManager,
        status: StatusCallback | None = None,
        writer: Callable[[Path, bytes], None] = write_font,
        show_progress: bool = False,
    ):
        self.manager = manager
        self.status = status or (lambda text: None)
        self.writer = writer
        self.show_progress = show_progress

    def download_batch(
        self, selections: Sequence[SelectedFont], destination: str | Path
    ) -> DownloadReport:
        """Download every selection, in order, into ``destination``."""
        destination = Path(destination)
        report = DownloadReport(destination=destination)
        logger.info(f"Attempting to save {len(selections)} fonts to {destination}")

        try:
            destination.mkdir(parents=True, exist_ok=True)
        except OSError:
            logger.exception(f"Cannot create download directory {destination}")
            report.failed.extend(selections)
            return report

        with tqdm(
            total=len(selections), desc="Downloading fonts", unit="font", disable=not self.show_progress
        ) as progress:
            for selection in selections:
                path = self._download_one(selection, destination)
                if path is None:
                    report.failed.append(selection)
                else:
                    report.written.append(path)
                progress.update(1)

        logger.info(
            f"Font downloads complete: {len(report.written)} written, {len(report.failed)} failed"
        )
        return report

    def _download_one(self, selection: SelectedFont, destination: Path) -> Path | None:
        try:
            family = self.manager.resolve(selection)
        except FontLookupError as e:
            logger.error(f"Skipping {selection}: {e}")
            return None

        variant = family.variants[selection.variant_id]
        path = destination / variant.filename
        logger.debug(f"Font filename {path}")

        self.status(f"Downloading {variant.filename}...")
        data = self.manager.download(selection)
        if data is None:
            logger.error(f"Failed to download {variant.filename}")
            return None

        self.status(f"Saving {variant.filename}...")
        try:
            self.writer(path, data)
        except FontWriteError as e:
            logger.error(f"Failed to save font: {e}")
            return None
        return path
