"""Typed messages sent from the web view into the application."""

import logging
from dataclasses import dataclass
from typing import Any

from fontcatalog.core.exceptions import FontLookupError
from fontcatalog.core.models import SelectedFont

logger = logging.getLogger(__name__)

LOAD_PAGE = "loadPage"
SELECT_FONT = "selectFont"
UNSELECT_FONT = "unselectFont"


@dataclass(frozen=True)
class LoadPage:
    page: int


@dataclass(frozen=True)
class SelectFont:
    selection: SelectedFont


@dataclass(frozen=True)
class UnselectFont:
    selection: SelectedFont


UiMessage = LoadPage | SelectFont | UnselectFont


def parse_message(name: str, body: Any) -> UiMessage | None:
    """Turn a raw bridge message into a typed one, or None if malformed."""
    if name == LOAD_PAGE:
        # whole-number floats are page numbers, bools never are
        if isinstance(body, float) and body.is_integer():
            body = int(body)
        if not isinstance(body, int) or isinstance(body, bool):
            logger.error("Invalid page load request (not a number)!")
            return None
        return LoadPage(body)

    if name in (SELECT_FONT, UNSELECT_FONT):
        if not isinstance(body, str):
            logger.error("Invalid un/selection (not a string)!")
            return None
        try:
            selection = SelectedFont.from_font_id(body)
        except FontLookupError as e:
            logger.error(f"Unable to lookup font: {e}")
            return None
        return SelectFont(selection) if name == SELECT_FONT else UnselectFont(selection)

    logger.error(f"Unexpected javascript event: {name}")
    return None
