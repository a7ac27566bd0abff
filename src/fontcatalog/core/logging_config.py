"""Logging configuration for the font catalog browser."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | int = "INFO") -> None:
    """Configure root logging once for command line use."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    # urllib3 connection chatter drowns out catalog logging at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))
