"""Logging setup shared by the command line entry points."""

import logging

from gcsbench.core.const import MAX_LOGGED_URL_LENGTH

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a concise, consistent format."""
    if logging.getLogger().handlers:
        logging.getLogger().setLevel(level)
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler])


def shorten_url(url: str) -> str:
    """Truncate long session URLs for log output."""
    if len(url) > MAX_LOGGED_URL_LENGTH:
        return url[:MAX_LOGGED_URL_LENGTH] + "..."
    return url
