"""Logging setup for the woosync command line."""

from __future__ import annotations

import logging
from typing import Final

HTTP_LOGGERS: Final[tuple[str, ...]] = ("httpx", "httpcore")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    The HTTP client libraries log every request and response line. They stay at
    WARNING unless ``level`` asks for debug output.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    http_level = logging.NOTSET if level <= logging.DEBUG else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)
