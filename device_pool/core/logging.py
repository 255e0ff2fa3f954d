"""Process-wide logging setup."""

from __future__ import annotations

import logging

from device_pool.core.config import Settings


def configure_logging(settings: Settings) -> None:
    level = "DEBUG" if settings.debug else settings.logging.level.upper()
    logging.basicConfig(level=level, format=settings.logging.format)
    # SQL echo is controlled by the database settings, not the root level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
