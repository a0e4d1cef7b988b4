"""One-shot logging configuration for scripts and embedding hosts."""

from __future__ import annotations

import logging

from motionsight.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or default_settings
    logging.basicConfig(
        level=getattr(logging, settings.motionsight_log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
