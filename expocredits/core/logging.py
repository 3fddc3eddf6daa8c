"""Logging configuration for the wallet service.

Installs a console handler on the ``expocredits`` logger and, when
``logging.file`` is configured, a rotating file handler next to it. Records do
not propagate to the root logger.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler

from expocredits.core.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    service_logger = logging.getLogger("expocredits")
    service_logger.setLevel(level)
    # Avoid duplicate handlers if setup_logging is called multiple times
    service_logger.handlers = []
    service_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    service_logger.addHandler(console_handler)

    if settings.logging.file is not None:
        log_file = settings.logging.file
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=settings.logging.max_bytes,
            backupCount=settings.logging.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        service_logger.addHandler(file_handler)

    # Keep SQLAlchemy quiet unless SQL echo is requested explicitly
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database.echo else logging.WARNING
    )


__all__ = ["setup_logging"]
