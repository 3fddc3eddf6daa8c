import logging
from logging.handlers import RotatingFileHandler

import pytest

from expocredits.core.config import LoggingSettings, Settings
from expocredits.core.logging import setup_logging


@pytest.fixture()
def restore_loggers():
    root = logging.getLogger()
    service = logging.getLogger("expocredits")
    saved = (root.level, service.level, list(service.handlers), service.propagate)
    yield
    root.setLevel(saved[0])
    service.setLevel(saved[1])
    for handler in service.handlers:
        handler.close()
    service.handlers = saved[2]
    service.propagate = saved[3]


def test_handlers_go_on_service_logger(restore_loggers):
    root_level = logging.getLogger().level

    setup_logging(Settings(_env_file=None, logging=LoggingSettings(level="DEBUG")))

    service = logging.getLogger("expocredits")
    assert service.level == logging.DEBUG
    assert service.propagate is False
    assert len(service.handlers) == 1
    assert logging.getLogger().level == root_level


def test_repeated_setup_does_not_duplicate_handlers(restore_loggers):
    setup_logging(Settings(_env_file=None))
    setup_logging(Settings(_env_file=None))

    assert len(logging.getLogger("expocredits").handlers) == 1


def test_rotating_file_handler(restore_loggers, tmp_path):
    log_file = tmp_path / "logs" / "wallet.log"

    setup_logging(Settings(_env_file=None, logging=LoggingSettings(file=log_file)))

    handlers = logging.getLogger("expocredits").handlers
    assert any(isinstance(handler, RotatingFileHandler) for handler in handlers)
    assert log_file.parent.is_dir()
