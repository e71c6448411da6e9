import logging
from logging.handlers import RotatingFileHandler

from core.config import ConfigManager, DictConfigLoader
from core.logging import setup_logging


def test_setup_logging_with_file(tmp_path):
    log_path = tmp_path / "logs" / "webunit.log"
    manager = ConfigManager(loader=DictConfigLoader({
        "server": {"log_level": "debug"},
        "webunit": {"password": "pw"},
        "logging": {"file": {"path": str(log_path), "backup_count": 2}},
    }))
    setup_logging(manager)
    try:
        root_logger = logging.getLogger("webunit")
        assert root_logger.level == logging.DEBUG
        file_handlers = [h for h in root_logger.handlers if isinstance(h, RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].backupCount == 2
        assert log_path.parent.is_dir()
    finally:
        for handler in logging.getLogger("webunit").handlers:
            handler.close()
        logging.getLogger("webunit").handlers = []
        logging.getLogger("webunit").setLevel(logging.NOTSET)


def test_setup_logging_console_only():
    manager = ConfigManager(loader=DictConfigLoader({"server": {}, "webunit": {"password": "pw"}}))
    setup_logging(manager)
    try:
        handlers = logging.getLogger("webunit").handlers
        assert len(handlers) == 1
        assert not isinstance(handlers[0], RotatingFileHandler)
    finally:
        logging.getLogger("webunit").handlers = []
        logging.getLogger("webunit").setLevel(logging.NOTSET)
