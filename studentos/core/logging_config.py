"""
Logging setup for the StudentOS backend.

Everything goes through the stdlib ``logging`` root logger. A console handler
is always installed; a size-rotated ``studentos.log`` file is added when
``ENABLE_FILE_LOGGING`` is on. ``LOG_FORMAT`` picks one of the layouts in
``FORMATS`` and noisy third-party loggers are pinned by ``MODULE_LOG_LEVELS``.

The module configures logging once on import so that any ``get_logger`` call
already has somewhere to write.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from studentos.server.core.config import settings

LOG_LEVEL = settings.log_level.upper()
LOG_FORMAT = settings.log_format
LOG_FILE_DIR = settings.log_file_dir
ENABLE_FILE_LOGGING = settings.enable_file_logging

LOG_FILE_NAME = "studentos.log"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)
FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

MODULE_LOG_LEVELS = {
    "studentos.core": "INFO",
    "studentos.core.database": "INFO",
    "studentos.server": "INFO",
    "studentos.server.api": "DEBUG",
    "studentos.server.services": "DEBUG",
    "studentos.server.middleware": "INFO",
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "sqlalchemy.pool": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "passlib": "ERROR",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    directory = Path(LOG_FILE_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        directory / LOG_FILE_NAME,
        maxBytes=LOG_FILE_MAX_BYTES,
        backupCount=LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    # The file keeps DEBUG records whatever the console level is.
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    (Re)configure the root logger.

    Handlers installed by a previous call are replaced, so calling this more
    than once never duplicates output.

    Args:
        log_level: Console level, defaults to ``STUDENTOS_LOG_LEVEL``.
        log_format: ``simple``, ``detailed`` or ``json``; anything else means ``detailed``.
        enable_file: Allow the rotating file handler. It is only added when
            ``ENABLE_FILE_LOGGING`` is also on.
    """
    level = (log_level or LOG_LEVEL).upper()
    layout = log_format or LOG_FORMAT
    formatter = logging.Formatter(FORMATS.get(layout, DETAILED_FORMAT), datefmt=DATE_FORMAT)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(formatter)
    root.addHandler(console)

    to_file = enable_file and ENABLE_FILE_LOGGING
    if to_file:
        root.addHandler(_file_handler(formatter))

    for name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(module_level)

    root.info(f"Logging ready: level={level} format={layout} file={to_file}")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


setup_logging()
