"""
Logging for the tracker package.

Modules log through ``logging.getLogger(__name__)``; setup_logging()
attaches the handlers to the package logger once. The CLI calls it at
startup, library users may call it or configure logging themselves.
"""

from __future__ import annotations

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Iterable, Optional, Union

from ffxiv_tracker.errors import ConfigurationError

PACKAGE_LOGGER = "ffxiv_tracker"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_CONSOLE_HANDLER = "ffxiv_tracker.console"
_FILE_HANDLER = "ffxiv_tracker.file"

# Connection-pool chatter from requests; retries are already logged here
NOISY_LOGGERS = ("urllib3",)


def resolve_level(level: Union[int, str]) -> int:
    """Accept a numeric level or a name such as "debug"."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ConfigurationError(f"Unknown log level: {level}")
    return resolved


def _find_handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def setup_logging(
    log_dir: Optional[Path] = None,
    level: Union[int, str] = logging.INFO,
    log_file: str = "ffxiv_tracker.log",
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> logging.Logger:
    """
    Attach console and (optionally) rotating file handlers to the
    package logger and return it.

    Calling again adjusts the level of the existing handlers and adds
    the file handler if a log directory is given for the first time;
    handlers are never duplicated.
    """
    numeric_level = resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = _find_handler(logger, _CONSOLE_HANDLER)
    if console is None:
        # stdout is reserved for command output
        console = logging.StreamHandler(sys.stderr)
        console.set_name(_CONSOLE_HANDLER)
        console.setFormatter(formatter)
        logger.addHandler(console)
    console.setLevel(numeric_level)

    file_handler = _find_handler(logger, _FILE_HANDLER)
    if file_handler is None and log_dir is not None:
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_dir / log_file,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8",
            )
        except OSError as e:
            logger.warning("Could not set up file logging in %s: %s", log_dir, e)
        else:
            file_handler.set_name(_FILE_HANDLER)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
    if file_handler is not None:
        file_handler.setLevel(numeric_level)

    for name in quiet:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logger
