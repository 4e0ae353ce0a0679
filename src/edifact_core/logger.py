"""
Logging for edifact_core.

Library modules only call get_logger(). Handlers are attached by
setup_logger(), or by configure_logging() when a ConverterConfig names a
log directory, so an application that configures logging itself is left
alone.
"""
import logging
import time
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .config import ConverterConfig

LOGGER_NAME = "edifact_core"
LOG_FILE_PREFIX = "edifact_"
FILE_FORMAT = "%(asctime)s | %(levelname)-8s | %(threadName)s | %(name)s | %(message)s"
CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"
SECONDS_PER_DAY = 24 * 60 * 60


def setup_logger(
    log_dir: Union[str, Path] = "logs",
    log_retention_days: int = 10,
    console: bool = True,
) -> logging.Logger:
    """
    Attach a DEBUG file handler (and an INFO console handler) to the
    edifact_core logger, replacing any handlers set up earlier.

    Args:
        log_dir: Directory for edifact_<timestamp>.log files
        log_retention_days: Our log files older than this are deleted first
        console: Also echo INFO and above to stderr

    Returns:
        The edifact_core logger
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    removed = cleanup_old_logs(log_path, log_retention_days)

    logger = get_logger()
    logger.setLevel(logging.DEBUG)
    _detach_handlers(logger)

    log_file = log_path / f"{LOG_FILE_PREFIX}{datetime.now():%Y%m%d_%H%M%S}.log"
    logger.addHandler(_file_handler(log_file))
    if console:
        logger.addHandler(_console_handler())

    logger.info(f"Logging to {log_file}")
    if removed:
        logger.debug(f"Removed {removed} log file(s) older than {log_retention_days} days")
    return logger


def configure_logging(config: ConverterConfig) -> Optional[logging.Logger]:
    """
    Apply the logging settings of a ConverterConfig.

    Does nothing when log_dir is unset, or when the logger already writes
    into that directory (several Converters may share one config).
    """
    if not config.log_dir:
        return None

    logger = get_logger()
    if _writes_to(logger, Path(config.log_dir)):
        return logger
    return setup_logger(config.log_dir, config.log_retention_days)


def cleanup_old_logs(log_dir: Path, retention_days: int) -> int:
    """
    Delete edifact_*.log files older than retention_days.

    Other files in the directory are never touched.

    Returns:
        Number of files deleted
    """
    if not log_dir.exists():
        return 0

    cutoff = time.time() - retention_days * SECONDS_PER_DAY
    deleted = 0
    for log_file in log_dir.glob(f"{LOG_FILE_PREFIX}*.log"):
        try:
            if log_file.stat().st_mtime < cutoff:
                log_file.unlink()
                deleted += 1
        except OSError as e:
            get_logger().debug(f"Could not remove old log {log_file}: {e}")
    return deleted


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.FileHandler(log_file, encoding='utf-8')
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt='%H:%M:%S'))
    return handler


def _detach_handlers(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def _writes_to(logger: logging.Logger, log_dir: Path) -> bool:
    target = log_dir.resolve()
    return any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve().parent == target
        for h in logger.handlers
    )
