"""
Logging utilities: console/file setup for scripts and a queue handler
for front ends that want to show pipeline logs (export warnings etc.).
"""
from __future__ import annotations

import logging
from pathlib import Path
from queue import Queue
from typing import Optional, Union

PACKAGE_LOGGER = "worksheet_toolkit"
LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class QueueLogHandler(logging.Handler):
    """
    A logging handler that sends log records to a queue.
    
    Each record becomes a ``(message, level)`` tuple so a UI can show it
    without knowing about logging.
    """
    
    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter("%(message)s"))
    
    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            level = record.levelname
            # Map DEBUG to INFO for display
            if level == "DEBUG":
                level = "INFO"
            self.log_queue.put((message, level))
        except Exception:
            self.handleError(record)


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = PACKAGE_LOGGER,
    level: int = logging.INFO,
) -> QueueLogHandler:
    """
    Attach a QueueLogHandler to the specified logger (package logger by default).
    
    Args:
        log_queue: Queue to send log messages to.
        logger_name: Name of logger to attach to. None = root logger.
        level: Minimum level forwarded to the queue.
        
    Returns:
        The attached handler (for later removal).
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue, level)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = PACKAGE_LOGGER) -> None:
    """
    Remove a QueueLogHandler from the specified logger.
    
    Args:
        handler: The handler to remove.
        logger_name: Name of logger to detach from. None = root logger.
    """
    logger = logging.getLogger(logger_name)
    logger.removeHandler(handler)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Configure console (and optional file) logging for the package logger.
    
    Safe to call more than once: handlers installed by a previous call
    are replaced, not duplicated.
    
    Args:
        level: Log level (int or name like "DEBUG")
        log_file: Optional path to also write logs to
        
    Returns:
        The configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    
    for handler in list(logger.handlers):
        if getattr(handler, "_worksheet_toolkit", False):
            logger.removeHandler(handler)
            handler.close()
    
    formatter = logging.Formatter(LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    
    for handler in handlers:
        handler.setFormatter(formatter)
        handler._worksheet_toolkit = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    
    return logger
