"""Logging utilities for proofreader commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "proofreader"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the proofreader hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


class FileLogAdapter(logging.LoggerAdapter):
    """Prefixes messages with the project path of the module they concern."""

    def process(self, msg, kwargs):  # type: ignore[no-untyped-def]
        kwargs.setdefault("extra", {}).update(self.extra)
        return f"{self.extra['module_path']}: {msg}", kwargs


def file_logger(logger: logging.Logger, module_path: str) -> FileLogAdapter:
    """Return a view of ``logger`` bound to one module file."""
    return FileLogAdapter(logger, {"module_path": module_path})


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the proofreader logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[proofreader] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["FileLogAdapter", "configure_logging", "file_logger", "get_logger"]
