"""Logging setup for the BizLedger backend.

Modules log through ``logging.getLogger(__name__)``; everything lives under the
``backend`` logger so a single handler covers the whole application.
"""

import logging
import sys

ROOT_LOGGER_NAME = "backend"

_HANDLER_MARKER = "_bizledger_handler"


class KeyValueFormatter(logging.Formatter):
    """Render records as ``ts level logger message key=value ...``."""

    _RESERVED = set(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._RESERVED and not key.startswith("_")
        }
        if not extras:
            return base
        rendered = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} {rendered}"


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach one stream handler to the application logger; safe to call repeatedly."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)

    if not any(getattr(handler, _HANDLER_MARKER, False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        setattr(handler, _HANDLER_MARKER, True)
        logger.addHandler(handler)
    return logger


def reset_logging() -> None:
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
