"""
Structured logging configuration.

Every module logs through ``logging.getLogger(__name__)``; this module
only decides how the ``accounting_core`` logger tree is rendered.
"""

import json
import logging
from datetime import datetime, timezone

PACKAGE_LOGGER = "accounting_core"

# Extra attributes copied into the JSON payload when a caller passes them
# through ``extra=``.
CONTEXT_FIELDS = ("journal_id", "account_number", "currency")


class JSONFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.module,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                entry[name] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Attach a JSON stream handler to the package logger.

    Safe to call more than once: existing handlers are replaced
    rather than stacked.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger
