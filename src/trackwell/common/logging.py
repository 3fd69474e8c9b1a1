"""JSON-lines logging for Trackwell.

Services pass ledger context through ``extra=``; any of the keys in
``CONTEXT_FIELDS`` found on a record are copied into the JSON line so
refused operations can be traced per product and caller.
"""

import json
import logging
import sys
from datetime import datetime, timezone

CONTEXT_FIELDS = ("product_id", "caller")


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info and record.exc_info[1]:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """Attach a single JSON handler to the ``trackwell`` logger tree."""
    logger = logging.getLogger("trackwell")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h.formatter, JSONFormatter) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.propagate = False
    return logger
