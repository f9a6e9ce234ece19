"""Logger setup for the eventmeta CLI and service.

Scan diagnostics carry the location they refer to (source file, target and
line) as record attributes. The console shows the message alone; the
optional log file adds the location columns so it can be grepped per file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

_LOGGER_NAME = "eventmeta"
_CONSOLE_FORMAT = "[eventmeta] %(levelname)s %(message)s"
_FILE_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    "[%(source_file)s %(target)s line=%(source_line)s] %(message)s"
)
_LOCATION_DEFAULT = "-"
_LOCATION_FIELDS = ("source_file", "target", "source_line")


class LocationFilter(logging.Filter):
    """Gives every record the location attributes used by the file format."""

    def filter(self, record: logging.LogRecord) -> bool:
        for name in _LOCATION_FIELDS:
            if getattr(record, name, None) is None:
                setattr(record, name, _LOCATION_DEFAULT)
        return True


def location_extra(
    source_file: Optional[str] = None,
    target: Optional[str] = None,
    line: Optional[int] = None,
) -> Dict[str, object]:
    """Build the `extra=` mapping that attaches a scan location to a record."""
    return {"source_file": source_file, "target": target, "source_line": line}


def get_logger(name: str | None = None) -> logging.Logger:
    """Return `eventmeta` or a child logger such as `eventmeta.scanner`."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Install console output, plus a location-aware file sink when `log_file` is set.

    Calling this again replaces the handlers from the previous call.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(level)
        # Filters on the handler also see records from child loggers.
        sink.addFilter(LocationFilter())
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)

    return logger


__all__ = ["LocationFilter", "configure_logging", "get_logger", "location_extra"]
