"""Logging configuration for URL shortener."""

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOGGER_NAME = "url_shortener"

PACKAGES = {
    "auth", "cache", "config", "controller", "db", "middleware",
    "model", "route", "service", "utils",
}

# Attributes every LogRecord carries; anything else came in through ``extra``
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message", "asctime", "taskName",
}


def package_for(logger_name: str) -> str:
    """Map a logger name such as ``url_shortener.route`` to its package tag."""
    leaf = logger_name.rsplit(".", 1)[-1]
    return leaf if leaf in PACKAGES else "service"


# Level names understood by the log collector
_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "fatal",
}


def level_name(levelno: int) -> str:
    """Collector level for a stdlib level number."""
    for threshold in sorted(_LEVEL_NAMES, reverse=True):
        if levelno >= threshold:
            return _LEVEL_NAMES[threshold]
    return "debug"


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, package, message plus context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": level_name(record.levelno),
            "logger": record.name,
            "package": package_for(record.name),
            "message": record.getMessage(),
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                entry[key] = value

        if record.exc_info:
            entry["error"] = {
                "message": str(record.exc_info[1]),
                "stack": self.formatException(record.exc_info),
            }

        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    telemetry_url: Optional[str] = None,
    access_token: Optional[str] = None,
) -> logging.Logger:
    """Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path
        json_format: Whether to use JSON format
        telemetry_url: Optional remote collector receiving every record
        access_token: Bearer token for the remote collector

    Returns:
        Configured logger
    """
    # Imported here, telemetry depends on package_for above
    from .telemetry import attach_telemetry, detach_telemetry

    # Convert level string to logging constant
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Create logger
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(numeric_level)

    # Remove existing handlers
    detach_telemetry(logger)
    logger.handlers.clear()

    # Create formatter
    if json_format:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Daily rotated file handler (if specified)
    if log_file:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file, when="midnight", utc=True, encoding="utf-8"
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Remote forwarding (if configured)
    if telemetry_url and access_token:
        attach_telemetry(logger, telemetry_url, access_token, level=numeric_level)

    return logger

