"""
Logging setup for Sadhana Coach.

Plain console lines in development, one JSON object per line when running
on Cloud Run (CLOUD_RUN=true).
"""
import json
import logging
import os
import sys

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Structured log line. Request context passed via extra= is copied through."""

    EXTRA_FIELDS = ("session_id", "user_id", "pose_id")

    def format(self, record):
        log_obj = {
            'timestamp': self.formatTime(record, '%Y-%m-%dT%H:%M:%S'),
            'severity': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'line': record.lineno,
        }

        if record.exc_info:
            log_obj['exception'] = self.formatException(record.exc_info)

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_obj[field] = getattr(record, field)

        return json.dumps(log_obj)


def _log_level() -> int:
    # LOG_LEVEL is shared with uvicorn, which expects lowercase names
    return getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger (typically get_logger(__name__)).

    The handler is attached on first use only, so repeated calls return the
    same configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_log_level())

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    if os.getenv("CLOUD_RUN", "false").lower() == "true":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    logger.addHandler(handler)

    return logger
