import logging
import sys

from servicedesk.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Transport and font libraries that log every request or subset at INFO/DEBUG.
NOISY_LOGGERS = ("httpx", "httpcore", "fontTools")


def configure_logging(level: str | None = None) -> None:
    """Install a single stderr handler on the root logger.

    ``level`` overrides ``SERVICEDESK_LOG_LEVEL`` for this process.
    """
    name = (level or settings.log_level).upper()
    handler = logging.StreamHandler(sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(JsonFormatter(fmt=JSON_FORMAT, rename_fields={"asctime": "timestamp", "levelname": "level"}))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(getattr(logging, name, logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
