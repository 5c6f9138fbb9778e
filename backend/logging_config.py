"""Root logger setup."""

import logging

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def build_handler(json_output: bool = False) -> logging.Handler:
    handler = logging.StreamHandler()
    if json_output:
        handler.setFormatter(JsonFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure the root logger once, plain text or JSON lines."""
    logging.basicConfig(level=level.upper(), handlers=[build_handler(json_output)])
    logging.getLogger("httpx").setLevel(logging.WARNING)
